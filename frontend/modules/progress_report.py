"""Progress report across the user's learning plans"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.crud import get_learning_plans_by_user
from utils.helpers import plans_to_dataframe


def show_progress_report_page(db, user):
    """Display completion metrics for the user's plans

    Args:
        db: Database session
        user: Signed-in User object
    """
    st.title("📊 Learning Progress Report")

    plans = get_learning_plans_by_user(db, user.id)
    if not plans:
        st.info("No learning plans to report on yet.")
        return

    df = plans_to_dataframe(plans)

    _show_key_metrics(df)
    st.divider()
    _show_plan_progress(df)
    _show_subject_summary(df)


def _show_key_metrics(df):
    """Display key metrics at the top"""
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Plans", len(df))
    with col2:
        st.metric("Topics Completed", f"{int(df['completed_topics'].sum())}/{int(df['total_topics'].sum())}")
    with col3:
        st.metric("Average Completion", f"{df['completion_percentage'].mean():.0f}%")


def _show_plan_progress(df):
    """Display a progress bar per plan"""
    st.subheader("📚 Plan Progress")

    for _, row in df.iterrows():
        col_name, col_bar = st.columns([2, 3])
        with col_name:
            st.markdown(f"**{row['title']}**")
        with col_bar:
            st.progress(row['completion_percentage'] / 100.0, text=f"{row['completion_percentage']:.0f}%")


def _show_subject_summary(df):
    """Aggregate completion by subject"""
    st.subheader("🧭 By Subject")
    summary = df.groupby("subject").agg(
        plans=("title", "count"),
        avg_completion=("completion_percentage", "mean")
    ).reset_index()
    st.dataframe(summary, use_container_width=True, hide_index=True)
