"""Learning plan list page with topic progress tracking"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.crud import (
    get_learning_plans,
    toggle_topic_completion,
    follow_plan,
    unfollow_plan,
    delete_learning_plan
)
from backend.errors import LearningPlanError
from backend.schemas import plans_to_responses
from utils.helpers import resource_icon


def show_learning_plans_page(db, user, only_mine=True):
    """Display learning plans as expandable cards

    Args:
        db: Database session
        user: Signed-in User object
        only_mine: List only plans the user owns
    """
    st.title("📋 My Learning Plans" if only_mine else "🌍 All Learning Plans")

    plans = get_learning_plans(db, str(user.id) if only_mine else None)
    if not plans:
        st.info("No learning plans yet. Generate one from the sidebar!")
        return

    for plan in plans_to_responses(plans):
        _show_plan_card(db, user, plan)


def _show_plan_card(db, user, plan):
    """Render one plan with topic checkboxes and actions"""
    is_owner = plan.user is not None and plan.user.id == user.id

    with st.expander(f"{plan.title} - {plan.completion_percentage:.0f}% complete", expanded=is_owner):
        if plan.description:
            st.markdown(plan.description)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Estimated Days", plan.estimated_days)
        with col2:
            st.metric("Followers", plan.followers)
        with col3:
            owner_name = plan.user.name if plan.user else "Unknown"
            st.caption(f"By {owner_name}")

        st.progress(plan.completion_percentage / 100.0)

        st.markdown("**Topics**")
        for topic in plan.topics:
            checked = st.checkbox(
                topic.title,
                value=topic.completed,
                key=f"topic_{plan.id}_{topic.id}",
                disabled=not is_owner
            )
            if checked != topic.completed:
                _run_action(lambda: toggle_topic_completion(db, plan.id, topic.id, user))

        if plan.resources:
            st.markdown("**Resources**")
            for resource in plan.resources:
                st.markdown(f"{resource_icon(resource.type)} [{resource.title}]({resource.url})")

        _show_action_buttons(db, user, plan, is_owner)


def _show_action_buttons(db, user, plan, is_owner):
    """Follow/unfollow and delete buttons"""
    col1, col2, col3 = st.columns([1, 1, 2])
    with col1:
        if plan.following:
            if st.button("Unfollow", key=f"unfollow_{plan.id}"):
                _run_action(lambda: unfollow_plan(db, plan.id, user))
        elif st.button("Follow", key=f"follow_{plan.id}"):
            _run_action(lambda: follow_plan(db, plan.id, user))
    with col2:
        if is_owner and st.button("🗑️ Delete", key=f"delete_{plan.id}"):
            _run_action(lambda: delete_learning_plan(db, plan.id, user))


def _run_action(action):
    """Run a CRUD call, surface typed failures, and refresh the page"""
    try:
        action()
    except LearningPlanError as e:
        st.error(e.message)
        return
    st.rerun()
