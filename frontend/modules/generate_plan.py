"""Learning plan generation page"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.config import settings
from backend.generator import get_generator
from backend.schemas import LearningPlanGenerationRequest


def show_generate_plan_page(db, user):
    """Display the plan generation form

    Args:
        db: Database session
        user: Signed-in User object
    """
    st.title("✨ Generate a Learning Plan")
    st.caption("Pick a subject and level; topics and resources are selected for you.")

    with st.form("generate_plan_form"):
        col1, col2 = st.columns(2)
        with col1:
            subject = st.selectbox(
                "Subject *",
                options=["Maths", "English", "Science", "Other"]
            )
            custom_subject = st.text_input("Other subject", placeholder="e.g., History")
        with col2:
            difficulty = st.selectbox(
                "Difficulty *",
                options=["Beginner", "Intermediate", "Advanced"]
            )
            estimated_days = st.number_input(
                "Estimated Days",
                min_value=1,
                max_value=365,
                value=settings.default_estimated_days
            )

        description = st.text_area("Description (optional)")

        submitted = st.form_submit_button("Generate Plan", type="primary")

    if submitted:
        request = LearningPlanGenerationRequest(
            subject=custom_subject if subject == "Other" else subject,
            difficulty=difficulty,
            estimated_days=int(estimated_days),
            description=description or None
        )
        with st.spinner("Generating plan..."):
            plan = get_generator().generate_learning_plan(db, request, user)

        st.success(f"✅ Created '{plan.title}' with {len(plan.topics)} topics")
        for topic in plan.topics:
            st.markdown(f"- {topic.title}")
