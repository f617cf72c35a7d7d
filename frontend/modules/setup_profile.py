"""User profile setup page"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.crud import create_user, get_user_by_email
from backend.schemas import UserCreate


def show_setup_page(db):
    """Display user profile setup form

    Args:
        db: Database session
    """
    st.title("📚 Welcome to Learning Plans!")
    st.markdown("### Let's set up your profile")

    with st.form("user_setup_form"):
        email = st.text_input("Email *", placeholder="e.g., ada@example.com")

        col1, col2 = st.columns(2)
        with col1:
            first_name = st.text_input("First Name")
        with col2:
            last_name = st.text_input("Last Name")

        profile_picture = st.text_input("Profile Picture URL (optional)")

        submitted = st.form_submit_button("Create Profile", type="primary", use_container_width=True)

    if submitted:
        if not email:
            st.error("Please enter an email address")
            return

        existing = get_user_by_email(db, email)
        if existing:
            st.session_state.user_id = existing.id
            st.info(f"Welcome back, {email}!")
            st.rerun()

        user_data = UserCreate(
            email=email,
            first_name=first_name or None,
            last_name=last_name or None,
            profile_picture=profile_picture or None
        )
        new_user = create_user(db, user_data)
        st.session_state.user_id = new_user.id

        st.success(f"✅ Profile created for {email}!")
        st.balloons()
        st.rerun()
