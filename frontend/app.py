"""Learning Plans - Main application file"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from backend.database import SessionLocal, init_db
from backend.crud import get_user

# Import page modules
from modules.setup_profile import show_setup_page
from modules.learning_plans import show_learning_plans_page
from modules.generate_plan import show_generate_plan_page
from modules.progress_report import show_progress_report_page
from modules.posts import show_posts_page

# Initialize database
init_db()

# ===================================================================
# PAGE CONFIGURATION & SESSION STATE
# ===================================================================

st.set_page_config(
    page_title="Learning Plans",
    page_icon="📚",
    layout="wide"
)

if 'user_id' not in st.session_state:
    st.session_state.user_id = 1  # Default user, can be made configurable

# Get database session
@st.cache_resource
def get_db():
    return SessionLocal()

db = get_db()

# ===================================================================
# USER PROFILE CHECK
# ===================================================================

user = get_user(db, st.session_state.user_id)
if not user:
    # Show profile setup page if no user exists
    show_setup_page(db)
    st.stop()

# ===================================================================
# SIDEBAR NAVIGATION
# ===================================================================

st.sidebar.title("📚 Learning Plans")
st.sidebar.markdown(f"**Signed in as:** {user.email}")
st.sidebar.divider()

page = st.sidebar.radio(
    "Navigate",
    ["📋 My Plans", "🌍 All Plans", "✨ Generate Plan", "📊 Progress Report", "💬 Posts"]
)

# ===================================================================
# PAGE ROUTING
# ===================================================================

if page == "📋 My Plans":
    show_learning_plans_page(db, user, only_mine=True)

elif page == "🌍 All Plans":
    show_learning_plans_page(db, user, only_mine=False)

elif page == "✨ Generate Plan":
    show_generate_plan_page(db, user)

elif page == "📊 Progress Report":
    show_progress_report_page(db, user)

elif page == "💬 Posts":
    show_posts_page(db, user)

# ===================================================================
# FOOTER
# ===================================================================

st.sidebar.divider()
st.sidebar.caption("Learning Plans v1.0")
