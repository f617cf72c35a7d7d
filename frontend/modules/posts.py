"""Post feed with likes"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.crud import create_post, get_posts, delete_post, like_post, unlike_post
from backend.errors import LearningPlanError
from backend.schemas import PostCreate, post_to_response


def show_posts_page(db, user):
    """Display the post composer and the feed, newest first"""
    st.title("💬 Posts")

    with st.form("new_post", clear_on_submit=True):
        description = st.text_area("What are you learning?")
        url = st.text_input("Image URL (optional)")
        if st.form_submit_button("Post"):
            _run_action(lambda: create_post(db, PostCreate(description=description, url=url or None), user))

    st.divider()

    posts = get_posts(db)
    if not posts:
        st.info("No posts yet. Share what you're working on!")
        return

    for post in map(post_to_response, posts):
        _show_post(db, user, post)


def _show_post(db, user, post):
    author = post.user.name if post.user else "Unknown"
    st.markdown(f"**{author}** · {post.created_at:%Y-%m-%d %H:%M}" if post.created_at else f"**{author}**")
    st.write(post.description)
    if post.url:
        st.image(post.url)

    col1, col2, col3 = st.columns([1, 1, 3])
    with col1:
        if user.id in post.liked_by:
            if st.button(f"💔 Unlike ({post.like_count})", key=f"unlike_{post.id}"):
                _run_action(lambda: unlike_post(db, post.id, user))
        elif st.button(f"❤️ Like ({post.like_count})", key=f"like_{post.id}"):
            _run_action(lambda: like_post(db, post.id, user))
    with col2:
        if post.user and post.user.id == user.id and st.button("🗑️ Delete", key=f"delete_post_{post.id}"):
            _run_action(lambda: delete_post(db, post.id, user))
    st.divider()


def _run_action(action):
    """Run a CRUD call, surface typed failures, and refresh the page"""
    try:
        action()
    except LearningPlanError as e:
        st.error(e.message)
        return
    st.rerun()
