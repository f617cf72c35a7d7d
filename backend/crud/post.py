import logging
from sqlalchemy.orm import Session
from backend.errors import InvalidArgumentError, NotFoundError, UnauthorizedError
from backend.models import Post, Like, User
from backend.schemas import PostCreate, PostUpdate
from typing import List, Optional

logger = logging.getLogger(__name__)

def create_post(db: Session, post: PostCreate, user: User) -> Post:
    """Create a post authored by `user`; the description must not be blank"""
    if not post.description or not post.description.strip():
        raise InvalidArgumentError("Description cannot be empty")

    db_post = Post(user_id=user.id, description=post.description, url=post.url)
    db.add(db_post)
    db.commit()
    db.refresh(db_post)
    logger.info("Created post %s for user %s", db_post.id, user.id)
    return db_post

def get_post(db: Session, post_id: int) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def get_posts(db: Session) -> List[Post]:
    """All posts, newest first"""
    return db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()

def _get_post_or_raise(db: Session, post_id: int) -> Post:
    db_post = get_post(db, post_id)
    if not db_post:
        raise NotFoundError("Post not found")
    return db_post

def _ensure_author(post: Post, user: User):
    if post.user_id != user.id:
        logger.warning("User %s attempted to modify post %s owned by %s", user.id, post.id, post.user_id)
        raise UnauthorizedError("You do not own this post")

def update_post(db: Session, post_id: int, post_update: PostUpdate, user: User) -> Post:
    """
    Edit a post's description and image URL.

    Only the author may edit. A blank description or a missing url leaves
    the stored value unchanged.
    """
    db_post = _get_post_or_raise(db, post_id)
    _ensure_author(db_post, user)

    if post_update.description and post_update.description.strip():
        db_post.description = post_update.description
    if post_update.url:
        db_post.url = post_update.url

    db.commit()
    db.refresh(db_post)
    return db_post

def delete_post(db: Session, post_id: int, user: User):
    """Delete a post and its likes; only the author may do this"""
    db_post = _get_post_or_raise(db, post_id)
    _ensure_author(db_post, user)

    db.delete(db_post)
    db.commit()
    logger.info("Deleted post %s", post_id)

def like_post(db: Session, post_id: int, user: User) -> Post:
    """
    Record that `user` likes a post.

    Raises:
        NotFoundError: post does not exist
        InvalidArgumentError: user already liked the post
    """
    db_post = _get_post_or_raise(db, post_id)
    if any(like.user_id == user.id for like in db_post.likes):
        raise InvalidArgumentError("User has already liked this post")

    db_post.likes.append(Like(user_id=user.id))
    db.commit()
    db.refresh(db_post)
    return db_post

def unlike_post(db: Session, post_id: int, user: User) -> Post:
    """
    Remove `user`'s like from a post.

    Raises:
        NotFoundError: post does not exist
        InvalidArgumentError: user has not liked the post
    """
    db_post = _get_post_or_raise(db, post_id)
    like = next((like for like in db_post.likes if like.user_id == user.id), None)
    if like is None:
        raise InvalidArgumentError("User has not liked this post")

    db_post.likes.remove(like)
    db.commit()
    db.refresh(db_post)
    return db_post
