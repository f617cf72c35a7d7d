from backend.crud.user import create_user, get_user, get_user_by_email, update_user
from backend.crud.learning_plan import (
    create_learning_plan,
    get_learning_plan,
    get_learning_plans,
    get_learning_plans_by_user,
    update_learning_plan,
    delete_learning_plan,
    follow_plan,
    unfollow_plan
)
from backend.crud.topic import get_topic, save_topic, toggle_topic_completion
from backend.crud.post import (
    create_post,
    get_post,
    get_posts,
    update_post,
    delete_post,
    like_post,
    unlike_post
)

__all__ = [
    "create_user",
    "get_user",
    "get_user_by_email",
    "update_user",
    "create_learning_plan",
    "get_learning_plan",
    "get_learning_plans",
    "get_learning_plans_by_user",
    "update_learning_plan",
    "delete_learning_plan",
    "follow_plan",
    "unfollow_plan",
    "get_topic",
    "save_topic",
    "toggle_topic_completion",
    "create_post",
    "get_post",
    "get_posts",
    "update_post",
    "delete_post",
    "like_post",
    "unlike_post"
]
