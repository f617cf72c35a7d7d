from backend.models.user import User
from backend.models.learning_plan import LearningPlan
from backend.models.topic import Topic
from backend.models.resource import Resource
from backend.models.post import Post
from backend.models.like import Like

__all__ = [
    "User",
    "LearningPlan",
    "Topic",
    "Resource",
    "Post",
    "Like"
]
