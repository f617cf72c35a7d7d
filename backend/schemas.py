from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class UserCreate(BaseModel):
    """Schema for creating a user"""
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture: Optional[str] = None

class UserResponse(UserCreate):
    """Schema for user response"""
    id: int

    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    """Owner details embedded in a plan response"""
    id: int
    name: str
    username: str
    profile_picture: Optional[str] = None

class TopicCreate(BaseModel):
    """Schema for a topic supplied with a plan"""
    title: str
    completed: bool = False

class ResourceCreate(BaseModel):
    """Schema for a resource supplied with a plan"""
    title: str
    url: str
    type: str = "link"  # video, document, link

class LearningPlanCreate(BaseModel):
    """Schema for a user-authored learning plan"""
    title: str
    description: Optional[str] = None
    subject: Optional[str] = None
    estimated_days: int = Field(default=30, gt=0)
    topics: List[TopicCreate] = []
    resources: List[ResourceCreate] = []

class LearningPlanUpdate(BaseModel):
    """
    Schema for replacing a plan's editable fields.

    topics/resources left as None keep the stored children. version, when
    given, must match the stored plan or the update is rejected.
    """
    title: str
    description: Optional[str] = None
    subject: Optional[str] = None
    estimated_days: int = Field(default=30, gt=0)
    topics: Optional[List[TopicCreate]] = None
    resources: Optional[List[ResourceCreate]] = None
    version: Optional[int] = None

class LearningPlanGenerationRequest(BaseModel):
    """Schema for auto-generating a learning plan"""
    subject: Optional[str] = None
    difficulty: Optional[str] = None  # beginner, intermediate, advanced
    estimated_days: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = None

class PostCreate(BaseModel):
    """Schema for creating a post"""
    description: str
    url: Optional[str] = None

class PostUpdate(BaseModel):
    """Blank or missing fields keep the stored value"""
    description: Optional[str] = None
    url: Optional[str] = None

class TopicResponse(BaseModel):
    id: int
    title: str
    completed: bool

    class Config:
        from_attributes = True

class ResourceResponse(BaseModel):
    id: int
    title: str
    url: str
    type: str

    class Config:
        from_attributes = True

class LearningPlanResponse(BaseModel):
    """Fully materialized learning plan, safe to serialize"""
    id: int
    title: str
    description: Optional[str] = None
    subject: Optional[str] = None
    completion_percentage: float
    estimated_days: int
    followers: int
    following: bool
    created_at: Optional[datetime] = None
    version: int
    user: Optional[UserSummary] = None
    topics: List[TopicResponse] = []
    resources: List[ResourceResponse] = []


def user_to_summary(user) -> UserSummary:
    """Display name falls back to the email when either name part is missing"""
    if user.first_name and user.last_name:
        name = f"{user.first_name} {user.last_name}"
    else:
        name = user.email
    return UserSummary(
        id=user.id,
        name=name,
        username=user.email.split("@")[0],
        profile_picture=user.profile_picture
    )


def plan_to_response(plan) -> LearningPlanResponse:
    """Map a LearningPlan model and its children to a response schema"""
    return LearningPlanResponse(
        id=plan.id,
        title=plan.title,
        description=plan.description,
        subject=plan.subject,
        completion_percentage=plan.completion_percentage,
        estimated_days=plan.estimated_days,
        followers=plan.followers,
        following=plan.following,
        created_at=plan.created_at,
        version=plan.version,
        user=user_to_summary(plan.user) if plan.user else None,
        topics=[TopicResponse.model_validate(t) for t in plan.topics],
        resources=[ResourceResponse.model_validate(r) for r in plan.resources]
    )


def plans_to_responses(plans) -> List[LearningPlanResponse]:
    return [plan_to_response(plan) for plan in plans]


class PostResponse(BaseModel):
    """Post with its author and the ids of users who liked it"""
    id: int
    description: str
    url: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    like_count: int
    liked_by: List[int] = []


def post_to_response(post) -> PostResponse:
    liked_by = [like.user_id for like in post.likes]
    return PostResponse(
        id=post.id,
        description=post.description,
        url=post.url,
        created_at=post.created_at,
        user=user_to_summary(post.user) if post.user else None,
        like_count=len(liked_by),
        liked_by=liked_by
    )
