from sqlalchemy.orm import Session
from backend.crud.learning_plan import commit_or_conflict, ensure_owner, get_learning_plan
from backend.errors import InvalidArgumentError, NotFoundError
from backend.models import LearningPlan, Topic, User
from backend.progress import ProgressTracker
from typing import Optional

def get_topic(db: Session, topic_id: int) -> Optional[Topic]:
    """Get topic by ID"""
    return db.query(Topic).filter(Topic.id == topic_id).first()

def save_topic(db: Session, topic: Topic) -> Topic:
    """Persist changes to a single topic"""
    db.add(topic)
    db.commit()
    db.refresh(topic)
    return topic

def toggle_topic_completion(db: Session, plan_id: int, topic_id: int, user: User) -> LearningPlan:
    """
    Flip a topic's completed flag and recompute the plan's completion.

    Raises:
        NotFoundError: plan or topic does not exist
        InvalidArgumentError: topic belongs to a different plan
        UnauthorizedError: caller does not own the plan
    """
    plan = get_learning_plan(db, plan_id)
    if not plan:
        raise NotFoundError("Learning plan not found")

    topic = get_topic(db, topic_id)
    if not topic:
        raise NotFoundError("Topic not found")

    if topic.learning_plan_id != plan.id:
        raise InvalidArgumentError("Topic does not belong to the specified learning plan")

    ensure_owner(plan, user)

    ProgressTracker.toggle(topic)
    db.flush()

    # topic is the same identity-mapped object held in plan.topics
    ProgressTracker.refresh_plan(plan)
    commit_or_conflict(db)
    db.refresh(plan)
    return plan
