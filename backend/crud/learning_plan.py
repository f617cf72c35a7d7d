import logging
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from backend.errors import ConflictError, InvalidArgumentError, NotFoundError, UnauthorizedError
from backend.models import LearningPlan, Topic, Resource, User
from backend.progress import ProgressTracker
from backend.schemas import LearningPlanCreate, LearningPlanUpdate
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

def commit_or_conflict(db: Session):
    """Commit, turning an optimistic-lock failure into ConflictError"""
    try:
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning("Stale learning plan write rejected: %s", e)
        raise ConflictError() from e

def create_learning_plan(
    db: Session,
    plan: Union[LearningPlanCreate, LearningPlan],
    user: User,
    commit: bool = True
) -> LearningPlan:
    """
    Save a new learning plan owned by `user`.

    Followers and following are always reset, whatever the input says,
    and the completion percentage is derived from the supplied topics.
    With commit=False the plan is only flushed, so it gets an id but the
    caller owns the transaction.
    """
    if isinstance(plan, LearningPlanCreate):
        db_plan = LearningPlan(
            title=plan.title,
            description=plan.description,
            subject=plan.subject,
            estimated_days=plan.estimated_days,
            topics=[Topic(**topic.model_dump()) for topic in plan.topics],
            resources=[Resource(**resource.model_dump()) for resource in plan.resources]
        )
    else:
        db_plan = plan

    db_plan.user_id = user.id
    db_plan.followers = 0
    db_plan.following = False
    ProgressTracker.refresh_plan(db_plan)

    db.add(db_plan)
    if not commit:
        db.flush()
        return db_plan

    db.commit()
    db.refresh(db_plan)
    logger.info("Created learning plan %s for user %s", db_plan.id, user.id)
    return db_plan

def get_learning_plan(db: Session, plan_id: int) -> Optional[LearningPlan]:
    """Get learning plan by ID"""
    return db.query(LearningPlan).filter(LearningPlan.id == plan_id).first()

def get_learning_plans_by_user(db: Session, user_id: int) -> List[LearningPlan]:
    """Get all plans owned by a user"""
    return db.query(LearningPlan).filter(
        LearningPlan.user_id == user_id
    ).order_by(LearningPlan.id).all()

def get_learning_plans(db: Session, user_id: Optional[str] = None) -> List[LearningPlan]:
    """
    List learning plans, optionally filtered by owner.

    Args:
        user_id: Owner id as received from the caller (may be a string).
            None or blank lists every plan.

    Raises:
        InvalidArgumentError: user_id is not an integer
    """
    if user_id is not None and str(user_id).strip():
        try:
            owner_id = int(str(user_id).strip())
        except ValueError:
            raise InvalidArgumentError(f"Invalid user id: {user_id!r}")
        return get_learning_plans_by_user(db, owner_id)

    return db.query(LearningPlan).order_by(LearningPlan.id).all()

def _get_plan_or_raise(db: Session, plan_id: int) -> LearningPlan:
    db_plan = get_learning_plan(db, plan_id)
    if not db_plan:
        raise NotFoundError("Learning plan not found")
    return db_plan

def ensure_owner(plan: LearningPlan, user: User):
    """Raise UnauthorizedError unless `user` owns `plan`"""
    if plan.user_id != user.id:
        logger.warning("User %s attempted to modify plan %s owned by %s", user.id, plan.id, plan.user_id)
        raise UnauthorizedError()

def update_learning_plan(db: Session, plan_id: int, plan_update: LearningPlanUpdate, user: User) -> LearningPlan:
    """
    Overwrite a plan's editable fields.

    Owner, followers, following and created_at are kept from the stored
    record. Topics and resources are replaced only when supplied.
    """
    db_plan = _get_plan_or_raise(db, plan_id)
    ensure_owner(db_plan, user)

    if plan_update.version is not None and plan_update.version != db_plan.version:
        raise ConflictError(
            f"Learning plan {plan_id} is at version {db_plan.version}, update was based on {plan_update.version}"
        )

    db_plan.title = plan_update.title
    db_plan.description = plan_update.description
    db_plan.subject = plan_update.subject
    db_plan.estimated_days = plan_update.estimated_days

    if plan_update.topics is not None:
        db_plan.topics = [Topic(**topic.model_dump()) for topic in plan_update.topics]
    if plan_update.resources is not None:
        db_plan.resources = [Resource(**resource.model_dump()) for resource in plan_update.resources]

    ProgressTracker.refresh_plan(db_plan)
    commit_or_conflict(db)
    db.refresh(db_plan)
    return db_plan

def delete_learning_plan(db: Session, plan_id: int, user: User):
    """Delete a plan and its topics/resources; only the owner may do this"""
    db_plan = _get_plan_or_raise(db, plan_id)
    ensure_owner(db_plan, user)

    db.delete(db_plan)
    commit_or_conflict(db)
    logger.info("Deleted learning plan %s", plan_id)

def follow_plan(db: Session, plan_id: int, user: User) -> LearningPlan:
    """
    Increment a plan's follower count.

    Not deduplicated: the same user following twice counts twice.
    """
    db_plan = _get_plan_or_raise(db, plan_id)
    db_plan.followers = db_plan.followers + 1
    db_plan.following = True
    commit_or_conflict(db)
    db.refresh(db_plan)
    logger.info("User %s followed plan %s (%s followers)", user.id, plan_id, db_plan.followers)
    return db_plan

def unfollow_plan(db: Session, plan_id: int, user: User) -> LearningPlan:
    """Decrement a plan's follower count, never below zero"""
    db_plan = _get_plan_or_raise(db, plan_id)
    db_plan.followers = max(db_plan.followers - 1, 0)
    db_plan.following = False
    commit_or_conflict(db)
    db.refresh(db_plan)
    logger.info("User %s unfollowed plan %s (%s followers)", user.id, plan_id, db_plan.followers)
    return db_plan
