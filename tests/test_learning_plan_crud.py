"""Tests for backend.crud.learning_plan."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from backend.crud import (
    create_learning_plan,
    create_user,
    delete_learning_plan,
    follow_plan,
    get_learning_plan,
    get_learning_plans,
    unfollow_plan,
    update_learning_plan,
)
from backend.database import Base
from backend.errors import ConflictError, InvalidArgumentError, NotFoundError, UnauthorizedError
from backend.models import LearningPlan, Resource, Topic
from backend.schemas import LearningPlanCreate, LearningPlanUpdate, TopicCreate, UserCreate


def _snapshot(db, plan_id):
    db.expire_all()
    plan = get_learning_plan(db, plan_id)
    return {
        "title": plan.title,
        "description": plan.description,
        "subject": plan.subject,
        "estimated_days": plan.estimated_days,
        "completion_percentage": plan.completion_percentage,
        "followers": plan.followers,
        "following": plan.following,
        "created_at": plan.created_at,
        "version": plan.version,
        "user_id": plan.user_id,
        "topics": [(t.id, t.title, t.completed) for t in plan.topics],
        "resources": [(r.id, r.title, r.url, r.type) for r in plan.resources],
    }


def test_create_sets_owner_and_derives_completion(db, owner) -> None:
    plan = create_learning_plan(
        db,
        LearningPlanCreate(
            title="Reading list",
            topics=[TopicCreate(title="Novel", completed=True), TopicCreate(title="Poetry")],
        ),
        owner,
    )

    assert plan.user_id == owner.id
    assert plan.completion_percentage == 50.0
    assert plan.estimated_days == 30
    assert plan.version == 1
    assert [t.title for t in plan.topics] == ["Novel", "Poetry"]


def test_create_resets_follower_state(db, owner) -> None:
    plan = create_learning_plan(db, LearningPlan(title="Imported", followers=12, following=True), owner)

    assert plan.followers == 0
    assert plan.following is False


def test_update_by_owner_preserves_follow_state(db, owner, make_plan) -> None:
    plan = make_plan(completed=(True, False))
    follow_plan(db, plan.id, owner)
    before = _snapshot(db, plan.id)

    updated = update_learning_plan(
        db,
        plan.id,
        LearningPlanUpdate(title="Algebra II", description="Harder", subject="maths", estimated_days=20),
        owner,
    )

    assert updated.title == "Algebra II"
    assert updated.description == "Harder"
    assert updated.estimated_days == 20
    assert updated.followers == before["followers"] == 1
    assert updated.following is True
    assert updated.created_at == before["created_at"]
    assert updated.version == before["version"] + 1
    # children kept when not supplied
    assert [(t.id, t.title, t.completed) for t in updated.topics] == before["topics"]
    assert updated.completion_percentage == 50.0


def test_update_replaces_topics_and_recomputes(db, owner, make_plan) -> None:
    plan = make_plan(completed=(False, False))

    updated = update_learning_plan(
        db,
        plan.id,
        LearningPlanUpdate(
            title=plan.title,
            topics=[TopicCreate(title="Only topic", completed=True)],
            resources=[],
        ),
        owner,
    )

    assert [t.title for t in updated.topics] == ["Only topic"]
    assert updated.resources == []
    assert updated.completion_percentage == 100.0
    assert db.query(Topic).count() == 1
    assert db.query(Resource).count() == 0


def test_update_by_non_owner_leaves_plan_unchanged(db, other_user, make_plan) -> None:
    plan = make_plan()
    before = _snapshot(db, plan.id)

    with pytest.raises(UnauthorizedError):
        update_learning_plan(db, plan.id, LearningPlanUpdate(title="Hijacked", topics=[]), other_user)

    assert _snapshot(db, plan.id) == before


def test_update_missing_plan(db, owner) -> None:
    with pytest.raises(NotFoundError):
        update_learning_plan(db, 404, LearningPlanUpdate(title="Nothing"), owner)


def test_update_with_stale_version_conflicts(db, owner, make_plan) -> None:
    plan = make_plan()
    stale_version = plan.version
    update_learning_plan(db, plan.id, LearningPlanUpdate(title="First edit", version=stale_version), owner)
    before = _snapshot(db, plan.id)

    with pytest.raises(ConflictError):
        update_learning_plan(db, plan.id, LearningPlanUpdate(title="Second edit", version=stale_version), owner)

    assert _snapshot(db, plan.id) == before


def test_concurrent_write_raises_conflict(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'plans.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False)

    setup = Session()
    user = create_user(setup, UserCreate(email="ada@example.com"))
    plan_id = create_learning_plan(setup, LearningPlanCreate(title="Shared"), user).id
    setup.close()

    first, second = Session(), Session()
    try:
        first_user = first.merge(user)
        second_user = second.merge(user)
        # hold the instance so the identity map keeps the version-1 row
        held = get_learning_plan(first, plan_id)
        follow_plan(second, plan_id, second_user)
        assert held.version == 1

        with pytest.raises(ConflictError):
            follow_plan(first, plan_id, first_user)
    finally:
        first.close()
        second.close()
        engine.dispose()


def test_delete_by_owner_cascades(db, owner, make_plan) -> None:
    plan = make_plan()

    delete_learning_plan(db, plan.id, owner)

    assert get_learning_plan(db, plan.id) is None
    assert db.query(Topic).count() == 0
    assert db.query(Resource).count() == 0


def test_delete_by_non_owner_is_rejected(db, other_user, make_plan) -> None:
    plan = make_plan()

    with pytest.raises(UnauthorizedError):
        delete_learning_plan(db, plan.id, other_user)

    assert get_learning_plan(db, plan.id) is not None


def test_delete_missing_plan(db, owner) -> None:
    with pytest.raises(NotFoundError):
        delete_learning_plan(db, 404, owner)


def test_follow_twice_counts_twice(db, owner, other_user, make_plan) -> None:
    plan = make_plan()

    follow_plan(db, plan.id, other_user)
    plan = follow_plan(db, plan.id, other_user)

    assert plan.followers == 2
    assert plan.following is True


def test_unfollow_decrements_and_stops_at_zero(db, other_user, make_plan) -> None:
    plan = make_plan()
    follow_plan(db, plan.id, other_user)

    plan = unfollow_plan(db, plan.id, other_user)
    assert plan.followers == 0
    assert plan.following is False

    plan = unfollow_plan(db, plan.id, other_user)
    assert plan.followers == 0


def test_follow_missing_plan(db, owner) -> None:
    with pytest.raises(NotFoundError):
        follow_plan(db, 404, owner)
    with pytest.raises(NotFoundError):
        unfollow_plan(db, 404, owner)


def test_get_learning_plans_filters_by_owner(db, owner, other_user, make_plan) -> None:
    mine = make_plan(title="Mine")
    theirs = make_plan(title="Theirs", user=other_user)

    assert [p.id for p in get_learning_plans(db)] == [mine.id, theirs.id]
    assert [p.id for p in get_learning_plans(db, "")] == [mine.id, theirs.id]
    assert [p.id for p in get_learning_plans(db, str(other_user.id))] == [theirs.id]
    assert get_learning_plans(db, "999") == []


def test_get_learning_plans_rejects_malformed_user_id(db) -> None:
    with pytest.raises(InvalidArgumentError):
        get_learning_plans(db, "not-a-number")
