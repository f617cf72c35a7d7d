"""Shared fixtures: in-memory database, users and a seeded generator."""
import random
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import backend.models  # noqa: F401
from backend.crud import create_user, create_learning_plan
from backend.database import Base
from backend.generator import PlanGenerator
from backend.schemas import LearningPlanCreate, ResourceCreate, TopicCreate, UserCreate

FIXED_NOW = datetime(2024, 1, 15, 9, 30)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def owner(db):
    return create_user(db, UserCreate(email="ada@example.com", first_name="Ada", last_name="Lovelace"))


@pytest.fixture
def other_user(db):
    return create_user(db, UserCreate(email="grace@example.com"))


@pytest.fixture
def generator() -> PlanGenerator:
    return PlanGenerator(rng=random.Random(42), clock=lambda: FIXED_NOW)


@pytest.fixture
def make_plan(db, owner):
    """Create a user-authored plan with the given topic completion flags."""
    def _make(completed=(False, False), user=None, title="Algebra Drills"):
        plan = LearningPlanCreate(
            title=title,
            description="Practice set",
            subject="maths",
            estimated_days=14,
            topics=[TopicCreate(title=f"Topic {i}", completed=flag) for i, flag in enumerate(completed)],
            resources=[ResourceCreate(title="Khan Academy Math", url="https://www.khanacademy.org/math", type="video")],
        )
        return create_learning_plan(db, plan, user or owner)
    return _make


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
