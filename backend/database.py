"""Database engine, session factory and declarative base"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # Streamlit reruns scripts on worker threads
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    future=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def init_db(bind=None):
    """Create all tables that don't exist yet"""
    import backend.models  # noqa: F401  registers every model on Base

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables ensured on %s", target.url)


def get_db():
    """Yield a session and close it when the caller is done"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
