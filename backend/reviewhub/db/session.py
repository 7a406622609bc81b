# backend/reviewhub/db/session.py
from __future__ import annotations

"""
Database session and Base ORM declarations.

This module depends on:
- reviewhub.config.settings.get_settings for the DATABASE_URL
It is imported by:
- reviewhub.models (for Base)
- reviewhub.main (for engine/Base)
- any code needing a DB session (via SessionLocal or get_db)
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from reviewhub.config import get_settings

# Load settings once; get_settings() is cached in reviewhub.config.settings
settings = get_settings()

engine_options: dict = {}
if settings.database_url.startswith("sqlite"):
    # SQLite is used for local runs and tests; requests run in a threadpool
    engine_options["connect_args"] = {"check_same_thread": False}
    if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
        # Keep a single connection so the in-memory database survives
        engine_options["poolclass"] = StaticPool

# SQLAlchemy engine for PostgreSQL (or any DB configured in DATABASE_URL)
engine = create_engine(
    settings.database_url,
    future=True,
    **engine_options,
)

# Session factory used throughout the app
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

# Base class for all ORM models
Base = declarative_base()


def get_db():
    """
    FastAPI dependency that yields a DB session and ensures it is closed.

    Example usage in a route:
        from reviewhub.db.session import get_db
        def endpoint(db: Session = Depends(get_db)): ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
