"""
Database utility functions for engine and session management.

Functions:
- create_engine: Creates the async SQLAlchemy engine for the on-device database
- create_sessionmaker: Creates async session factory with safe defaults
- is_memory_url: Tells whether a SQLite URL points at an in-memory database
"""

from __future__ import annotations

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool


def is_memory_url(db_url: str) -> bool:
    """Return True for ``sqlite://`` URLs without a file (``:memory:`` or empty)."""
    url = make_url(db_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    In-memory SQLite databases exist per connection, so they are served from
    a single shared connection (``StaticPool``); otherwise every session
    would see an empty database.

    Args:
        db_url: Database connection URL, e.g. ``sqlite+aiosqlite:///campcheck.db``

    Returns:
        Configured AsyncEngine instance
    """
    if is_memory_url(db_url):
        return create_async_engine(db_url, poolclass=StaticPool)
    return create_async_engine(db_url)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)
