"""
Elite Logistic Backend — Database Engine & Session Helpers
============================================================

What:  Declarative base, async engine construction, and session factory.
Why:   Centralizes connection logic so the ShipmentStore and Alembic build
       engines the same way.
How:   build_engine() creates an async engine with pooling appropriate to the
       backend; build_session_factory() wraps it in an async_sessionmaker.
Who:   Used by ShipmentStore (runtime) and alembic/env.py (migrations).
When:  Called once at startup. Nothing here runs at import time; the engine
       lives on the store instance, not in a module global.

Connection Pooling Strategy:
    PostgreSQL (asyncpg):
        pool_size / max_overflow from settings, pool_pre_ping to catch stale
        connections, pool_recycle=3600 to retire long-lived connections.
    SQLite (aiosqlite):
        No pool arguments. SQLite's pool classes do not accept them.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shared metadata is what Alembic autogenerate and
    ShipmentStore.create_schema() both read.
    """
    pass


def build_engine(
    database_url: str,
    pool_size: int = 10,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Args:
        database_url: Async SQLAlchemy URL (postgresql+asyncpg:// or sqlite+aiosqlite://)
        pool_size: Persistent connections (server databases only)
        max_overflow: Extra connections for spikes (server databases only)
        pool_pre_ping: Validate connections before use
        echo: Log every SQL statement (DEBUG only)
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)

    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: attributes stay readable after commit, so the
    store can return ORM objects that routes serialize after the session closes.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
