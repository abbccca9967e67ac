"""
PressButton – Async SQLAlchemy engine, session, and declarative base.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from pressbutton.config import settings


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine with the per-dialect tweaks the app relies on."""
    engine_kwargs = {"echo": settings.DEBUG, "future": True}
    engine_kwargs.update(kwargs)

    # PgBouncer (transaction mode) does not support prepared statement caching.
    if "postgresql" in url:
        engine_kwargs.setdefault("connect_args", {"statement_cache_size": 0})

    new_engine = create_async_engine(url, **engine_kwargs)

    if new_engine.dialect.name == "sqlite":
        # Comment/vote foreign keys are only enforced when asked for.
        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_sqlite_fks(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine ──
engine = build_engine(settings.DATABASE_URL)

# ── Session factory ──
async_session = build_sessionmaker(engine)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


async def init_models(bind: Optional[AsyncEngine] = None) -> None:
    """Create all tables that do not exist yet."""
    import pressbutton.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def transaction(
    sessions: async_sessionmaker[AsyncSession],
    timeout: Optional[float] = None,
) -> AsyncIterator[AsyncSession]:
    """
    Open a session and run the block inside exactly one transaction.

    Commits when the block exits normally; any exception (including the
    deadline expiring) rolls the whole unit back before it propagates.
    """
    async with sessions() as session:
        async with asyncio.timeout(timeout or None):
            async with session.begin():
                yield session


# ── Dependencies for FastAPI routes ──
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Session factory used by every route; override it to swap the store."""
    return async_session



async def get_db(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> AsyncIterator[AsyncSession]:
    """Yield an async database session, auto-closed on exit."""
    async with sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
