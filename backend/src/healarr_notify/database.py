"""Database engine and session management."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, nullcontext
from weakref import WeakKeyDictionary

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from healarr_notify.config import Settings
from healarr_notify.exceptions import StoreError
from healarr_notify.models.orm.base import Base

# In-memory engines share one connection; their sessions must not interleave
_connection_locks: WeakKeyDictionary[Engine, asyncio.Lock] = WeakKeyDictionary()


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine instance
    """
    url = settings.database_url
    if url.startswith("sqlite"):
        kwargs: dict = {}
        in_memory = ":memory:" in url or url.endswith("://")
        if in_memory:
            # Share one connection so every session sees the same in-memory database
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
            **kwargs,
        )
        if in_memory:
            _connection_locks[engine.sync_engine] = asyncio.Lock()
        return engine

    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        # Validate connections before checkout to detect stale connections
        pool_pre_ping=True,
        pool_recycle=3600,
        # Never echo SQL statements: notification configs contain credentials
        echo=False,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def _connection_lock(session_maker: async_sessionmaker[AsyncSession]) -> asyncio.Lock | None:
    bind = session_maker.kw.get("bind")
    if not isinstance(bind, AsyncEngine):
        return None
    return _connection_locks.get(bind.sync_engine)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession],
    timeout: float,
) -> AsyncIterator[AsyncSession]:
    """Open a session for one store operation, bounded by a timeout.

    Commits on success and rolls back on error. Database failures and
    timeouts are raised as StoreError. On an in-memory engine, scopes run
    one at a time.

    Args:
        session_maker: Session factory
        timeout: Maximum seconds for the whole operation

    Yields:
        AsyncSession
    """
    lock = _connection_lock(session_maker)
    try:
        async with asyncio.timeout(timeout):
            async with lock if lock is not None else nullcontext():
                async with session_maker() as session:
                    try:
                        yield session
                        await session.commit()
                    except Exception:
                        await session.rollback()
                        raise
    except TimeoutError as e:
        raise StoreError(f"Store operation timed out after {timeout}s") from e
    except SQLAlchemyError as e:
        raise StoreError(f"Store operation failed: {type(e).__name__}") from e
