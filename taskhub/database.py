"""
TaskHub Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and request-scoped sessions.
How:   `Database` owns one async engine with connection pooling and a session
       factory. `create_app()` builds one instance and stores it on
       `app.state.database`; the `get_db_session` dependency opens a session
       per request that commits on success and rolls back on error.
Who:   Route handlers via FastAPI's Depends(); Alembic and tests directly.

Transactions:
    Every request runs in a single transaction. A handler's ownership
    lookup and the mutation that follows it are committed together, or
    not at all. Write handlers commit through `commit_session()` before
    returning, so the status code reflects whether the commit succeeded.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
    SQLite URLs skip these options and enable foreign-key enforcement instead.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from taskhub.config import Settings
from taskhub.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `Database.create_all()`
    and Alembic autogenerate.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES ... ON DELETE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and the session factory for one application.

    Usage:
        database = Database.from_settings(settings)
        async with database.session_factory() as session:
            ...
        await database.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo, "pool_pre_ping": pool_pre_ping}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: response models are built from ORM objects
        # after flush without triggering lazy loads
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provides one transactional session.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Creates every table registered on `Base.metadata` (dev/test only)."""
        # Import registers the models on Base.metadata
        import taskhub.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        import taskhub.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> None:
        """Runs `SELECT 1`; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Closes all connections in the pool. Called on application shutdown."""
        await self.engine.dispose()


# ── Request Dependencies ──────────────────────────────────────────────────

def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/projects")
        async def list_projects(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any database exception propagates to the global error handlers
        after the transaction has been rolled back.
    """
    async with get_database(request).session() as session:
        yield session


async def commit_session(db: AsyncSession) -> None:
    """
    Commit the request transaction before the handler returns.

    The dependency's own commit runs only after the response is sent, so
    write handlers call this to make a failed commit a 500 instead of a
    2xx for data that was never stored. The commit at dependency exit is
    then a no-op.

    Raises:
        DatabaseError: the commit failed; the transaction is rolled back
    """
    try:
        await db.commit()
    except SQLAlchemyError as e:
        logger.error("Database error committing transaction: %s", str(e), exc_info=True)
        await db.rollback()
        raise DatabaseError(message="Failed to save changes")
