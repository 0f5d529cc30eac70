"""
Storefront API - Database Connection Pool
===========================================

What:  The `Database` handle (async engine + session factory), the ORM base
       class, and the FastAPI dependency that lends a session to a request.
How:   The app lifespan constructs one Database from Settings, stores it on
       `app.state.db`, and disposes it on shutdown. Route handlers receive a
       session through `Depends(get_db_session)`.
Who:   main.py (lifecycle), routes (dependency), Alembic (metadata).

Connection Pooling:
    pool_size=5, max_overflow=0: a fixed set of reusable connections.
    pool_timeout:  how long a request waits for a free connection when all
                   of them are checked out.
    pool_pre_ping: validates connections before use.
    pool_recycle=3600: recycles connections every hour (MySQL wait_timeout).

    Each request borrows exactly one session and gives it back when the
    request finishes, whether it succeeded or raised.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from storefront_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, Alembic and
    `Database.create_all()`.
    """
    pass


class Database:
    """
    Owns the async engine and its connection pool.

    Constructed explicitly (never at import time) so the app factory and the
    tests decide which database a process talks to.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        engine_kwargs = {"pool_pre_ping": pool_pre_ping, "echo": echo}
        # SQLite (tests) picks its own pool class; sizing args don't apply
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=3600,
            )

        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def ping(self) -> bool:
        """
        Run `SELECT 1 AS ok` on a pooled connection.

        Returns True when the database answered with 1. Connection errors
        propagate to the caller (the health route).
        """
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1 AS ok"))
            return result.scalar_one() == 1

    async def create_all(self) -> None:
        """Create any missing tables registered on `Base.metadata`."""
        # Import models so they register with Base before create_all
        from storefront_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that lends one pooled session to a request.

    How it works:
        1. Opens a session from the app's Database handle
        2. Yields it to the route handler
        3. On error: rolls back whatever the statement left open, re-raises
        4. Always: closes the session, returning the connection to the pool

    Services commit their own single statement; this dependency only
    guarantees rollback and release.

    Example usage in a route:
        @router.delete("/customers/{cust_code}")
        async def delete_customer(cust_code: str, db: AsyncSession = Depends(get_db_session)):
            await customer_service.delete(db, cust_code)
    """
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
