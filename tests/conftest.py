"""
Storefront API - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database: Database handle on a fresh SQLite file with all tables
    ├── test_client: HTTPX AsyncClient wired to an app using `database`
    ├── insert_rows: helper to seed a table directly
    └── fetch_customer: helper to read a customer row directly
"""

import os

# Quiet logs during tests; set before any app import reads Settings
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import Table, insert, select

from storefront_api.config import Settings
from storefront_api.database import Database
from storefront_api.models import Customer


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_delete(mock_db_session):
            mock_db_session.execute.return_value = MagicMock(rowcount=1)
            await customer_service.delete(mock_db_session, "c1")
    """
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock(rowcount=1))
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'storefront_test.db'}",
        log_level="WARNING",
        echo_function_url="",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """
    A real Database on a temporary SQLite file with every table created.

    Disposed after the test so no pooled connection outlives it.
    """
    db = Database.from_settings(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(test_settings, database):
    """
    HTTPX AsyncClient talking to a fresh app through ASGITransport.

    ASGITransport does not run the lifespan, so the app is handed the
    already-built Database directly.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from storefront_api.main import create_app

    app = create_app(test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def insert_rows(database):
    """Seed `table` with `rows` in one committed transaction."""

    async def _insert(table: Table, rows: List[Dict[str, Any]]) -> None:
        async with database.engine.begin() as conn:
            await conn.execute(insert(table), rows)

    return _insert


@pytest.fixture
def fetch_customer(database):
    """Read one customer row as a dict (None when absent)."""

    async def _fetch(cust_code: str) -> Optional[Dict[str, Any]]:
        table = Customer.__table__
        async with database.engine.connect() as conn:
            result = await conn.execute(select(table).where(table.c.cust_code == cust_code))
            row = result.mappings().first()
            return dict(row) if row is not None else None

    return _fetch
