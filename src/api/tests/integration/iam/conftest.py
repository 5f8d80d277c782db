"""Integration test fixtures for IAM bounded context.

Each test gets its own engine with the users table created, and the
table is emptied afterwards.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

import iam.infrastructure.models  # noqa: F401
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database import DatabaseHandle, close_database, open_database
from infrastructure.settings import DatabaseSettings


@pytest_asyncio.fixture
async def database(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[DatabaseHandle, None]:
    """Open the database with schema creation and clean up afterwards."""
    handle = await open_database(integration_db_settings)
    try:
        yield handle
    finally:
        async with handle.engine.begin() as conn:
            await conn.execute(text("DELETE FROM users"))
        await close_database(handle)


@pytest_asyncio.fixture
async def async_session(
    database: DatabaseHandle,
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session bound to the test database."""
    async with database.sessionmaker() as session:
        yield session


@pytest_asyncio.fixture
async def user_repository(async_session: AsyncSession) -> UserRepository:
    """Provide a UserRepository sharing the test session."""
    return UserRepository(session=async_session)
