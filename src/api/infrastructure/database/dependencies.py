"""Database lifecycle and session dependency injection for FastAPI.

The engine and sessionmaker are created once per application in the
lifespan handler and kept on ``app.state``. Request handlers receive
sessions through ``get_write_session``; nothing here is a module-level
singleton.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine, create_sessionmaker
from infrastructure.database.models import Base
from infrastructure.observability import DatabaseProbe, DefaultDatabaseProbe
from infrastructure.settings import DatabaseSettings


@dataclass(frozen=True)
class DatabaseHandle:
    """Explicitly constructed store handle shared by request sessions."""

    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]


async def open_database(
    settings: DatabaseSettings,
    probe: DatabaseProbe | None = None,
) -> DatabaseHandle:
    """Create the engine and sessionmaker, creating tables when configured.

    ORM models must be imported before this runs so their tables are
    registered on ``Base.metadata``.

    Args:
        settings: Database connection settings
        probe: Optional domain probe for observability

    Returns:
        DatabaseHandle owning the connection pool
    """
    probe = probe or DefaultDatabaseProbe()
    engine = create_engine(settings)
    probe.engine_created(
        connection_string=settings.connection_string,
        pool_size=settings.pool_max_connections,
    )

    if settings.create_schema:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            probe.schema_creation_failed(e)
            await engine.dispose()
            raise
        probe.schema_created(tables=sorted(Base.metadata.tables))

    return DatabaseHandle(engine=engine, sessionmaker=create_sessionmaker(engine))


async def close_database(
    handle: DatabaseHandle,
    probe: DatabaseProbe | None = None,
) -> None:
    """Dispose the engine's connection pool on application shutdown."""
    await handle.engine.dispose()
    (probe or DefaultDatabaseProbe()).engine_disposed()


def get_database(request: Request) -> DatabaseHandle:
    """Return the store handle attached to the running application."""
    return request.app.state.database


async def get_write_session(
    database: Annotated[DatabaseHandle, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    async with database.sessionmaker() as session:
        yield session
