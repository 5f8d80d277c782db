"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class DatabaseProbe(Protocol):
    """Domain probe for database lifecycle observability.

    Captures engine and schema events without exposing logging details.
    """

    def engine_created(self, connection_string: str, pool_size: int) -> None:
        """Record that the database engine was created."""
        ...

    def schema_created(self, tables: list[str]) -> None:
        """Record that missing tables were created at startup."""
        ...

    def schema_creation_failed(self, error: Exception) -> None:
        """Record that table creation failed at startup."""
        ...

    def engine_disposed(self) -> None:
        """Record that the engine's connection pool was closed."""
        ...


class DefaultDatabaseProbe:
    """Default implementation of DatabaseProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def engine_created(self, connection_string: str, pool_size: int) -> None:
        """Record that the database engine was created."""
        self._logger.info(
            "database_engine_created",
            connection_string=connection_string,
            pool_size=pool_size,
        )

    def schema_created(self, tables: list[str]) -> None:
        """Record that missing tables were created at startup."""
        self._logger.info("database_schema_created", tables=tables)

    def schema_creation_failed(self, error: Exception) -> None:
        """Record that table creation failed at startup."""
        self._logger.error(
            "database_schema_creation_failed",
            error=str(error),
            error_type=type(error).__name__,
        )

    def engine_disposed(self) -> None:
        """Record that the engine's connection pool was closed."""
        self._logger.info("database_engine_disposed")
