"""Database infrastructure - engine, models and session primitives."""

from infrastructure.database.dependencies import (
    DatabaseHandle,
    close_database,
    get_write_session,
    open_database,
)
from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin

__all__ = [
    "Base",
    "DatabaseHandle",
    "SoftDeleteMixin",
    "TimestampMixin",
    "close_database",
    "get_write_session",
    "open_database",
]
