"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user persistence.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def user_inserted(self, user_id: str, external_id: int | None) -> None:
        """Record that a user row was inserted."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, lookup: str) -> None:
        """Record that no active user matched a lookup."""
        ...

    def duplicate_external_id(self, external_id: int) -> None:
        """Record that an insert hit the external id uniqueness constraint."""
        ...

    def store_error(self, operation: str, error: str) -> None:
        """Record that the store failed during an operation."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def user_inserted(self, user_id: str, external_id: int | None) -> None:
        """Record that a user row was inserted."""
        self._logger.info(
            "user_inserted",
            user_id=user_id,
            external_id=None if external_id is None else str(external_id),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
        )

    def user_not_found(self, lookup: str) -> None:
        """Record that no active user matched a lookup."""
        self._logger.debug(
            "user_not_found",
            lookup=lookup,
        )

    def duplicate_external_id(self, external_id: int) -> None:
        """Record that an insert hit the external id uniqueness constraint."""
        self._logger.warning(
            "duplicate_external_id",
            external_id=str(external_id),
        )

    def store_error(self, operation: str, error: str) -> None:
        """Record that the store failed during an operation."""
        self._logger.error(
            "user_store_error",
            operation=operation,
            error=error,
        )
