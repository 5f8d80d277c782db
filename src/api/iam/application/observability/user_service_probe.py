"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_found(self, user_id: str, external_id: int) -> None:
        """Record that an existing user matched the provider identity."""
        ...

    def user_created(self, user_id: str, external_id: int) -> None:
        """Record that a user was created for a new provider identity."""
        ...

    def user_creation_race_reconciled(self, user_id: str, external_id: int) -> None:
        """Record that a concurrent insert won and its user was returned."""
        ...

    def user_provision_failed(self, external_id: int, error: str) -> None:
        """Record that user provisioning failed."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def user_found(self, user_id: str, external_id: int) -> None:
        """Record that an existing user matched the provider identity."""
        self._logger.debug(
            "user_found",
            user_id=user_id,
            external_id=str(external_id),
        )

    def user_created(self, user_id: str, external_id: int) -> None:
        """Record that a user was created for a new provider identity."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            external_id=str(external_id),
        )

    def user_creation_race_reconciled(self, user_id: str, external_id: int) -> None:
        """Record that a concurrent insert won and its user was returned."""
        self._logger.info(
            "user_creation_race_reconciled",
            user_id=user_id,
            external_id=str(external_id),
        )

    def user_provision_failed(self, external_id: int, error: str) -> None:
        """Record that user provisioning failed."""
        self._logger.error(
            "user_provision_failed",
            external_id=str(external_id),
            error=error,
        )
