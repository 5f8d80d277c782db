"""Protocol for authentication observability.

Defines the interface for domain probes that capture login and session
validation outcomes at the application layer.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_authenticated(self, user_id: str, external_id: int) -> None:
        """Record a successful login through the identity provider."""
        ...

    def authentication_failed(self, kind: str, reason: str) -> None:
        """Record a failed login."""
        ...

    def session_rejected(self, kind: str, reason: str) -> None:
        """Record a session token that did not validate."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def user_authenticated(self, user_id: str, external_id: int) -> None:
        """Record a successful login through the identity provider."""
        self._logger.info(
            "user_authenticated",
            user_id=user_id,
            external_id=str(external_id),
        )

    def authentication_failed(self, kind: str, reason: str) -> None:
        """Record a failed login."""
        self._logger.warning(
            "authentication_failed",
            kind=kind,
            reason=reason,
        )

    def session_rejected(self, kind: str, reason: str) -> None:
        """Record a session token that did not validate."""
        self._logger.info(
            "session_rejected",
            kind=kind,
            reason=reason,
        )
