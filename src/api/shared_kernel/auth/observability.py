"""Domain probes for provider verification and session tokens.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to identity verification and session
token handling. Access tokens and session tokens are never logged.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class IdentityVerifierProbe(Protocol):
    """Domain probe for identity provider verification."""

    def provider_token_verified(self, external_id: int) -> None:
        """Record that the provider confirmed an access token."""
        ...

    def provider_verification_failed(
        self, reason: str, status_code: int | None = None
    ) -> None:
        """Record that verifying an access token failed."""
        ...


class DefaultIdentityVerifierProbe:
    """Default implementation of IdentityVerifierProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def provider_token_verified(self, external_id: int) -> None:
        """Record that the provider confirmed an access token."""
        self._logger.info(
            "provider_token_verified",
            external_id=str(external_id),
        )

    def provider_verification_failed(
        self, reason: str, status_code: int | None = None
    ) -> None:
        """Record that verifying an access token failed."""
        self._logger.warning(
            "provider_verification_failed",
            reason=reason,
            status_code=status_code,
        )


class SessionTokenProbe(Protocol):
    """Domain probe for session token issuance and validation."""

    def session_issued(self, user_id: str) -> None:
        """Record that a session token was issued."""
        ...

    def session_validated(self, user_id: str) -> None:
        """Record that a session token was validated."""
        ...

    def session_validation_failed(self, reason: str) -> None:
        """Record that a session token was rejected."""
        ...

    def signing_key_missing(self) -> None:
        """Record that no signing secret is configured."""
        ...


class DefaultSessionTokenProbe:
    """Default implementation of SessionTokenProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def session_issued(self, user_id: str) -> None:
        """Record that a session token was issued."""
        self._logger.info("session_issued", user_id=user_id)

    def session_validated(self, user_id: str) -> None:
        """Record that a session token was validated."""
        self._logger.debug("session_validated", user_id=user_id)

    def session_validation_failed(self, reason: str) -> None:
        """Record that a session token was rejected."""
        self._logger.warning("session_validation_failed", reason=reason)

    def signing_key_missing(self) -> None:
        """Record that no signing secret is configured."""
        self._logger.error("session_signing_key_missing")
