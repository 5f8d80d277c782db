"""Session validation application service.

Session tokens are self-contained, so resolving the user behind a request
needs only the token service. Nothing here touches the user store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.domain.value_objects import UserId
from shared_kernel.auth.exceptions import MalformedTokenError, SessionError

if TYPE_CHECKING:
    from shared_kernel.auth.session_tokens import SessionTokenService


class SessionService:
    """Resolves session tokens to local user ids."""

    def __init__(
        self,
        session_tokens: SessionTokenService,
        probe: AuthenticationProbe | None = None,
    ):
        self._session_tokens = session_tokens
        self._probe = probe or DefaultAuthenticationProbe()

    def validate_session(self, token: str) -> UserId:
        """Validate a session token and return the user it is bound to.

        Args:
            token: Session token from the Authorization header

        Returns:
            UserId carried by the token

        Raises:
            SessionError: If the token is malformed, forged, expired, or
                no signing key is configured
        """
        try:
            claims = self._session_tokens.validate_session(token)
            try:
                return UserId.from_string(claims.user_id)
            except ValueError as e:
                raise MalformedTokenError("Token user id is not valid") from e
        except SessionError as e:
            self._probe.session_rejected(kind=e.kind, reason=str(e))
            raise
