"""Authentication application service.

Composes provider verification, user lookup-or-create and session token
issuance into the login use case, and exposes session validation for
protected routes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services.session_service import SessionService
from iam.application.value_objects import AuthenticationResult
from iam.domain.value_objects import ExternalId, UserId
from iam.ports.exceptions import DirectoryError
from shared_kernel.auth.exceptions import AuthError

if TYPE_CHECKING:
    from iam.application.services.user_service import UserService
    from shared_kernel.auth.google_identity import GoogleIdentityVerifier
    from shared_kernel.auth.session_tokens import SessionTokenService


class AuthenticationService:
    """Application service for login and session validation."""

    def __init__(
        self,
        identity_verifier: GoogleIdentityVerifier,
        user_service: UserService,
        session_tokens: SessionTokenService,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize AuthenticationService with dependencies.

        Args:
            identity_verifier: Verifies provider access tokens
            user_service: Looks up or creates the local user
            session_tokens: Issues and validates session tokens
            probe: Optional domain probe for observability
        """
        self._identity_verifier = identity_verifier
        self._user_service = user_service
        self._session_tokens = session_tokens
        self._probe = probe or DefaultAuthenticationProbe()
        self._sessions = SessionService(session_tokens, probe=self._probe)

    async def authenticate(self, access_token: str) -> AuthenticationResult:
        """Exchange a provider access token for a session token.

        A provider failure stops the flow before the user directory is
        touched, so a rejected token never creates a user.

        Args:
            access_token: Opaque access token issued by the provider

        Returns:
            AuthenticationResult with the session token and user id

        Raises:
            ProviderError: If the provider cannot confirm the token
            DirectoryError: If the user cannot be looked up or created
            SessionError: If the session token cannot be signed
        """
        try:
            identity = await self._identity_verifier.verify_provider_token(
                access_token
            )
            external_id = ExternalId(value=identity.external_id)
            user_id = await self._user_service.find_or_create_by_external_id(
                external_id
            )
            token = self._session_tokens.issue_session(user_id.value)
        except (AuthError, DirectoryError) as e:
            self._probe.authentication_failed(kind=e.kind, reason=str(e))
            raise

        self._probe.user_authenticated(
            user_id=user_id.value,
            external_id=external_id.value,
        )
        return AuthenticationResult(
            token=token,
            user_id=user_id,
            external_id=external_id,
        )

    def validate_session(self, token: str) -> UserId:
        """Validate a session token and return the user it is bound to.

        See SessionService.validate_session.
        """
        return self._sessions.validate_session(token)
