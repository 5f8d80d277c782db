"""Authentication component dependencies.

Builds the identity verifier and session token service from settings.
Settings are cached, but the components are cheap and built per request
so tests can override them through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services.session_service import SessionService
from infrastructure.settings import get_google_settings, get_session_settings
from shared_kernel.auth import GoogleIdentityVerifier, SessionTokenService
from shared_kernel.auth.observability import (
    DefaultIdentityVerifierProbe,
    DefaultSessionTokenProbe,
)


def get_identity_verifier() -> GoogleIdentityVerifier:
    """Get a Google identity verifier.

    Returns:
        GoogleIdentityVerifier configured from Google settings.
    """
    settings = get_google_settings()
    return GoogleIdentityVerifier(
        probe=DefaultIdentityVerifierProbe(),
        userinfo_url=settings.userinfo_url,
    )


def get_session_token_service() -> SessionTokenService:
    """Get a session token service bound to the configured secret.

    A missing secret does not fail here; it is reported when a token is
    issued or validated.
    """
    settings = get_session_settings()
    return SessionTokenService(
        secret=settings.jwt_secret,
        probe=DefaultSessionTokenProbe(),
    )


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance.

    Returns:
        DefaultAuthenticationProbe instance for observability
    """
    return DefaultAuthenticationProbe()


def get_session_service(
    session_tokens: Annotated[
        SessionTokenService, Depends(get_session_token_service)
    ],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> SessionService:
    """Get SessionService instance.

    Session validation is stateless; no database session is opened.
    """
    return SessionService(session_tokens=session_tokens, probe=probe)
