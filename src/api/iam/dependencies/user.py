"""User and session dependencies for IAM bounded context.

Composes the database session with the user repository and services, and
provides the bearer-session dependency that guards protected routes.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from iam.application.services import (
    AuthenticationService,
    SessionService,
    UserService,
)
from iam.dependencies.authentication import (
    get_authentication_probe,
    get_identity_verifier,
    get_session_service,
    get_session_token_service,
)
from iam.domain.value_objects import UserId
from iam.infrastructure.user_repository import UserRepository
from iam.presentation.auth.errors import InvalidAuthorizationHeaderError
from infrastructure.database.dependencies import get_write_session
from shared_kernel.auth import GoogleIdentityVerifier, SessionTokenService

BEARER_PREFIX = "Bearer "


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    """Get UserRepository instance.

    Args:
        session: Database session for the current request

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance."""
    return DefaultUserServiceProbe()


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(user_repository=user_repo, session=session, probe=probe)


def get_authentication_service(
    identity_verifier: Annotated[
        GoogleIdentityVerifier, Depends(get_identity_verifier)
    ],
    user_service: Annotated[UserService, Depends(get_user_service)],
    session_tokens: Annotated[
        SessionTokenService, Depends(get_session_token_service)
    ],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> AuthenticationService:
    """Get AuthenticationService instance."""
    return AuthenticationService(
        identity_verifier=identity_verifier,
        user_service=user_service,
        session_tokens=session_tokens,
        probe=probe,
    )


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Extract the credential from an ``Authorization: Bearer`` header.

    The scheme is checked before anything looks at the token itself.

    Raises:
        InvalidAuthorizationHeaderError: If the header is absent or uses
            another scheme
    """
    if not authorization:
        raise InvalidAuthorizationHeaderError("Authorization header required")

    if not authorization.startswith(BEARER_PREFIX):
        raise InvalidAuthorizationHeaderError("Invalid authorization header format")

    return authorization[len(BEARER_PREFIX) :]


def get_authenticated_user_id(
    token: Annotated[str, Depends(get_bearer_token)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> UserId:
    """Resolve the user bound to the request's session token.

    Use as a dependency on protected routes.

    Raises:
        InvalidAuthorizationHeaderError: If the header is absent or malformed
        SessionError: If the token does not validate
    """
    return service.validate_session(token)
