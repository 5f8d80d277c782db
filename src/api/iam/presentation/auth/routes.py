"""HTTP routes for provider login and session validation."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from iam.application.services import AuthenticationService
from iam.dependencies.user import (
    get_authenticated_user_id,
    get_authentication_service,
)
from iam.domain.value_objects import UserId
from iam.presentation.auth.errors import InvalidRequestError
from iam.presentation.auth.models import (
    ProviderLoginRequest,
    SessionTokenResponse,
    SessionValidationResponse,
)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


async def _parse_login_request(request: Request) -> ProviderLoginRequest:
    # Parsed by hand so that every body problem, including invalid JSON,
    # answers 400 with the common error shape instead of FastAPI's 422.
    body = await request.body()
    try:
        return ProviderLoginRequest.model_validate_json(body)
    except ValidationError as e:
        raise InvalidRequestError() from e


@router.post("/provider")
@router.post("/google", include_in_schema=False)
async def login_with_provider(
    login: Annotated[ProviderLoginRequest, Depends(_parse_login_request)],
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> SessionTokenResponse:
    """Exchange a Google access token for a session token.

    Args:
        login: Parsed request body
        service: Authentication service for orchestration

    Returns:
        SessionTokenResponse with the signed session token

    Raises:
        InvalidRequestError: 400 if the body is not valid
        ProviderError: 401/502/503 depending on how verification failed
        DirectoryError: 503 if the user store is unavailable
        SessionError: 500 if the session cannot be signed
    """
    result = await service.authenticate(login.access_token)
    return SessionTokenResponse(token=result.token)


@router.get("/validate")
async def validate_session(
    user_id: Annotated[UserId, Depends(get_authenticated_user_id)],
) -> SessionValidationResponse:
    """Validate the bearer session token and report the user it is bound to."""
    return SessionValidationResponse(user_id=user_id.value)
