"""Pydantic models for authentication requests and responses."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class ProviderLoginRequest(BaseModel):
    """Request model for exchanging a provider access token.

    Accepts ``accessToken`` and, for older clients, ``access_token``.
    """

    access_token: str = Field(
        ...,
        description="Access token issued by the identity provider",
        min_length=1,
        validation_alias=AliasChoices("accessToken", "access_token"),
    )


class SessionTokenResponse(BaseModel):
    """Response model carrying a freshly issued session token."""

    token: str = Field(..., description="Signed session token (JWT)")


class SessionValidationResponse(BaseModel):
    """Response model for a session token that validated."""

    user_id: str = Field(..., serialization_alias="userID")
    valid: bool = True


class ProfileResponse(BaseModel):
    """Response model for the protected profile route."""

    message: str = "This is a protected route"
    user_id: str = Field(..., serialization_alias="userID")
