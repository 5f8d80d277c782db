"""Application-layer value objects for IAM bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import ExternalId, UserId


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a successful login.

    Attributes:
        token: Signed session token to hand back to the client
        user_id: The local user the token is bound to
        external_id: The provider identity that was verified
    """

    token: str
    user_id: UserId
    external_id: ExternalId
