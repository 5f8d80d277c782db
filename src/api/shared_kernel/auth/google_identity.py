"""Google access token verification.

Exchanges an opaque Google OAuth access token for the numeric subject id
of the account it was issued to, using the OAuth2 userinfo endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from shared_kernel.auth.exceptions import (
    ProviderIdentityInvalidError,
    ProviderRejectedTokenError,
    ProviderResponseInvalidError,
    ProviderUnreachableError,
)
from shared_kernel.external_ids import MAX_EXTERNAL_ID, is_decimal_string

if TYPE_CHECKING:
    from shared_kernel.auth.observability import IdentityVerifierProbe

GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"


@dataclass(frozen=True)
class ExternalIdentity:
    """Identity confirmed by the provider."""

    external_id: int
    email: str | None = None
    verified_email: bool = False
    name: str | None = None


def parse_external_id(raw: Any) -> int:
    """Parse a provider subject id into an unsigned 64-bit integer.

    Only plain ASCII decimal strings are accepted: no sign, whitespace or
    JSON numbers.

    Raises:
        ProviderIdentityInvalidError: If the value is not a decimal string
            or does not fit in 64 unsigned bits.
    """
    if not is_decimal_string(raw):
        raise ProviderIdentityInvalidError(
            f"Provider subject id is not a decimal string: {raw!r}"
        )

    value = int(raw)
    if value > MAX_EXTERNAL_ID:
        raise ProviderIdentityInvalidError(
            "Provider subject id does not fit in 64 unsigned bits"
        )
    return value


class GoogleIdentityVerifier:
    """Verifies Google access tokens against the userinfo endpoint.

    Stateless: every call opens its own HTTP client. No retries are made;
    the caller decides whether a failure is worth repeating.
    """

    def __init__(
        self,
        probe: IdentityVerifierProbe,
        userinfo_url: str = GOOGLE_USERINFO_URL,
    ):
        """Initialize the verifier.

        Args:
            probe: Observability probe for logging events.
            userinfo_url: Provider endpoint returning the token's account.
        """
        self._probe = probe
        self._userinfo_url = userinfo_url

    async def verify_provider_token(self, access_token: str) -> ExternalIdentity:
        """Verify an access token and return the identity it belongs to.

        Args:
            access_token: Opaque OAuth access token issued by Google.

        Returns:
            ExternalIdentity with the parsed numeric subject id.

        Raises:
            ProviderUnreachableError: Network or transport failure.
            ProviderRejectedTokenError: Provider answered with a non-200 status.
            ProviderResponseInvalidError: Body is not a JSON object with an id.
            ProviderIdentityInvalidError: Subject id is not an unsigned 64-bit number.
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self._userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            self._probe.provider_verification_failed(
                reason=f"Provider unreachable: {type(e).__name__}"
            )
            raise ProviderUnreachableError(
                f"Failed to reach identity provider: {e}"
            ) from e

        if response.status_code != httpx.codes.OK:
            self._probe.provider_verification_failed(
                reason="Provider rejected token",
                status_code=response.status_code,
            )
            raise ProviderRejectedTokenError(response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            self._probe.provider_verification_failed(reason="Response is not JSON")
            raise ProviderResponseInvalidError(
                "Provider response is not valid JSON"
            ) from e

        if not isinstance(body, dict) or "id" not in body:
            self._probe.provider_verification_failed(
                reason="Response has no subject id"
            )
            raise ProviderResponseInvalidError(
                "Provider response does not contain a subject id"
            )

        try:
            external_id = parse_external_id(body["id"])
        except ProviderIdentityInvalidError:
            self._probe.provider_verification_failed(reason="Invalid subject id")
            raise

        self._probe.provider_token_verified(external_id=external_id)

        email = body.get("email")
        name = body.get("name")
        return ExternalIdentity(
            external_id=external_id,
            email=email if isinstance(email, str) else None,
            verified_email=body.get("verified_email") is True,
            name=name if isinstance(name, str) else None,
        )
