"""Session token issuance and validation.

Session tokens are HS256-signed JWTs binding a local user id for seven
days. They are stateless: validity depends only on the signature and the
token's own claims, so there is no server-side revocation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable

from jose import jws, jwt
from jose.exceptions import JOSEError
from jose.utils import base64url_decode, base64url_encode
from pydantic import SecretStr

from shared_kernel.auth.exceptions import (
    MalformedTokenError,
    SignatureInvalidError,
    SigningFailureError,
    SigningKeyMissingError,
    TokenExpiredError,
)

if TYPE_CHECKING:
    from shared_kernel.auth.observability import SessionTokenProbe

SESSION_ALGORITHM = "HS256"
SESSION_LIFETIME = timedelta(days=7)
USER_ID_CLAIM = "user_id"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionClaims:
    """Verified session token claims."""

    user_id: str
    issued_at: datetime
    expires_at: datetime


class SessionTokenService:
    """Issues and validates signed session tokens.

    The signing algorithm is fixed. A token announcing any other algorithm,
    including ``none``, is rejected before its signature is looked at.
    """

    def __init__(
        self,
        secret: SecretStr | None,
        probe: SessionTokenProbe,
        clock: Callable[[], datetime] = _utc_now,
        lifetime: timedelta = SESSION_LIFETIME,
    ):
        """Initialize the service.

        Args:
            secret: Process-wide HMAC secret; None or empty when unconfigured.
            probe: Observability probe for logging events.
            clock: Source of the current time (timezone-aware).
            lifetime: How long an issued token stays valid.
        """
        self._secret = secret
        self._probe = probe
        self._clock = clock
        self._lifetime = lifetime

    def issue_session(self, user_id: str) -> str:
        """Mint a session token bound to a user id.

        Args:
            user_id: String form of the local user id.

        Returns:
            Compact JWT string.

        Raises:
            SigningKeyMissingError: If no secret is configured.
            SigningFailureError: If signing fails unexpectedly.
        """
        key = self._signing_key()

        issued_at = int(self._clock().timestamp())
        claims = {
            USER_ID_CLAIM: user_id,
            "iat": issued_at,
            "exp": issued_at + int(self._lifetime.total_seconds()),
        }

        try:
            token = jwt.encode(claims, key, algorithm=SESSION_ALGORITHM)
        except JOSEError as e:
            raise SigningFailureError(f"Failed to sign session token: {e}") from e

        self._probe.session_issued(user_id=user_id)
        return token

    def validate_session(self, token: str) -> SessionClaims:
        """Verify a session token and return its claims.

        Args:
            token: Compact JWT string.

        Returns:
            SessionClaims with the bound user id.

        Raises:
            MalformedTokenError: Token or claims cannot be parsed.
            SignatureInvalidError: Unexpected algorithm or bad signature.
            TokenExpiredError: Current time is past the expiry claim.
            SigningKeyMissingError: If no secret is configured.
        """
        if not isinstance(token, str) or token.count(".") != 2:
            self._reject("Token is not a compact JWS")
            raise MalformedTokenError("Token must have three segments")

        try:
            header = jwt.get_unverified_header(token)
        except JOSEError as e:
            self._reject("Undecodable header")
            raise MalformedTokenError(f"Invalid token header: {e}") from e

        algorithm = header.get("alg")
        if algorithm != SESSION_ALGORITHM:
            self._reject(f"Unexpected algorithm: {algorithm!r}")
            raise SignatureInvalidError(f"Unexpected signing algorithm: {algorithm!r}")

        if not _is_canonical_base64url(token.rsplit(".", 1)[1]):
            self._reject("Non-canonical signature encoding")
            raise SignatureInvalidError("Invalid token signature")

        key = self._signing_key()

        try:
            payload = jws.verify(token, key, algorithms=[SESSION_ALGORITHM])
        except JOSEError as e:
            self._reject("Invalid signature")
            raise SignatureInvalidError("Invalid token signature") from e

        claims = self._parse_claims(payload)

        if self._clock().timestamp() > claims["exp"]:
            self._reject("Token expired")
            raise TokenExpiredError("Session token has expired")

        user_id = claims[USER_ID_CLAIM]
        self._probe.session_validated(user_id=user_id)
        return SessionClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )

    def _signing_key(self) -> str:
        secret = self._secret.get_secret_value() if self._secret else ""
        if not secret:
            self._probe.signing_key_missing()
            raise SigningKeyMissingError("Session signing secret is not configured")
        return secret

    def _parse_claims(self, payload: bytes) -> dict[str, Any]:
        try:
            claims = json.loads(payload)
        except ValueError as e:
            self._reject("Payload is not JSON")
            raise MalformedTokenError("Token payload is not valid JSON") from e

        if not isinstance(claims, dict):
            self._reject("Payload is not an object")
            raise MalformedTokenError("Token payload must be a JSON object")

        user_id = claims.get(USER_ID_CLAIM)
        if not isinstance(user_id, str) or not user_id:
            self._reject(f"Missing or invalid {USER_ID_CLAIM} claim")
            raise MalformedTokenError(f"Missing required claim: {USER_ID_CLAIM}")

        for name in ("iat", "exp"):
            value = claims.get(name)
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool):
                self._reject(f"Missing or invalid {name} claim")
                raise MalformedTokenError(f"Missing required claim: {name}")

        return claims

    def _reject(self, reason: str) -> None:
        self._probe.session_validation_failed(reason=reason)


def _is_canonical_base64url(segment: str) -> bool:
    """Check a segment round-trips through unpadded base64url unchanged.

    Rejects stray characters and non-zero padding bits, which a lenient
    decoder would otherwise ignore.
    """
    try:
        raw = segment.encode("ascii")
        return base64url_encode(base64url_decode(raw)) == raw
    except ValueError:
        return False
