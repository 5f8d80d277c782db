"""Exceptions raised by provider verification and session tokens.

Each exception carries a stable ``kind`` so the presentation layer can
choose an HTTP status without inspecting messages. Messages are safe to
log; they are not returned to callers verbatim.
"""


class AuthError(Exception):
    """Base class for authentication core failures."""

    kind = "AuthError"


# Identity provider verification


class ProviderError(AuthError):
    """Base class for identity provider verification failures."""

    kind = "ProviderError"


class ProviderUnreachableError(ProviderError):
    """Raised when the provider cannot be reached (network/transport failure)."""

    kind = "ProviderUnreachable"


class ProviderRejectedTokenError(ProviderError):
    """Raised when the provider answers with a non-200 status."""

    kind = "ProviderRejectedToken"

    def __init__(self, status_code: int):
        super().__init__(f"Provider rejected access token (status {status_code})")
        self.status_code = status_code


class ProviderResponseInvalidError(ProviderError):
    """Raised when the provider's response body cannot be used."""

    kind = "ProviderResponseInvalid"


class ProviderIdentityInvalidError(ProviderError):
    """Raised when the subject id is not an unsigned 64-bit decimal string."""

    kind = "ProviderIdentityInvalid"


# Session tokens


class SessionError(AuthError):
    """Base class for session token failures."""

    kind = "SessionError"


class SigningKeyMissingError(SessionError):
    """Raised when no signing secret is configured."""

    kind = "SigningKeyMissing"


class SigningFailureError(SessionError):
    """Raised when signing a session token fails unexpectedly."""

    kind = "SigningFailure"


class SignatureInvalidError(SessionError):
    """Raised when the signature or signing algorithm does not verify."""

    kind = "SignatureInvalid"


class TokenExpiredError(SessionError):
    """Raised when the current time is past the token's expiry claim."""

    kind = "TokenExpired"


class MalformedTokenError(SessionError):
    """Raised when the token is unparseable or its claims are missing or mistyped."""

    kind = "MalformedToken"
