"""Authentication shared kernel module."""

from shared_kernel.auth.exceptions import (
    AuthError,
    MalformedTokenError,
    ProviderError,
    ProviderIdentityInvalidError,
    ProviderRejectedTokenError,
    ProviderResponseInvalidError,
    ProviderUnreachableError,
    SessionError,
    SignatureInvalidError,
    SigningFailureError,
    SigningKeyMissingError,
    TokenExpiredError,
)
from shared_kernel.auth.google_identity import (
    ExternalIdentity,
    GoogleIdentityVerifier,
)
from shared_kernel.auth.observability import (
    DefaultIdentityVerifierProbe,
    DefaultSessionTokenProbe,
    IdentityVerifierProbe,
    SessionTokenProbe,
)
from shared_kernel.auth.session_tokens import SessionClaims, SessionTokenService

__all__ = [
    "AuthError",
    "DefaultIdentityVerifierProbe",
    "DefaultSessionTokenProbe",
    "ExternalIdentity",
    "GoogleIdentityVerifier",
    "IdentityVerifierProbe",
    "MalformedTokenError",
    "ProviderError",
    "ProviderIdentityInvalidError",
    "ProviderRejectedTokenError",
    "ProviderResponseInvalidError",
    "ProviderUnreachableError",
    "SessionClaims",
    "SessionError",
    "SessionTokenProbe",
    "SessionTokenService",
    "SignatureInvalidError",
    "SigningFailureError",
    "SigningKeyMissingError",
    "TokenExpiredError",
]
