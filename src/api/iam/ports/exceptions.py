"""Domain exceptions for IAM bounded context.

These exceptions represent errors raised by the user directory's
repository operations. The application layer handles them; the
presentation layer maps them to HTTP responses.
"""


class DirectoryError(Exception):
    """Base class for user directory failures."""

    kind = "DirectoryError"


class StoreUnavailableError(DirectoryError):
    """Raised when the user store cannot be reached or fails a statement.

    Wraps connection and driver errors so callers never see raw driver
    messages.
    """

    kind = "StoreUnavailable"


class DuplicateIdentityError(DirectoryError):
    """Raised when an active user with the same external id already exists.

    Repositories raise this on the external-id uniqueness violation. The
    user service reconciles it by re-reading the winning row and only lets
    it escape if that re-read also comes back empty.
    """

    kind = "DuplicateIdentity"
