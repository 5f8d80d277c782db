"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the domain independent of infrastructure.
"""

from iam.ports.exceptions import (
    DirectoryError,
    DuplicateIdentityError,
    StoreUnavailableError,
)
from iam.ports.repositories import IUserRepository

__all__ = [
    "DirectoryError",
    "DuplicateIdentityError",
    "IUserRepository",
    "StoreUnavailableError",
]
