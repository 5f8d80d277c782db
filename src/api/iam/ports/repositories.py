"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations own the mapping to the relational store.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import User
from iam.domain.value_objects import ExternalId, UserId


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    All lookups ignore soft-deleted users. Implementations do not manage
    transactions; the calling service does.
    """

    async def add(self, user: User) -> None:
        """Insert a new user.

        Args:
            user: The User aggregate to insert

        Raises:
            DuplicateIdentityError: If an active user already has this external id
            StoreUnavailableError: If the store fails for any other reason
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve an active user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...

    async def get_by_external_id(self, external_id: ExternalId) -> User | None:
        """Retrieve the active user bound to a provider identity.

        Args:
            external_id: The provider-assigned subject id

        Returns:
            The User aggregate, or None if not found

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...
