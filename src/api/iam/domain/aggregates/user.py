"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.value_objects import ExternalId, UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a person known to the system.

    Users are created the first time a provider identity logs in and are
    never modified afterwards. external_id is optional so that accounts
    not backed by a provider can exist later.
    """

    id: UserId
    external_id: ExternalId | None
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def register(cls, external_id: ExternalId) -> User:
        """Create a new user for a provider identity seen for the first time."""
        return cls(id=UserId.generate(), external_id=external_id)

    @property
    def is_deleted(self) -> bool:
        """Whether the user has been soft-deleted."""
        return self.deleted_at is not None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.id})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
