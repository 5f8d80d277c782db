"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID

from shared_kernel.external_ids import MAX_EXTERNAL_ID, is_decimal_string


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID: 128 bits, time-ordered, with a 26-character canonical
    string form that is also what session tokens carry.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Args:
            value: ULID string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class ExternalId:
    """Subject identifier assigned by the identity provider.

    An unsigned 64-bit integer.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Invalid ExternalId: {self.value!r}")
        if not 0 <= self.value <= MAX_EXTERNAL_ID:
            raise ValueError(f"ExternalId out of range: {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> ExternalId:
        """Create ExternalId from its decimal string form.

        Raises:
            ValueError: If value is not plain ASCII digits or is out of range
        """
        if not is_decimal_string(value):
            raise ValueError(f"Invalid ExternalId: {value!r}")
        return cls(value=int(value))
