"""Unit tests for User aggregate."""

from datetime import UTC, datetime

import pytest

from iam.domain.aggregates import User
from iam.domain.value_objects import ExternalId, UserId


class TestUserRegister:
    """Tests for User.register factory."""

    def test_register_generates_fresh_id(self):
        """Each registration should get its own UserId."""
        external_id = ExternalId(value=1234567890)

        first = User.register(external_id)
        second = User.register(external_id)

        assert first.id != second.id
        assert first.external_id == external_id
        assert second.external_id == external_id

    def test_registered_user_is_not_deleted(self):
        """A freshly registered user is active."""
        user = User.register(ExternalId(value=1))

        assert user.deleted_at is None
        assert user.is_deleted is False


class TestUserEquality:
    """Tests for identity-based equality."""

    def test_equal_when_ids_match(self):
        """Users with the same ID are equal regardless of other fields."""
        user_id = UserId.generate()
        a = User(id=user_id, external_id=ExternalId(value=1))
        b = User(
            id=user_id,
            external_id=None,
            deleted_at=datetime.now(UTC),
        )

        assert a == b
        assert hash(a) == hash(b)

    def test_not_equal_when_ids_differ(self):
        """Users with different IDs are different users."""
        external_id = ExternalId(value=1)

        assert User.register(external_id) != User.register(external_id)

    def test_not_equal_to_other_types(self):
        """Comparing with a non-User returns False."""
        user = User.register(ExternalId(value=1))

        assert user != user.id

    def test_is_frozen(self):
        """User aggregates are immutable."""
        user = User.register(ExternalId(value=1))

        with pytest.raises(AttributeError):
            user.external_id = ExternalId(value=2)  # type: ignore[misc]


class TestUserSoftDelete:
    """Tests for the soft-delete marker."""

    def test_is_deleted_when_deleted_at_set(self):
        user = User(
            id=UserId.generate(),
            external_id=ExternalId(value=1),
            deleted_at=datetime.now(UTC),
        )

        assert user.is_deleted is True
