"""Unit tests for UserRepository.

Tests verify user repository behavior with a mocked session.
"""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from iam.domain.aggregates import User
from iam.domain.value_objects import ExternalId, UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import UserRepositoryProbe
from iam.infrastructure.user_repository import UserRepository
from iam.ports.exceptions import DuplicateIdentityError, StoreUnavailableError
from iam.ports.repositories import IUserRepository


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    return create_autospec(UserRepositoryProbe, instance=True)


@pytest.fixture
def repository(mock_session, mock_probe):
    """Create repository with mock session."""
    return UserRepository(session=mock_session, probe=mock_probe)


def _result_returning(model):
    result = MagicMock()
    result.scalar_one_or_none.return_value = model
    return result


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_implements_protocol(self, repository):
        """Repository should implement IUserRepository protocol."""
        assert isinstance(repository, IUserRepository)

    def test_uses_default_probe_when_not_provided(self, mock_session):
        repository = UserRepository(session=mock_session)

        assert repository._probe is not None


class TestAdd:
    """Tests for add method."""

    @pytest.mark.asyncio
    async def test_adds_and_flushes_new_user(
        self, repository, mock_session, mock_probe
    ):
        """Should add a model to the session and flush it."""
        user = User.register(ExternalId(value=2**64 - 1))

        await repository.add(user)

        mock_session.add.assert_called_once()
        added_model = mock_session.add.call_args[0][0]
        assert isinstance(added_model, UserModel)
        assert added_model.id == user.id.value
        assert added_model.external_id == 2**64 - 1
        mock_session.flush.assert_awaited_once()
        mock_probe.user_inserted.assert_called_once_with(
            user.id.value, 2**64 - 1
        )

    @pytest.mark.asyncio
    async def test_does_not_manage_transactions(self, repository, mock_session):
        """The caller owns the transaction; add must not begin or commit."""
        await repository.add(User.register(ExternalId(value=1)))

        mock_session.begin.assert_not_called()
        mock_session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_user_without_external_id(self, repository, mock_session):
        user = User(id=UserId.generate(), external_id=None)

        await repository.add(user)

        added_model = mock_session.add.call_args[0][0]
        assert added_model.external_id is None

    @pytest.mark.asyncio
    async def test_integrity_error_raises_duplicate_identity(
        self, repository, mock_session, mock_probe
    ):
        """A uniqueness violation becomes DuplicateIdentityError."""
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO users", {}, Exception("duplicate key value")
        )

        with pytest.raises(DuplicateIdentityError) as exc_info:
            await repository.add(User.register(ExternalId(value=42)))

        assert isinstance(exc_info.value.__cause__, IntegrityError)
        mock_probe.duplicate_external_id.assert_called_once_with(42)
        mock_probe.user_inserted.assert_not_called()

    @pytest.mark.asyncio
    async def test_driver_error_raises_store_unavailable(
        self, repository, mock_session, mock_probe
    ):
        """Connection failures become StoreUnavailableError."""
        mock_session.flush.side_effect = OperationalError(
            "INSERT INTO users", {}, Exception("connection refused")
        )

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.add(User.register(ExternalId(value=42)))

        assert "connection refused" not in str(exc_info.value)
        mock_probe.store_error.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(111, "Connect call failed"),
            PoolTimeoutError("QueuePool limit reached"),
            TimeoutError("connect timed out"),
        ],
    )
    async def test_unwrapped_connection_errors_raise_store_unavailable(
        self, repository, mock_session, mock_probe, error
    ):
        """asyncpg connect failures and pool timeouts are not DBAPIErrors."""
        mock_session.flush.side_effect = error

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.add(User.register(ExternalId(value=42)))

        assert exc_info.value.__cause__ is error
        mock_probe.store_error.assert_called_once()
        mock_probe.user_inserted.assert_not_called()


class TestGetByExternalId:
    """Tests for get_by_external_id method."""

    @pytest.mark.asyncio
    async def test_returns_user_when_found(self, repository, mock_session):
        """Should convert the NUMERIC column back to int."""
        user_id = UserId.generate()
        created = datetime.now(UTC)
        model = UserModel(
            id=user_id.value,
            external_id=Decimal("10831234567890123456"),
        )
        model.created_at = created
        mock_session.execute.return_value = _result_returning(model)

        result = await repository.get_by_external_id(
            ExternalId(value=10831234567890123456)
        )

        assert result is not None
        assert result.id == user_id
        assert result.external_id == ExternalId(value=10831234567890123456)
        assert isinstance(result.external_id.value, int)
        assert result.created_at == created

    @pytest.mark.asyncio
    async def test_returns_none_when_not_found(
        self, repository, mock_session, mock_probe
    ):
        mock_session.execute.return_value = _result_returning(None)

        result = await repository.get_by_external_id(ExternalId(value=7))

        assert result is None
        mock_probe.user_not_found.assert_called_once_with("external_id=7")

    @pytest.mark.asyncio
    async def test_query_excludes_soft_deleted_rows(self, repository, mock_session):
        mock_session.execute.return_value = _result_returning(None)

        await repository.get_by_external_id(ExternalId(value=7))

        stmt = mock_session.execute.call_args[0][0]
        assert "deleted_at IS NULL" in str(stmt)

    @pytest.mark.asyncio
    async def test_store_error_is_not_not_found(self, repository, mock_session):
        """A failing lookup must raise, never look like a missing user."""
        mock_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("server closed the connection")
        )

        with pytest.raises(StoreUnavailableError):
            await repository.get_by_external_id(ExternalId(value=7))


class TestGetById:
    """Tests for get_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_user_when_found(self, repository, mock_session):
        user_id = UserId.generate()
        model = UserModel(id=user_id.value, external_id=None)
        mock_session.execute.return_value = _result_returning(model)

        result = await repository.get_by_id(user_id)

        assert result is not None
        assert result.id == user_id
        assert result.external_id is None

    @pytest.mark.asyncio
    async def test_returns_none_when_not_found(self, repository, mock_session):
        mock_session.execute.return_value = _result_returning(None)

        assert await repository.get_by_id(UserId.generate()) is None

    @pytest.mark.asyncio
    async def test_query_excludes_soft_deleted_rows(self, repository, mock_session):
        mock_session.execute.return_value = _result_returning(None)

        await repository.get_by_id(UserId.generate())

        stmt = mock_session.execute.call_args[0][0]
        assert "deleted_at IS NULL" in str(stmt)


class TestLookupConnectionFailures:
    """Lookups surface connection failures as StoreUnavailableError."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(111, "Connect call failed"),
            OSError("Network is unreachable"),
            PoolTimeoutError("QueuePool limit reached"),
        ],
    )
    async def test_get_by_external_id(self, repository, mock_session, mock_probe, error):
        mock_session.execute.side_effect = error

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.get_by_external_id(ExternalId(value=7))

        assert exc_info.value.__cause__ is error
        mock_probe.store_error.assert_called_once()
        assert mock_probe.store_error.call_args[0][0] == "get_by_external_id"

    @pytest.mark.asyncio
    async def test_get_by_id(self, repository, mock_session):
        mock_session.execute.side_effect = ConnectionRefusedError(
            111, "Connect call failed"
        )

        with pytest.raises(StoreUnavailableError):
            await repository.get_by_id(UserId.generate())
