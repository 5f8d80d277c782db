"""PostgreSQL implementation of IUserRepository.

Users are provisioned on first login and never updated afterwards, so this
repository only inserts and reads. Soft-deleted rows are invisible to every
lookup.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import ExternalId, UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateIdentityError, StoreUnavailableError
from iam.ports.repositories import IUserRepository

# asyncpg raises connection failures (OSError) without a DBAPI wrapper, and
# pool checkout timeouts are SQLAlchemyError but not DBAPIError.
STORE_ERRORS = (SQLAlchemyError, OSError)


def _describe(error: Exception) -> str:
    return str(getattr(error, "orig", None) or error)


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    The repository does not begin or commit transactions; it runs inside
    whatever transaction the caller holds on the session.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def add(self, user: User) -> None:
        """Insert a new user and flush so constraint violations surface here.

        Args:
            user: The User aggregate to insert

        Raises:
            DuplicateIdentityError: If an active user already has this external id
            StoreUnavailableError: If the store fails for any other reason
        """
        external_id = user.external_id.value if user.external_id else None
        model = UserModel(id=user.id.value, external_id=external_id)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.duplicate_external_id(external_id)
            raise DuplicateIdentityError(
                f"An active user already exists for external id {external_id}"
            ) from e
        except STORE_ERRORS as e:
            self._probe.store_error("add", _describe(e))
            raise StoreUnavailableError("Failed to insert user") from e

        self._probe.user_inserted(user.id.value, external_id)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve an active user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(
            UserModel.id == user_id.value,
            UserModel.deleted_at.is_(None),
        )
        model = await self._fetch_one(stmt, "get_by_id")

        if model is None:
            self._probe.user_not_found(f"id={user_id.value}")
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_external_id(self, external_id: ExternalId) -> User | None:
        """Retrieve the active user bound to a provider identity.

        Args:
            external_id: The provider-assigned subject id

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(
            UserModel.external_id == external_id.value,
            UserModel.deleted_at.is_(None),
        )
        model = await self._fetch_one(stmt, "get_by_external_id")

        if model is None:
            self._probe.user_not_found(f"external_id={external_id.value}")
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def _fetch_one(self, stmt, operation: str) -> UserModel | None:
        try:
            result = await self._session.execute(stmt)
        except STORE_ERRORS as e:
            self._probe.store_error(operation, _describe(e))
            raise StoreUnavailableError("Failed to query users") from e
        return result.scalar_one_or_none()

    def _to_domain(self, model: UserModel) -> User:
        """Convert a UserModel to a User domain aggregate.

        NUMERIC columns load as Decimal; the domain works with int.
        """
        return User(
            id=UserId(value=model.id),
            external_id=(
                ExternalId(value=int(model.external_id))
                if model.external_id is not None
                else None
            ),
            created_at=model.created_at,
            deleted_at=model.deleted_at,
        )
