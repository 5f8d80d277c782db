"""User application service for IAM bounded context.

Maps provider identities to local users, creating the user the first time
an identity is seen.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.domain.aggregates import User
from iam.domain.value_objects import ExternalId, UserId
from iam.ports.exceptions import DirectoryError, DuplicateIdentityError
from iam.ports.repositories import IUserRepository


class UserService:
    """Application service for user management.

    Handles lookup-or-create of users keyed by provider identity. There is
    no in-process lock: concurrent first logins are reconciled through the
    store's uniqueness constraint on the external id.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._probe = probe or DefaultUserServiceProbe()
        self._session = session

    async def find_or_create_by_external_id(self, external_id: ExternalId) -> UserId:
        """Return the id of the active user bound to external_id, creating one if needed.

        The lookup, the insert and the reconciliation read each run in their
        own transaction, so a failed insert never poisons the re-read.

        Args:
            external_id: The provider-assigned subject id

        Returns:
            The UserId of the existing or newly created user

        Raises:
            StoreUnavailableError: If the store fails at any step
            DuplicateIdentityError: If the insert conflicted but no winner
                could be read back
        """
        try:
            async with self._session.begin():
                existing = await self._user_repository.get_by_external_id(external_id)

            if existing is not None:
                self._probe.user_found(
                    user_id=existing.id.value,
                    external_id=external_id.value,
                )
                return existing.id

            user = User.register(external_id)
            try:
                async with self._session.begin():
                    await self._user_repository.add(user)
            except DuplicateIdentityError:
                return await self._reconcile(external_id)

            self._probe.user_created(
                user_id=user.id.value,
                external_id=external_id.value,
            )
            return user.id

        except DirectoryError as e:
            self._probe.user_provision_failed(
                external_id=external_id.value,
                error=str(e),
            )
            raise

    async def _reconcile(self, external_id: ExternalId) -> UserId:
        # A concurrent request inserted first; its row is the answer.
        async with self._session.begin():
            winner = await self._user_repository.get_by_external_id(external_id)

        if winner is None:
            raise DuplicateIdentityError(
                f"Insert for external id {external_id} conflicted "
                "but no active user was found"
            )

        self._probe.user_creation_race_reconciled(
            user_id=winner.id.value,
            external_id=external_id.value,
        )
        return winner.id
