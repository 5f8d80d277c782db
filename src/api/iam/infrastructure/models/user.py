"""SQLAlchemy ORM model for the users table."""

from __future__ import annotations

from sqlalchemy import Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin

# NUMERIC(20, 0) holds the full unsigned 64-bit range; BIGINT is signed.
EXTERNAL_ID_TYPE = Numeric(precision=20, scale=0)


class UserModel(Base, TimestampMixin, SoftDeleteMixin):
    """ORM model for users table.

    external_id is unique among rows that are not soft-deleted, enforced
    by a partial unique index so a deleted account does not block a new
    one for the same provider identity.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[int | None] = mapped_column(EXTERNAL_ID_TYPE, nullable=True)

    __table_args__ = (
        Index(
            "ix_users_external_id_active",
            "external_id",
            unique=True,
            postgresql_where="deleted_at IS NULL",
            sqlite_where="deleted_at IS NULL",
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, external_id={self.external_id})>"
