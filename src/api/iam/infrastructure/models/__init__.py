"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.user import EXTERNAL_ID_TYPE, UserModel

__all__ = [
    "EXTERNAL_ID_TYPE",
    "UserModel",
]
