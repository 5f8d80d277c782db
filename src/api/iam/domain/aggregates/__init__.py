"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants without depending on infrastructure.
"""

from iam.domain.aggregates.user import User

__all__ = [
    "User",
]
