"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases.
"""

from iam.application.services.authentication_service import AuthenticationService
from iam.application.services.session_service import SessionService
from iam.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "SessionService",
    "UserService",
]
