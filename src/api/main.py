"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI

import iam.infrastructure.models  # noqa: F401  (registers tables on Base.metadata)
from iam.dependencies.user import get_authenticated_user_id
from iam.domain.value_objects import UserId
from iam.presentation.auth import routes as auth_routes
from iam.presentation.auth.errors import register_exception_handlers
from iam.presentation.auth.models import ProfileResponse
from infrastructure.database import close_database, open_database
from infrastructure.logging import configure_logging
from infrastructure.settings import get_database_settings, get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def receipt_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created on startup, disposed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    app.state.database = await open_database(get_database_settings())
    try:
        yield
    finally:
        await close_database(app.state.database)


app = FastAPI(
    title="Receipt API",
    description="Google login and session tokens for the receipt backend",
    version=__version__,
    lifespan=receipt_lifespan,
)

register_exception_handlers(app)

# Include IAM bounded context routes
app.include_router(auth_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "message": "Receipt API is running"}


@app.get("/profile")
def profile(
    user_id: Annotated[UserId, Depends(get_authenticated_user_id)],
) -> ProfileResponse:
    """Example protected route: reports the user bound to the session."""
    return ProfileResponse(user_id=user_id.value)
