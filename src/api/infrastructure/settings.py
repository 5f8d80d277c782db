"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        RECEIPT_DB_HOST: Database host (default: localhost)
        RECEIPT_DB_PORT: Database port (default: 5432)
        RECEIPT_DB_DATABASE: Database name (default: receipt)
        RECEIPT_DB_USERNAME: Database user (default: receipt)
        RECEIPT_DB_PASSWORD: Database password (required in production)
        RECEIPT_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        RECEIPT_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        RECEIPT_DB_CREATE_SCHEMA: Create missing tables at startup (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECEIPT_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="receipt", description="Database name")
    username: str = Field(default="receipt", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    create_schema: bool = Field(
        default=True,
        description="Create missing tables on application startup",
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class SessionSettings(BaseSettings):
    """Session token signing settings.

    Environment variables:
        RECEIPT_AUTH_JWT_SECRET: HMAC secret for session tokens.
            The plain JWT_SECRET variable is accepted as well.

    No default secret: a missing secret surfaces when a token is issued
    or validated.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECEIPT_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    jwt_secret: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("RECEIPT_AUTH_JWT_SECRET", "JWT_SECRET"),
        description="Secret used to sign and verify session tokens",
    )


class GoogleSettings(BaseSettings):
    """Google identity provider settings.

    Environment variables:
        RECEIPT_GOOGLE_USERINFO_URL: Userinfo endpoint used to verify access tokens
    """

    model_config = SettingsConfigDict(
        env_prefix="RECEIPT_GOOGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    userinfo_url: str = Field(
        default="https://www.googleapis.com/oauth2/v2/userinfo",
        description="Google OAuth2 userinfo endpoint",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Receipt API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def session(self) -> SessionSettings:
        """Get session token settings."""
        return get_session_settings()

    @property
    def google(self) -> GoogleSettings:
        """Get Google provider settings."""
        return get_google_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_session_settings() -> SessionSettings:
    """Get cached session token settings."""
    return SessionSettings()


@lru_cache
def get_google_settings() -> GoogleSettings:
    """Get cached Google provider settings."""
    return GoogleSettings()
