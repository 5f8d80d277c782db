"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    GoogleSettings,
    SessionSettings,
    Settings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections
        assert settings.pool_max_connections <= 20

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)


class TestDatabaseSettingsEnvironment:
    """Tests for environment loading."""

    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("RECEIPT_DB_HOST", "db.internal")
        monkeypatch.setenv("RECEIPT_DB_PORT", "6543")
        monkeypatch.setenv("RECEIPT_DB_CREATE_SCHEMA", "false")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543
        assert settings.create_schema is False

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in settings.connection_string
        assert settings.connection_string.startswith("postgresql://")


class TestSessionSettings:
    """Tests for session signing settings."""

    def test_secret_defaults_to_none(self, monkeypatch):
        monkeypatch.delenv("RECEIPT_AUTH_JWT_SECRET", raising=False)
        monkeypatch.delenv("JWT_SECRET", raising=False)

        assert SessionSettings(_env_file=None).jwt_secret is None

    def test_reads_prefixed_secret(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.setenv("RECEIPT_AUTH_JWT_SECRET", "s3cret")

        settings = SessionSettings(_env_file=None)

        assert settings.jwt_secret.get_secret_value() == "s3cret"

    def test_reads_plain_jwt_secret(self, monkeypatch):
        monkeypatch.delenv("RECEIPT_AUTH_JWT_SECRET", raising=False)
        monkeypatch.setenv("JWT_SECRET", "legacy")

        settings = SessionSettings(_env_file=None)

        assert settings.jwt_secret.get_secret_value() == "legacy"

    def test_secret_is_not_shown_in_repr(self):
        settings = SessionSettings(jwt_secret="s3cret")

        assert "s3cret" not in repr(settings)


class TestGoogleSettings:
    def test_default_userinfo_url(self, monkeypatch):
        monkeypatch.delenv("RECEIPT_GOOGLE_USERINFO_URL", raising=False)

        assert GoogleSettings(_env_file=None).userinfo_url == (
            "https://www.googleapis.com/oauth2/v2/userinfo"
        )


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.app_name == "Receipt API"
        assert settings.debug is False
