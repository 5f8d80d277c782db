"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Connection details
come from the RECEIPT_DB_* environment variables.
"""

import os

import pytest
from pydantic import SecretStr

from infrastructure.settings import DatabaseSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        RECEIPT_DB_HOST, RECEIPT_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("RECEIPT_DB_HOST", "localhost"),
        port=int(os.getenv("RECEIPT_DB_PORT", "5432")),
        database=os.getenv("RECEIPT_DB_DATABASE", "receipt_test"),
        username=os.getenv("RECEIPT_DB_USERNAME", "receipt"),
        password=SecretStr(os.getenv("RECEIPT_DB_PASSWORD", "receipt_dev_password")),
        pool_min_connections=2,
        pool_max_connections=10,
        create_schema=True,
    )
