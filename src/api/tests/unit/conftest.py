"""Unit test fixtures shared across packages."""

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep cached settings and stray environment from leaking between tests."""
    from infrastructure.settings import (
        get_database_settings,
        get_google_settings,
        get_session_settings,
        get_settings,
    )

    for name in ("JWT_SECRET", "RECEIPT_AUTH_JWT_SECRET"):
        monkeypatch.delenv(name, raising=False)

    getters = (
        get_settings,
        get_database_settings,
        get_session_settings,
        get_google_settings,
    )
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()
