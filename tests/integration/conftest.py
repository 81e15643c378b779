"""Fixtures for tests that run the full application lifespan."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from authcore.api.main import create_app
from authcore.config.settings import get_settings


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Test client over a fresh application with an empty directory."""
    monkeypatch.setenv("AUTHCORE_BCRYPT_COST", "4")
    get_settings.cache_clear()
    with TestClient(create_app()) as test_client:
        yield test_client
    get_settings.cache_clear()
