"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fresh in-memory user directory per test
- A low-cost credential hasher so bcrypt does not dominate test time
- A wired AuthService and a valid registration payload factory
"""

from collections.abc import Callable
from typing import Any

import pytest

from authcore.adapters.repository.memory import InMemoryUserRepository
from authcore.domain.auth import AuthService
from authcore.domain.hashing import CredentialHasher

# bcrypt minimum cost; production uses Settings.bcrypt_cost
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Empty user directory."""
    return InMemoryUserRepository()


@pytest.fixture
def hasher() -> CredentialHasher:
    """Credential hasher at minimum cost."""
    return CredentialHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def service(repository: InMemoryUserRepository, hasher: CredentialHasher) -> AuthService:
    """AuthService wired to the per-test directory."""
    return AuthService(repository=repository, hasher=hasher)


@pytest.fixture
def make_registration() -> Callable[..., dict[str, Any]]:
    """Factory for valid registration payloads with per-field overrides."""

    def factory(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "username": "alice",
            "email": "alice@example.com",
            "accountType": "user",
            "password": "Abc!2",
        }
        payload.update(overrides)
        return payload

    return factory
