"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request

from authcore.adapters.repository.memory import InMemoryUserRepository
from authcore.domain.auth import AuthService
from authcore.domain.hashing import CredentialHasher


def get_repository(request: Request) -> InMemoryUserRepository:
    """
    Get the user directory from app state.

    The directory is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_hasher(request: Request) -> CredentialHasher:
    """Get the credential hasher from app state."""
    return request.app.state.hasher


def get_auth_service(request: Request) -> AuthService:
    """
    Create auth service with injected dependencies.

    Wires together the directory and hasher for the domain service.
    """
    return AuthService(repository=get_repository(request), hasher=get_hasher(request))
