"""Repository adapters - User directory implementations."""

from .memory import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
