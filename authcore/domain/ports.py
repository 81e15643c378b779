"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the records the domain stores and the interface (port)
the domain requires from the user directory. Adapters implement the protocol.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class AccountType(str, Enum):
    """Account role selected at registration."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserRecord:
    """
    Stored identity, one per registered username.

    Records are immutable once built: the password hash is written exactly
    once, when the record is created by a successful registration.
    Secret fields are excluded from repr so they never reach log output.
    """

    username: str
    email: str
    account_type: AccountType
    salt: str = field(repr=False)
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class RegisteredUser:
    """Public view of a user record - no secret material."""

    username: str
    email: str
    account_type: AccountType

    @classmethod
    def from_record(cls, record: UserRecord) -> "RegisteredUser":
        return cls(
            username=record.username,
            email=record.email,
            account_type=record.account_type,
        )


class InsertResult(Enum):
    """
    Result of an atomic insert attempt.

    Used by insert_if_absent() to indicate success or which uniqueness
    constraint rejected the record.
    """

    INSERTED = "inserted"
    USERNAME_TAKEN = "username_taken"
    EMAIL_TAKEN = "email_taken"


class UserRepository(Protocol):
    """Port interface for the user directory."""

    def find_by_username(self, username: str) -> UserRecord | None:
        """Exact-key lookup by username."""
        ...

    def find_by_email(self, email: str) -> UserRecord | None:
        """
        Return the first record whose email equals ``email``.

        Email is not a lookup key, only a uniqueness constraint, so
        implementations may scan.
        """
        ...

    def insert_if_absent(self, record: UserRecord) -> InsertResult:
        """
        Atomically insert a record if both username and email are free.

        The username check, the email check and the write form a single
        indivisible unit with respect to concurrent callers. When either
        constraint is violated the directory is left unchanged.

        Args:
            record: Fully built user record (password already hashed)

        Returns:
            INSERTED on success, otherwise USERNAME_TAKEN or EMAIL_TAKEN
            (username is checked first)
        """
        ...

    def __len__(self) -> int:
        ...
