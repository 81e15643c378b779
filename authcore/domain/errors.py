"""
Domain outcomes - Tagged result types for registration and login.

Expected failures (bad input, conflicts, wrong credentials) are returned as
values from AuthService rather than raised. Each variant carries only the
data its message needs. Unexpected faults are not part of this set and
propagate as ordinary exceptions.
"""

from dataclasses import dataclass, field
from enum import Enum

from .ports import RegisteredUser


class ErrorKind(str, Enum):
    """Tag identifying each failure variant."""

    VALIDATION_FAILED = "validation_failed"
    USERNAME_CONFLICT = "username_conflict"
    EMAIL_CONFLICT = "email_conflict"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class ValidationFailed:
    """Request rejected by the first violated validation rule."""

    message: str
    kind: ErrorKind = field(default=ErrorKind.VALIDATION_FAILED, init=False)


@dataclass(frozen=True)
class UsernameConflict:
    """Username is already registered."""

    username: str
    kind: ErrorKind = field(default=ErrorKind.USERNAME_CONFLICT, init=False)

    @property
    def message(self) -> str:
        return f"A user with the username {self.username} already exists."


@dataclass(frozen=True)
class EmailConflict:
    """Email is already registered to another username."""

    email: str
    kind: ErrorKind = field(default=ErrorKind.EMAIL_CONFLICT, init=False)

    @property
    def message(self) -> str:
        return f"A user with the email {self.email} already exists."


@dataclass(frozen=True)
class InvalidCredentials:
    """
    Login rejected.

    Deliberately identical for an unknown username and a wrong password
    so login responses cannot be used to enumerate accounts.
    """

    kind: ErrorKind = field(default=ErrorKind.INVALID_CREDENTIALS, init=False)

    @property
    def message(self) -> str:
        return "Invalid username/password."


@dataclass(frozen=True)
class LoginSuccess:
    """Credentials verified. Carries no payload."""


RegistrationError = ValidationFailed | UsernameConflict | EmailConflict
RegisterOutcome = RegisteredUser | RegistrationError
LoginOutcome = LoginSuccess | ValidationFailed | InvalidCredentials
