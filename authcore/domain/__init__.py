"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration and login core: request validation,
credential hashing, the error taxonomy, and the port the user directory
implements.
"""

from .auth import AuthService
from .errors import (
    EmailConflict,
    ErrorKind,
    InvalidCredentials,
    LoginSuccess,
    UsernameConflict,
    ValidationFailed,
)
from .hashing import CredentialHasher
from .ports import AccountType, InsertResult, RegisteredUser, UserRecord, UserRepository
from .validation import validate_login, validate_registration

__all__ = [
    "AccountType",
    "AuthService",
    "CredentialHasher",
    "EmailConflict",
    "ErrorKind",
    "InsertResult",
    "InvalidCredentials",
    "LoginSuccess",
    "RegisteredUser",
    "UserRecord",
    "UserRepository",
    "UsernameConflict",
    "ValidationFailed",
    "validate_login",
    "validate_registration",
]
