"""
Authentication domain service - registration and login orchestration.

Registration flow (terminal after one pass):
    Received -> Validated -> Conflict-checked -> Hashed -> Inserted | Error

Login flow (terminal after one pass):
    Received -> Validated -> Looked up -> Verified -> Success | Error

Expected failures are returned as values from domain.errors. A failed
registration leaves the directory exactly as it was. Faults outside that
taxonomy (e.g. bcrypt rejecting a corrupt stored hash) propagate unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Any

from .errors import (
    EmailConflict,
    InvalidCredentials,
    LoginOutcome,
    LoginSuccess,
    RegisterOutcome,
    UsernameConflict,
    ValidationFailed,
)
from .hashing import CredentialHasher
from .ports import InsertResult, RegisteredUser, UserRecord, UserRepository
from .validation import validate_login, validate_registration

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """
    Domain service for account registration and login.

    Orchestrates validation, uniqueness checks, password hashing and
    credential verification against the user directory.
    """

    repository: UserRepository
    hasher: CredentialHasher

    def register(self, payload: Any) -> RegisterOutcome:
        """
        Register a new user.

        Args:
            payload: Untyped request body with username, email,
                accountType and password

        Returns:
            RegisteredUser (no secret material) on success, otherwise
            ValidationFailed, UsernameConflict or EmailConflict
        """
        request = validate_registration(payload)
        if isinstance(request, ValidationFailed):
            return request

        if self.repository.find_by_username(request.username) is not None:
            logger.info("Registration rejected, username taken: %s", request.username)
            return UsernameConflict(request.username)
        if self.repository.find_by_email(request.email) is not None:
            logger.info("Registration rejected, email taken: %s", request.email)
            return EmailConflict(request.email)

        salt = self.hasher.generate_salt()
        record = UserRecord(
            username=request.username,
            email=request.email,
            account_type=request.account_type,
            salt=salt,
            password_hash=self.hasher.hash(request.password, salt),
        )

        # The checks above are advisory; a concurrent registration can
        # still win between them and this insert.
        result = self.repository.insert_if_absent(record)
        if result is InsertResult.USERNAME_TAKEN:
            logger.info("Registration lost race on username: %s", request.username)
            return UsernameConflict(request.username)
        if result is InsertResult.EMAIL_TAKEN:
            logger.info("Registration lost race on email: %s", request.email)
            return EmailConflict(request.email)

        logger.info("Registered %s account: %s", record.account_type.value, record.username)
        return RegisteredUser.from_record(record)

    def login(self, payload: Any) -> LoginOutcome:
        """
        Verify a username/password pair.

        Unknown usernames and wrong passwords produce the same
        InvalidCredentials value and cost the same bcrypt work.

        Args:
            payload: Untyped request body with username and password

        Returns:
            LoginSuccess, ValidationFailed or InvalidCredentials
        """
        request = validate_login(payload)
        if isinstance(request, ValidationFailed):
            return request

        record = self.repository.find_by_username(request.username)
        if record is None:
            self.hasher.verify_dummy(request.password)
            logger.warning("Failed login attempt for username: %s", request.username)
            return InvalidCredentials()

        if not self.hasher.verify(request.password, record.password_hash):
            logger.warning("Failed login attempt for username: %s", request.username)
            return InvalidCredentials()

        logger.info("Successful login: %s", request.username)
        return LoginSuccess()
