"""
Request validation - Ordered predicate checks for register and login payloads.

Each request shape is described by an ordered tuple of field rules, and each
field rule by an ordered tuple of named checks. Validation is fail-fast: the
first violated check, in declaration order, determines the reported message.
Fields are checked before unknown keys, so when several fields are invalid
the earliest-declared one is reported.

Validation is pure. The same payload always yields the same result.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .errors import ValidationFailed
from .ports import AccountType

# A check receives the field name and its value and returns a failure
# message, or None when the value passes.
Check = Callable[[str, Any], str | None]

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 24
PASSWORD_MIN_LENGTH = 5
PASSWORD_MAX_LENGTH = 24

_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_ALPHANUMERIC_RE = re.compile(r"[a-zA-Z0-9]*")


@dataclass(frozen=True)
class RegistrationRequest:
    """Validated registration payload."""

    username: str
    email: str
    account_type: AccountType
    password: str = field(repr=False)


@dataclass(frozen=True)
class LoginRequest:
    """Validated login payload."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class FieldRule:
    """Required field with its checks, applied in order."""

    name: str
    checks: tuple[Check, ...]


def is_string(name: str, value: Any) -> str | None:
    if not isinstance(value, str):
        return f'"{name}" must be a string'
    return None


def is_utf8(name: str, value: Any) -> str | None:
    """Reject lone surrogates, which JSON allows but UTF-8 cannot encode."""
    try:
        value.encode()
    except UnicodeEncodeError:
        return f'"{name}" must contain only valid unicode characters'
    return None


def not_empty(name: str, value: Any) -> str | None:
    if value == "":
        return f'"{name}" is not allowed to be empty'
    return None


def min_length(limit: int) -> Check:
    def check(name: str, value: Any) -> str | None:
        if len(value) < limit:
            return f'"{name}" length must be at least {limit} characters long'
        return None

    check.__name__ = f"min_length_{limit}"
    return check


def max_length(limit: int) -> Check:
    def check(name: str, value: Any) -> str | None:
        if len(value) > limit:
            return f'"{name}" length must be less than or equal to {limit} characters long'
        return None

    check.__name__ = f"max_length_{limit}"
    return check


def is_email(name: str, value: Any) -> str | None:
    """Syntax-only check; no DNS lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return f'"{name}" must be a valid email'
    return None


def one_of(*choices: str) -> Check:
    allowed = ", ".join(choices)

    def check(name: str, value: Any) -> str | None:
        if not isinstance(value, str) or value not in choices:
            return f'"{name}" must be one of [{allowed}]'
        return None

    check.__name__ = "one_of"
    return check


def has_upper(name: str, value: Any) -> str | None:
    if not _UPPER_RE.search(value):
        return f"{name} must have an upper case character"
    return None


def has_lower(name: str, value: Any) -> str | None:
    if not _LOWER_RE.search(value):
        return f"{name} must have a lower case character"
    return None


def has_special(name: str, value: Any) -> str | None:
    # Anything outside ASCII letters and digits counts as special.
    if _ALPHANUMERIC_RE.fullmatch(value):
        return f"{name} must have a special case character"
    return None


REGISTRATION_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "username",
        (
            is_string,
            is_utf8,
            not_empty,
            min_length(USERNAME_MIN_LENGTH),
            max_length(USERNAME_MAX_LENGTH),
        ),
    ),
    FieldRule("email", (is_string, is_utf8, not_empty, is_email)),
    FieldRule("accountType", (one_of(*(t.value for t in AccountType)),)),
    FieldRule(
        "password",
        (
            is_string,
            is_utf8,
            not_empty,
            min_length(PASSWORD_MIN_LENGTH),
            max_length(PASSWORD_MAX_LENGTH),
            has_upper,
            has_lower,
            has_special,
        ),
    ),
)

LOGIN_RULES: tuple[FieldRule, ...] = (
    FieldRule("username", (is_string, is_utf8, not_empty)),
    FieldRule("password", (is_string, is_utf8, not_empty)),
)


def first_violation(payload: Any, rules: tuple[FieldRule, ...]) -> str | None:
    """
    Run ``rules`` against ``payload`` and return the first failure message.

    Order of evaluation:
    1. payload must be a mapping
    2. each field rule in declaration order (presence, then its checks)
    3. keys not named by any rule are rejected

    Returns:
        Failure message, or None when every check passes
    """
    if not isinstance(payload, Mapping):
        return '"value" must be of type object'

    for rule in rules:
        if rule.name not in payload:
            return f'"{rule.name}" is required'
        value = payload[rule.name]
        for check in rule.checks:
            message = check(rule.name, value)
            if message is not None:
                return message

    known = {rule.name for rule in rules}
    for key in payload:
        if key not in known:
            return f'"{key}" is not allowed'
    return None


def validate_registration(payload: Any) -> RegistrationRequest | ValidationFailed:
    """Validate a registration payload against REGISTRATION_RULES."""
    message = first_violation(payload, REGISTRATION_RULES)
    if message is not None:
        return ValidationFailed(message)
    return RegistrationRequest(
        username=payload["username"],
        email=payload["email"],
        account_type=AccountType(payload["accountType"]),
        password=payload["password"],
    )


def validate_login(payload: Any) -> LoginRequest | ValidationFailed:
    """Validate a login payload. No password policy is applied at login."""
    message = first_violation(payload, LOGIN_RULES)
    if message is not None:
        return ValidationFailed(message)
    return LoginRequest(username=payload["username"], password=payload["password"])
