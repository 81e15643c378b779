"""
API response models.

Pydantic models for FastAPI response serialization and OpenAPI schema
generation. Request bodies are not modelled here: they are handed to the
domain validator untouched so its messages reach the caller.
"""

from pydantic import BaseModel, ConfigDict, Field

from authcore.domain.ports import AccountType, RegisteredUser


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    account_type: AccountType = Field(..., alias="accountType")

    @classmethod
    def from_user(cls, user: RegisteredUser) -> "RegisterResponse":
        return cls(username=user.username, email=user.email, account_type=user.account_type)


class LoginResponse(BaseModel):
    """Empty response body for successful login."""


class ValidationErrorResponse(BaseModel):
    """Error body for rejected request payloads."""

    error: str


class ErrorResponse(BaseModel):
    """Error body for conflicts and failed logins."""

    error_name: str
    error_message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    users: int
