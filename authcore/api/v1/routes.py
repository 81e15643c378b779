"""
API v1 routes.

Defines REST endpoints for registration and login, and the single place
where domain outcomes are translated into HTTP status codes:

- ValidationFailed -> 400
- UsernameConflict / EmailConflict -> 409
- InvalidCredentials -> 401

Exceptions raised below the domain boundary are not caught here; FastAPI
answers them with a generic 500.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from authcore.api.dependencies import get_auth_service
from authcore.api.models import (
    ErrorResponse,
    LoginResponse,
    RegisterResponse,
    ValidationErrorResponse,
)
from authcore.domain.auth import AuthService
from authcore.domain.errors import ErrorKind, LoginSuccess
from authcore.domain.ports import RegisteredUser

router = APIRouter(tags=["v1"])

# Status code and client-facing error name for each non-validation failure.
_ERROR_STATUS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.USERNAME_CONFLICT: (status.HTTP_409_CONFLICT, "UsernameAlreadyExists"),
    ErrorKind.EMAIL_CONFLICT: (status.HTTP_409_CONFLICT, "EmailAlreadyExists"),
    ErrorKind.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "InvalidCredentials"),
}


def error_response(outcome: Any) -> JSONResponse:
    """
    Map a domain failure value to its HTTP response.

    Raises:
        TypeError: If ``outcome`` is not one of the domain failure variants
    """
    kind = getattr(outcome, "kind", None)
    if kind is ErrorKind.VALIDATION_FAILED:
        body = ValidationErrorResponse(error=outcome.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())
    if kind in _ERROR_STATUS:
        status_code, error_name = _ERROR_STATUS[kind]
        body = ErrorResponse(error_name=error_name, error_message=outcome.message)
        return JSONResponse(status_code=status_code, content=body.model_dump())
    raise TypeError(f"Unhandled outcome: {outcome!r}")


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body.

    An empty body, or one not sent as application/json, is read as an empty
    object so field rules report the first missing field. A JSON body that
    fails to decode becomes None, which fails validation as a non-object
    payload.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "application/json" or not await request.body():
        return {}
    try:
        return await request.json()
    except ValueError:
        return None


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
    summary="Register a new user",
    description="Submit username, email, accountType and password to create an account.",
)
async def register(
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> RegisterResponse | JSONResponse:
    """
    Register a new user.

    - **username**: 3-24 characters, unique
    - **email**: valid email address, unique
    - **accountType**: `user` or `admin`
    - **password**: 5-24 characters with upper case, lower case and special characters
    """
    payload = await read_json_body(request)

    # bcrypt is deliberately slow; keep it off the event loop.
    outcome = await run_in_threadpool(service.register, payload)
    if isinstance(outcome, RegisteredUser):
        return RegisterResponse.from_user(outcome)
    return error_response(outcome)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid username/password"},
    },
    summary="Verify username and password",
)
async def login(
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse | JSONResponse:
    """
    Verify credentials.

    Returns an empty body on success. Unknown usernames and wrong
    passwords are indistinguishable.
    """
    payload = await read_json_body(request)

    outcome = await run_in_threadpool(service.login, payload)
    if isinstance(outcome, LoginSuccess):
        return LoginResponse()
    return error_response(outcome)
