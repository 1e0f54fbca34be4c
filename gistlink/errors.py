"""API error taxonomy and the JSON error handlers that render it."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that are reported to the client as ``{"error": message}``."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Malformed, missing, extra or invalid request fields."""


class ConflictError(ApiError):
    """A unique account field is already taken."""

    @classmethod
    def for_field(cls, field: str, value: object) -> "ConflictError":
        return cls(f"User with {field} '{value}' already exists")


class NotFoundError(ApiError):
    """Well-formed id with no matching row.

    Reported as 400 so callers cannot tell existence apart from other bad input.
    """


class UpstreamError(ApiError):
    """The gist lookup failed or returned an unacceptable gist."""


class MissingTokenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Missing token"):
        super().__init__(message)


class InvalidTokenError(ApiError):
    """Bad signature, garbage or expired token."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class UnauthorizedError(ApiError):
    """Valid token for a different user."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class DemoAccountError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Demo account disabled"):
        super().__init__(message)


class MissingCurrentPasswordError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Missing current password"):
        super().__init__(message)


class InvalidCurrentPasswordError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid current password"):
        super().__init__(message)


class InvalidCredentialsError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class StoreError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": message}`` without internal detail."""

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid body")

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
