"""Error taxonomy and the handlers that render it as the error envelope.

Every failure a request can end in is one of the classes below, raised where
the failure is detected. The handlers registered by
``register_exception_handlers`` turn them (and framework/store faults) into::

    {"success": false, "message": "...", "errors": ["..."]}
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BlogHubError(HTTPException):
    """Base class for errors rendered through the error envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(
        self,
        message: str | None = None,
        errors: list[str] | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(status_code=type(self).status_code, detail=self.message, headers=headers)


class ValidationFailed(BlogHubError):
    """Malformed or out-of-range input. Carries one message per field."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation Error"


class AuthError(BlogHubError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(BlogHubError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(BlogHubError):
    """Resource absent, or deliberately masked as absent."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class DomainConflict(BlogHubError):
    """Request conflicts with stored state, e.g. a duplicate unique field."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class RateLimitExceeded(BlogHubError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests from this IP, please try again later."

    def __init__(self, retry_after: int):
        super().__init__(headers={"Retry-After": str(retry_after)})


class UnexpectedError(BlogHubError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


def error_body(message: str, errors: list[str] | None = None) -> dict:
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def _format_validation_error(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


async def blog_error_handler(request: Request, exc: BlogHubError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.errors),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    failure = ValidationFailed(errors=[_format_validation_error(e) for e in exc.errors()])
    return await blog_error_handler(request, failure)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return await blog_error_handler(request, DomainConflict("Duplicate or conflicting value"))


def make_unhandled_exception_handler(show_detail: bool):
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        failure = UnexpectedError(errors=[f"{type(exc).__name__}: {exc}"] if show_detail else None)
        return await blog_error_handler(request, failure)

    return unhandled_exception_handler


def register_exception_handlers(app: FastAPI, show_detail: bool = False) -> None:
    app.add_exception_handler(BlogHubError, blog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, make_unhandled_exception_handler(show_detail))


__all__ = [
    "BlogHubError",
    "ValidationFailed",
    "AuthError",
    "AuthorizationError",
    "NotFoundError",
    "DomainConflict",
    "RateLimitExceeded",
    "UnexpectedError",
    "error_body",
    "register_exception_handlers",
]
