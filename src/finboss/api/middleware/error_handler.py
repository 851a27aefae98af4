"""Global error handling.

Every failure is rendered as ``{"status": "error", "message": ...}`` with the
matching HTTP status code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from finboss.config import settings
from finboss.core.errors import format_error_message
from finboss.core.exceptions import FinanceError

logger = logging.getLogger(__name__)

RATE_LIMITED = "Too many requests, please try again later"


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )


async def handle_finance_error(request: Request, exc: FinanceError) -> JSONResponse:
    """Handle errors raised deliberately by services and dependencies.

    Args:
        request: The incoming request
        exc: The application exception

    Returns:
        JSONResponse with the exception's status and message
    """
    extra = {"path": request.url.path, "method": request.method, "status_code": exc.http_status}
    if settings.debug and exc.details:
        extra["details"] = exc.details
    log = logger.warning if exc.http_status < 500 else logger.error
    log(f"{type(exc).__name__}: {exc.message}", extra=extra)

    headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
    return error_response(exc.http_status, exc.message, headers)


def _describe(error: dict) -> str:
    # Drop the "body"/"query" prefix FastAPI adds to locations.
    location = [str(part) for part in error.get("loc", ())][1:]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as 400 with field-level messages.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse listing the invalid fields
    """
    errors = exc.errors()
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = errors
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    message = "; ".join(_describe(error) for error in errors) or "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes, wrong methods and framework-raised HTTP errors."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client_ip": request.client.host if request.client else None,
        },
    )
    return error_response(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMITED)


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors.

    Unique violations that slip past the service pre-checks (concurrent
    creates) surface as 409; anything else is a 500.
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        logger.exception(f"Database integrity error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=extra)

    error_msg = str(exc.orig).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return error_response(status.HTTP_409_CONFLICT, "Resource already exists")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        format_error_message(None, "Database operation failed", settings.app_env),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    The exception text reaches the client only outside production.
    """
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.is_production:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        format_error_message(exc, "Internal server error", settings.app_env),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FinanceError, handle_finance_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)
