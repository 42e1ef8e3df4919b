"""
Exception handlers for FastAPI application.

Translates domain, provider and rate limit errors into one JSON error shape:
{"error": true, "code", "message", "details", "status_code"}.
"""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.config.settings import Settings, get_settings
from storefront.core.domain import (
    ConfigurationError,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)
from storefront.models.printify import (
    PrintifyError,
    PrintifyNetworkError,
    PrintifyRateLimitError,
    PrintifyTimeoutError,
    PrintifyValidationError,
)
from storefront.utils.rate_limiter import RateLimitExceeded

logger = logging.getLogger(__name__)

# Upstream statuses passed through unchanged
PASSTHROUGH_STATUSES = {400, 401, 403, 404, 422}
DEFAULT_RETRY_AFTER_SECONDS = 60


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def error_response(
    request: Request,
    exc: Exception,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {
        "error": True,
        "code": code,
        "message": message,
        "details": details or {},
        "status_code": status_code,
    }
    if _settings(request).is_development:
        content["debug"] = {
            "exception": f"{type(exc).__name__}: {exc}",
            "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def printify_status_code(exc: PrintifyError) -> int:
    """HTTP status the storefront answers with for a provider failure."""
    if isinstance(exc, PrintifyTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    if isinstance(exc, PrintifyRateLimitError):
        return status.HTTP_429_TOO_MANY_REQUESTS
    if exc.status_code in PASSTHROUGH_STATUSES:
        return exc.status_code
    return status.HTTP_502_BAD_GATEWAY


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle DomainException subclasses."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    if isinstance(exc, ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc.message}")
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    elif isinstance(exc, ValidationException):
        logger.warning(f"Validation failed on {request.url.path}: {exc.message}")
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, EntityNotFoundException):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidOperationException):
        logger.warning(f"Invalid operation on {request.url.path}: {exc.message}")
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    return error_response(request, exc, status_code, exc.code, exc.message, exc.details)


async def printify_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle Printify API errors."""
    if not isinstance(exc, PrintifyError):
        return await global_exception_handler(request, exc)

    status_code = printify_status_code(exc)
    logger.error(
        f"Printify error on {request.method} {request.url.path}: {exc.error_code} "
        f"(upstream {exc.status_code}) -> {status_code}"
    )

    details: dict[str, Any] = {"provider": "printify"}
    if exc.status_code is not None:
        details["upstream_status"] = exc.status_code
    if isinstance(exc, PrintifyValidationError) and exc.field_errors:
        details["field_errors"] = exc.field_errors
    if isinstance(exc, PrintifyNetworkError):
        details["remediation"] = "Verify network access to api.printify.com and the PRINTIFY_API_BASE_URL setting"

    headers = None
    if isinstance(exc, PrintifyRateLimitError):
        headers = {"Retry-After": str(exc.retry_after_seconds or DEFAULT_RETRY_AFTER_SECONDS)}

    return error_response(request, exc, status_code, exc.error_code, exc.error_message, details, headers)


async def rate_limit_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle the local outbound rate limiter."""
    if not isinstance(exc, RateLimitExceeded):
        return await global_exception_handler(request, exc)

    logger.warning(f"Outbound rate limit reached on {request.url.path}, retry in {exc.retry_after_seconds}s")
    return error_response(
        request,
        exc,
        status.HTTP_429_TOO_MANY_REQUESTS,
        "RATE_LIMITED",
        str(exc),
        {"limit": exc.limit, "retry_after_seconds": exc.retry_after_seconds},
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(
        status_code=http_exc.status_code,
        content={
            "error": True,
            "code": f"HTTP_{http_exc.status_code}",
            "message": http_exc.detail,
            "details": {},
            "status_code": http_exc.status_code,
        },
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors with detailed error messages."""
    if not isinstance(exc, RequestValidationError):
        return await global_exception_handler(request, exc)

    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "code": "REQUEST_VALIDATION_ERROR",
            "message": "Validation error",
            "details": {"errors": errors},
            "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )
    return error_response(
        request,
        exc,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(PrintifyError, printify_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
