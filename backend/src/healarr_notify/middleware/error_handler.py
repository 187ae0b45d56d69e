"""Exception handlers mapping engine errors to safe HTTP responses."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from healarr_notify.config import get_settings
from healarr_notify.exceptions import (
    ConfigurationError,
    EncryptionError,
    NotFoundError,
    StoreError,
)
from healarr_notify.utils.secure_logging import log_error, sanitize_exception_message

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    422: "Invalid input data",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Reduce validation errors to field names and messages.

    Args:
        errors: Errors from RequestValidationError.errors()

    Returns:
        Safe error message
    """
    safe_errors = []
    for error in errors:
        loc = error.get("loc", [])
        msg = error.get("msg", "Invalid value")
        field = loc[-1] if loc else "field"
        if isinstance(field, str) and not field.startswith("_"):
            safe_errors.append(f"{field}: {msg}")
    if safe_errors:
        return "; ".join(safe_errors[:3])
    return SAFE_ERROR_MESSAGES[422]


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle missing resources."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message},
    )


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """Handle invalid notification configurations.

    Messages are generated by the providers and never include parameter
    values, so they are passed through.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Handle backing store failures and timeouts."""
    log_error(logger, f"Store error for {request.url.path}", exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": SAFE_ERROR_MESSAGES[503]},
    )


async def encryption_error_handler(request: Request, exc: EncryptionError) -> JSONResponse:
    """Handle stored configurations that cannot be decrypted."""
    log_error(logger, f"Encryption error for {request.url.path}", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Stored configuration could not be decrypted"},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle validation exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    logger.warning(f"Validation error for {request.url.path}")

    if get_settings().debug:
        detail: Any = exc.errors()
    else:
        detail = sanitize_validation_errors(list(exc.errors()))

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information."""
    logger.error(
        f"Unhandled exception for {request.url.path}: {sanitize_exception_message(exc)}",
        exc_info=True,
    )

    if get_settings().debug:
        content = {"detail": str(exc), "type": type(exc).__name__}
    else:
        content = {"detail": SAFE_ERROR_MESSAGES[500]}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
