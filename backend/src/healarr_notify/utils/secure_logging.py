"""Secure logging utilities to keep notification credentials out of logs."""

import logging
import re
from functools import lru_cache

from healarr_notify.config import get_settings

MAX_LOGGED_MESSAGE = 200


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def redact_url(url: str) -> str:
    """Redact a transport URL down to its scheme and host.

    Transport URLs embed tokens in the user-info, path and query parts
    (e.g. discord://{token}@{id}), so only the scheme and the host
    after any "@" are kept.

    Args:
        url: Transport or webhook URL

    Returns:
        Redacted URL safe for logging
    """
    scheme, sep, rest = url.partition("://")
    if not sep:
        return "[REDACTED]"
    authority = rest.split("?", 1)[0].split("/", 1)[0]
    host = authority.rpartition("@")[2]
    return f"{scheme}://{host}/[REDACTED]"


def sanitize_exception_message(error: Exception | str) -> str:
    """Sanitize an error message for logging and storage.

    Removes potentially sensitive information like:
    - URLs (webhook URLs carry tokens)
    - Email addresses
    - API keys/tokens

    Args:
        error: Exception or error text to sanitize

    Returns:
        Sanitized error message
    """
    error_msg = str(error)

    # Webhook and transport URLs, including generic+https:// style schemes
    error_msg = re.sub(r"[a-zA-Z][a-zA-Z0-9+.\-]*://[^\s'\"]+", "[URL]", error_msg)

    error_msg = re.sub(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+", "[EMAIL]", error_msg)

    # Long alphanumeric strings are most likely tokens
    error_msg = re.sub(r"[a-zA-Z0-9_\-]{32,}", "[TOKEN]", error_msg)

    if len(error_msg) > MAX_LOGGED_MESSAGE:
        error_msg = error_msg[: MAX_LOGGED_MESSAGE - 3] + "..."

    return error_msg


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details.
    In production, logs sanitized message without sensitive details.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
    """
    if error is None:
        logger.error(message)
    elif is_debug_mode():
        logger.error(f"{message}: {error}", exc_info=error)
    else:
        logger.error(f"{message}: {sanitize_exception_message(error)}")


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
) -> None:
    """Log a warning with appropriate detail level based on environment.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
    """
    if error is None:
        logger.warning(message)
    elif is_debug_mode():
        logger.warning(f"{message}: {error}")
    else:
        logger.warning(f"{message}: {sanitize_exception_message(error)}")
