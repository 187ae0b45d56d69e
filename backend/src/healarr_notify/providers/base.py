"""Base provider interface."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar
from urllib.parse import quote_plus, urlencode

from healarr_notify.exceptions import InvalidProviderConfigError
from healarr_notify.models.domain.notification import PROVIDER_LABELS, ProviderType

HTTPS_PREFIX = "https://"
HTTP_PREFIX = "http://"


def strip_scheme(url: str) -> str:
    """Strip a leading https:// or http:// from a URL."""
    return url.removeprefix(HTTPS_PREFIX).removeprefix(HTTP_PREFIX)


def normalize_api_url(url: str) -> str:
    """Strip the scheme and a trailing slash from a server URL.

    Args:
        url: Server URL as entered by the user

    Returns:
        Host and path suitable for embedding in a transport URL
    """
    return strip_scheme(url.removesuffix("/"))


def query_escape(value: str) -> str:
    """Escape a value for use in a URL query component."""
    return quote_plus(value)


def encode_query(params: dict[str, str]) -> str:
    """Encode query parameters sorted by key."""
    return urlencode(sorted(params.items()))


class BaseProvider(ABC):
    """Abstract base class for notification providers.

    A provider turns a user's parameter blob into a transport connection
    URL. Providers perform no I/O while building URLs.
    """

    provider_type: ClassVar[ProviderType]

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize provider with its parameters.

        Args:
            config: Provider-specific parameters (plaintext)
        """
        self.config = config

    @property
    def label(self) -> str:
        """Human-readable provider name."""
        return PROVIDER_LABELS[self.provider_type]

    @abstractmethod
    def build_url(self) -> str:
        """Build the transport connection URL.

        Returns:
            Connection URL for the transport

        Raises:
            InvalidProviderConfigError: If required parameters are missing or malformed
        """
        pass

    def invalid(self, reason: str) -> InvalidProviderConfigError:
        """Create a configuration error for this provider."""
        return InvalidProviderConfigError(self.provider_type.value, reason)

    def get(self, key: str, default: str = "") -> str:
        """Get a string parameter, or the default if missing or null."""
        value = self.config.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def require(self, key: str) -> str:
        """Get a string parameter that must be present and non-blank.

        Raises:
            InvalidProviderConfigError: If the parameter is missing or blank
        """
        value = self.get(key).strip()
        if not value:
            raise self.invalid(f"missing required field: {key}")
        return value

    def get_int(self, key: str, default: int = 0) -> int:
        """Get an integer parameter.

        Accepts ints, integral floats and numeric strings.

        Raises:
            InvalidProviderConfigError: If the parameter is not a number
        """
        value = self.config.get(key)
        if value is None or value == "":
            return default
        if isinstance(value, bool):
            raise self.invalid(f"{key} must be a number")
        try:
            return int(float(value)) if isinstance(value, (float, str)) else int(value)
        except (TypeError, ValueError):
            raise self.invalid(f"{key} must be a number") from None

    def get_bool(self, key: str) -> bool:
        """Get a boolean parameter (accepts true/false strings)."""
        value = self.config.get(key)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
