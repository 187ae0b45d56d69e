"""Domain-specific exceptions for the notification engine.

These exceptions separate configuration, delivery, and storage failures so
callers can decide which ones are fatal and which are only logged.
"""

from typing import Any


class NotifierError(Exception):
    """Base exception for all notification engine errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NotifierError):
    """Base class for invalid notification configuration."""

    pass


class UnknownProviderError(ConfigurationError):
    """Raised when a provider type has no registered adapter."""

    def __init__(self, provider_type: str) -> None:
        super().__init__(
            f"unknown provider type: {provider_type}",
            {"provider_type": provider_type},
        )


class InvalidProviderConfigError(ConfigurationError):
    """Raised when provider parameters are missing or malformed."""

    def __init__(self, provider_type: str, reason: str) -> None:
        super().__init__(reason, {"provider_type": provider_type})


class InvalidConfigError(ConfigurationError):
    """Raised when a stored parameter blob or event list cannot be parsed."""

    pass


# =============================================================================
# Encryption Errors
# =============================================================================


class EncryptionError(NotifierError):
    """Base class for credential encryption failures."""

    pass


class NoEncryptionKeyError(EncryptionError):
    """Raised when an encrypted value is read without a configured key."""

    def __init__(self) -> None:
        super().__init__("no encryption key configured")


class DecryptionError(EncryptionError):
    """Raised when ciphertext is malformed, tampered, or from another key."""

    def __init__(self) -> None:
        super().__init__("decryption failed: invalid ciphertext")


# =============================================================================
# Delivery Errors
# =============================================================================


class DeliveryError(NotifierError):
    """Raised when a notification could not be delivered."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, details)
        self.status_code = status_code


# =============================================================================
# Storage Errors
# =============================================================================


class StoreError(NotifierError):
    """Raised when the backing store fails or times out."""

    pass


# =============================================================================
# Not Found Errors
# =============================================================================


class NotFoundError(NotifierError):
    """Base class for resource not found errors."""

    pass


class NotificationConfigNotFoundError(NotFoundError):
    """Raised when a notification configuration cannot be found."""

    def __init__(self, config_id: str | None = None) -> None:
        message = "Notification not found"
        details = {"config_id": str(config_id)} if config_id else {}
        super().__init__(message, details)


# =============================================================================
# Event Bus Errors
# =============================================================================


class EventBusError(NotifierError):
    """Raised when an event cannot be published."""

    pass
