"""Notification domain models."""

from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProviderType(StrEnum):
    """Notification provider type."""

    DISCORD = "discord"
    PUSHOVER = "pushover"
    TELEGRAM = "telegram"
    SLACK = "slack"
    EMAIL = "email"
    GOTIFY = "gotify"
    NTFY = "ntfy"
    WHATSAPP = "whatsapp"
    SIGNAL = "signal"
    BARK = "bark"
    GOOGLECHAT = "googlechat"
    IFTTT = "ifttt"
    JOIN = "join"
    MATTERMOST = "mattermost"
    MATRIX = "matrix"
    PUSHBULLET = "pushbullet"
    ROCKETCHAT = "rocketchat"
    TEAMS = "teams"
    ZULIP = "zulip"
    GENERIC = "generic"  # Direct JSON webhook, bypasses the transport
    CUSTOM = "custom"  # Raw transport URL supplied by the user


PROVIDER_LABELS: dict[ProviderType, str] = {
    ProviderType.DISCORD: "Discord",
    ProviderType.PUSHOVER: "Pushover",
    ProviderType.TELEGRAM: "Telegram",
    ProviderType.SLACK: "Slack",
    ProviderType.EMAIL: "Email",
    ProviderType.GOTIFY: "Gotify",
    ProviderType.NTFY: "ntfy",
    ProviderType.WHATSAPP: "WhatsApp",
    ProviderType.SIGNAL: "Signal",
    ProviderType.BARK: "Bark",
    ProviderType.GOOGLECHAT: "Google Chat",
    ProviderType.IFTTT: "IFTTT",
    ProviderType.JOIN: "Join",
    ProviderType.MATTERMOST: "Mattermost",
    ProviderType.MATRIX: "Matrix",
    ProviderType.PUSHBULLET: "Pushbullet",
    ProviderType.ROCKETCHAT: "Rocket.Chat",
    ProviderType.TEAMS: "Microsoft Teams",
    ProviderType.ZULIP: "Zulip",
    ProviderType.GENERIC: "Generic Webhook",
    ProviderType.CUSTOM: "Custom (Shoutrrr URL)",
}


def get_provider_label(provider_type: str) -> str:
    """Get a human-readable label for a provider type.

    Args:
        provider_type: Provider type string

    Returns:
        Display label, or the raw type if unknown
    """
    try:
        return PROVIDER_LABELS[ProviderType(provider_type)]
    except ValueError:
        return provider_type


class DeliveryStatus(StrEnum):
    """Outcome of a delivery attempt."""

    SENT = "sent"
    FAILED = "failed"


class NotificationConfig(BaseModel):
    """A user-defined delivery target with decrypted parameters."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    provider_type: str
    config: dict[str, Any] = Field(default_factory=dict)
    events: frozenset[str] = frozenset()
    enabled: bool = True
    throttle_seconds: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def subscribes_to(self, event_type: str) -> bool:
        """Check whether this config wants notifications for an event type."""
        return event_type in self.events


class NotificationLogEntry(BaseModel):
    """A recorded delivery attempt."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    notification_id: UUID
    event_type: str
    message: str
    status: DeliveryStatus
    error: str = ""
    sent_at: datetime
