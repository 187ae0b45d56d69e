"""Domain models package."""

from healarr_notify.models.domain.event import (
    Event,
    EventGroup,
    EventInfo,
    EventType,
    get_event_groups,
    get_notifiable_event_types,
)
from healarr_notify.models.domain.notification import (
    DeliveryStatus,
    NotificationConfig,
    NotificationLogEntry,
    ProviderType,
    get_provider_label,
)

__all__ = [
    "DeliveryStatus",
    "Event",
    "EventGroup",
    "EventInfo",
    "EventType",
    "NotificationConfig",
    "NotificationLogEntry",
    "ProviderType",
    "get_event_groups",
    "get_notifiable_event_types",
    "get_provider_label",
]
