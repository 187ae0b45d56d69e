"""Data transfer objects package."""

from healarr_notify.models.dto.notification import (
    EventGroupListResponse,
    NotificationConfigCreate,
    NotificationConfigListResponse,
    NotificationConfigResponse,
    NotificationConfigUpdate,
    NotificationLogEntryResponse,
    TestNotificationRequest,
    TestNotificationResponse,
)

__all__ = [
    "EventGroupListResponse",
    "NotificationConfigCreate",
    "NotificationConfigListResponse",
    "NotificationConfigResponse",
    "NotificationConfigUpdate",
    "NotificationLogEntryResponse",
    "TestNotificationRequest",
    "TestNotificationResponse",
]
