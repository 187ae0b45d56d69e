"""Repository layer package."""

from healarr_notify.repositories.base import BaseRepository
from healarr_notify.repositories.notification_log_repository import NotificationLogRepository
from healarr_notify.repositories.notification_repository import NotificationRepository

__all__ = [
    "BaseRepository",
    "NotificationLogRepository",
    "NotificationRepository",
]
