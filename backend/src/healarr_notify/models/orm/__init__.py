"""SQLAlchemy ORM models package."""

from healarr_notify.models.orm.base import Base
from healarr_notify.models.orm.notification import NotificationORM
from healarr_notify.models.orm.notification_log import NotificationLogORM

__all__ = [
    "Base",
    "NotificationORM",
    "NotificationLogORM",
]
