"""Notification configuration ORM model."""

from sqlalchemy import Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from healarr_notify.models.orm.base import Base, TimestampMixin, UUIDMixin


class NotificationORM(Base, UUIDMixin, TimestampMixin):
    """Notification configuration database model.

    ``config`` holds the provider parameters as JSON, encrypted with the
    ``enc:v1:`` marker when a key is configured and plaintext otherwise.
    ``events`` holds the subscribed event types as a JSON array.
    """

    __tablename__ = "notifications"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    provider_type: Mapped[str] = mapped_column(String(50), nullable=False)
    config: Mapped[str] = mapped_column(Text, nullable=False)
    events: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    throttle_seconds: Mapped[int] = mapped_column(Integer, default=5, nullable=False)

    __table_args__ = (Index("idx_notifications_enabled", "enabled"),)
