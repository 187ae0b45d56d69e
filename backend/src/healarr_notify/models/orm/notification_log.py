"""Notification delivery log ORM model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from healarr_notify.models.orm.base import Base, UUIDMixin, utcnow


class NotificationLogORM(Base, UUIDMixin):
    """Delivery attempt database model.

    No foreign key to ``notifications``: rows may outlive their config until
    the config's delete purges them or the retention sweep removes them.
    """

    __tablename__ = "notification_log"

    notification_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        Index("idx_notification_log_notification_id", "notification_id"),
        Index("idx_notification_log_sent_at", "sent_at"),
    )
