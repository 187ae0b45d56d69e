"""Notification delivery log repository."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, select

from healarr_notify.models.orm.base import utcnow
from healarr_notify.models.orm.notification_log import NotificationLogORM
from healarr_notify.repositories.base import BaseRepository


class NotificationLogRepository(BaseRepository[NotificationLogORM]):
    """Repository for delivery log operations."""

    model = NotificationLogORM

    async def log(
        self,
        notification_id: UUID,
        event_type: str,
        message: str,
        status: str,
        error: str | None = None,
        sent_at: datetime | None = None,
    ) -> NotificationLogORM:
        """Append a delivery log entry.

        Args:
            notification_id: Config the delivery was for
            event_type: Triggering event type
            message: Rendered message
            status: "sent" or "failed"
            error: Error text for failed deliveries
            sent_at: Attempt time (defaults to now)

        Returns:
            Created NotificationLogORM
        """
        entry = NotificationLogORM(
            id=uuid4(),
            notification_id=notification_id,
            event_type=event_type,
            message=message,
            status=status,
            error=error or None,
            sent_at=sent_at or utcnow(),
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_recent(
        self,
        notification_id: UUID | None = None,
        limit: int = 50,
    ) -> list[NotificationLogORM]:
        """Get recent log entries, newest first.

        Args:
            notification_id: Restrict to one config (all configs if None)
            limit: Maximum results

        Returns:
            List of log entries
        """
        query = select(NotificationLogORM)
        if notification_id is not None:
            query = query.where(NotificationLogORM.notification_id == notification_id)
        query = query.order_by(NotificationLogORM.sent_at.desc()).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete entries sent before a cutoff.

        Returns:
            Number of deleted rows
        """
        result = await self.session.execute(
            delete(NotificationLogORM)
            .where(NotificationLogORM.sent_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def trim_to(self, keep: int) -> int:
        """Delete all but the most recently sent entries.

        Args:
            keep: Number of newest entries to keep (across all configs)

        Returns:
            Number of deleted rows
        """
        newest = (
            select(NotificationLogORM.id)
            .order_by(NotificationLogORM.sent_at.desc())
            .limit(keep)
        )
        result = await self.session.execute(
            delete(NotificationLogORM)
            .where(NotificationLogORM.id.not_in(newest))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def delete_for_notification(self, notification_id: UUID) -> int:
        """Delete all entries for one config.

        Returns:
            Number of deleted rows
        """
        result = await self.session.execute(
            delete(NotificationLogORM)
            .where(NotificationLogORM.notification_id == notification_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
