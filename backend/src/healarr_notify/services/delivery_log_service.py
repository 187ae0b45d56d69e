"""Delivery audit log service."""

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from healarr_notify.database import session_scope
from healarr_notify.exceptions import StoreError
from healarr_notify.models.domain.notification import DeliveryStatus, NotificationLogEntry
from healarr_notify.models.orm.base import utcnow
from healarr_notify.repositories.notification_log_repository import NotificationLogRepository
from healarr_notify.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


class DeliveryLogService:
    """Records delivery attempts and enforces log retention.

    Writes are best-effort: store failures are logged and never raised, so
    auditing cannot break delivery. Reads raise StoreError.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        store_timeout: float = 10.0,
        retention_days: int = 7,
        max_entries: int = 100,
    ) -> None:
        self._session_maker = session_maker
        self._store_timeout = store_timeout
        self.retention_days = retention_days
        self.max_entries = max_entries

    async def record(
        self,
        notification_id: UUID,
        event_type: str,
        message: str,
        status: DeliveryStatus,
        error: str = "",
    ) -> None:
        """Record a delivery attempt.

        Args:
            notification_id: Config the delivery was for
            event_type: Triggering event type
            message: Message that was sent
            status: Delivery outcome
            error: Error text for failed deliveries
        """
        try:
            async with session_scope(self._session_maker, self._store_timeout) as session:
                await NotificationLogRepository(session).log(
                    notification_id=notification_id,
                    event_type=event_type,
                    message=message,
                    status=status.value,
                    error=error,
                )
        except StoreError as e:
            log_error(logger, "Failed to log notification", e)

    async def retention_sweep(self) -> int:
        """Delete old entries, then all but the most recent ones.

        Returns:
            Total number of deleted entries (0 if the store failed)
        """
        cutoff = utcnow() - timedelta(days=self.retention_days)
        try:
            async with session_scope(self._session_maker, self._store_timeout) as session:
                repo = NotificationLogRepository(session)
                expired = await repo.delete_older_than(cutoff)
                trimmed = await repo.trim_to(self.max_entries)
        except StoreError as e:
            log_error(logger, "Failed to clean up notification logs", e)
            return 0

        if expired:
            logger.info(f"Cleaned up {expired} old notification log entries")
        if trimmed:
            logger.info(f"Trimmed {trimmed} notification log entries over the limit")
        return expired + trimmed

    async def get_entries(
        self,
        notification_id: UUID | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[NotificationLogEntry]:
        """Get recent entries, newest first.

        Args:
            notification_id: Restrict to one config (all configs if None)
            limit: Maximum results (values <= 0 use the default of 50)

        Returns:
            List of log entries

        Raises:
            StoreError: If the store fails
        """
        if limit <= 0:
            limit = DEFAULT_LIMIT

        async with session_scope(self._session_maker, self._store_timeout) as session:
            rows = await NotificationLogRepository(session).get_recent(notification_id, limit)
        return [
            NotificationLogEntry(
                id=row.id,
                notification_id=row.notification_id,
                event_type=row.event_type,
                message=row.message,
                status=DeliveryStatus(row.status),
                error=row.error or "",
                sent_at=row.sent_at,
            )
            for row in rows
        ]

    async def purge(self, notification_id: UUID) -> int:
        """Delete all entries for a config.

        Returns:
            Number of deleted entries (0 if the store failed)
        """
        try:
            async with session_scope(self._session_maker, self._store_timeout) as session:
                return await NotificationLogRepository(session).delete_for_notification(
                    notification_id
                )
        except StoreError as e:
            log_error(logger, f"Failed to purge log entries for notification {notification_id}", e)
            return 0
