"""Notification configuration repository."""

from sqlalchemy import select

from healarr_notify.models.orm.notification import NotificationORM
from healarr_notify.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[NotificationORM]):
    """Repository for notification configuration rows.

    Rows hold the stored (possibly encrypted) parameter blob; decryption is
    the caller's job.
    """

    model = NotificationORM

    async def get_all(self) -> list[NotificationORM]:
        """Get all notification configs ordered by name."""
        result = await self.session.execute(
            select(NotificationORM).order_by(NotificationORM.name)
        )
        return list(result.scalars().all())

    async def get_enabled(self) -> list[NotificationORM]:
        """Get all enabled notification configs."""
        result = await self.session.execute(
            select(NotificationORM).where(NotificationORM.enabled.is_(True))
        )
        return list(result.scalars().all())
