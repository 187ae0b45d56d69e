"""Delivery audit log tests."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from healarr_notify.database import session_scope
from healarr_notify.exceptions import StoreError
from healarr_notify.models.domain.notification import DeliveryStatus
from healarr_notify.models.orm.base import Base, utcnow
from healarr_notify.repositories.notification_log_repository import NotificationLogRepository
from healarr_notify.services.delivery_log_service import DeliveryLogService


@pytest.fixture
def delivery_log(session_maker) -> DeliveryLogService:
    return DeliveryLogService(session_maker, store_timeout=5)


async def insert_entries(session_maker, notification_id, count, start=None, step=timedelta(seconds=1)):
    """Insert entries with increasing sent_at timestamps."""
    start = start or utcnow() - timedelta(hours=1)
    async with session_scope(session_maker, 5) as session:
        repo = NotificationLogRepository(session)
        for i in range(count):
            await repo.log(
                notification_id=notification_id,
                event_type="ScanStarted",
                message=f"message {i}",
                status="sent",
                sent_at=start + i * step,
            )


async def drop_tables(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


class TestRecord:
    """Test recording delivery attempts."""

    async def test_record_and_read(self, delivery_log: DeliveryLogService) -> None:
        notification_id = uuid4()

        await delivery_log.record(notification_id, "ScanStarted", "🔍 Scan started: /tv", DeliveryStatus.SENT)
        await delivery_log.record(
            notification_id, "ScanFailed", "❌ Scan failed", DeliveryStatus.FAILED, error="boom"
        )

        entries = await delivery_log.get_entries(notification_id)
        assert len(entries) == 2
        statuses = {entry.event_type: (entry.status, entry.error) for entry in entries}
        assert statuses["ScanStarted"] == (DeliveryStatus.SENT, "")
        assert statuses["ScanFailed"] == (DeliveryStatus.FAILED, "boom")

    async def test_concurrent_records_all_persisted(self, delivery_log: DeliveryLogService) -> None:
        notification_id = uuid4()

        await asyncio.gather(
            *(
                delivery_log.record(notification_id, "ScanStarted", f"message {i}", DeliveryStatus.SENT)
                for i in range(20)
            )
        )

        entries = await delivery_log.get_entries(notification_id, limit=100)
        assert sorted(entry.message for entry in entries) == sorted(f"message {i}" for i in range(20))

    async def test_record_swallows_store_errors(
        self, engine, delivery_log: DeliveryLogService
    ) -> None:
        await drop_tables(engine)

        await delivery_log.record(uuid4(), "ScanStarted", "msg", DeliveryStatus.SENT)


class TestGetEntries:
    """Test reading the log."""

    async def test_newest_first_with_limit(self, session_maker, delivery_log) -> None:
        notification_id = uuid4()
        await insert_entries(session_maker, notification_id, 5)

        entries = await delivery_log.get_entries(notification_id, limit=3)

        assert [entry.message for entry in entries] == ["message 4", "message 3", "message 2"]

    async def test_non_positive_limit_uses_default(self, session_maker, delivery_log) -> None:
        await insert_entries(session_maker, uuid4(), 60)

        assert len(await delivery_log.get_entries(limit=0)) == 50
        assert len(await delivery_log.get_entries(limit=-5)) == 50

    async def test_filter_by_notification(self, session_maker, delivery_log) -> None:
        first, second = uuid4(), uuid4()
        await insert_entries(session_maker, first, 2)
        await insert_entries(session_maker, second, 3)

        assert len(await delivery_log.get_entries(first)) == 2
        assert len(await delivery_log.get_entries(second)) == 3
        assert len(await delivery_log.get_entries()) == 5

    async def test_read_raises_store_error(self, engine, delivery_log) -> None:
        await drop_tables(engine)

        with pytest.raises(StoreError):
            await delivery_log.get_entries()


class TestRetentionSweep:
    """Test log retention."""

    async def test_trims_to_max_entries(self, session_maker, delivery_log) -> None:
        notification_id = uuid4()
        await insert_entries(session_maker, notification_id, 110)

        assert await delivery_log.retention_sweep() == 10

        entries = await delivery_log.get_entries(notification_id, limit=200)
        assert len(entries) == 100
        assert entries[0].message == "message 109"
        assert entries[-1].message == "message 10"

    async def test_removes_entries_past_retention(self, session_maker, delivery_log) -> None:
        notification_id = uuid4()
        await insert_entries(session_maker, notification_id, 1, start=utcnow() - timedelta(days=8))
        await insert_entries(session_maker, notification_id, 2)

        assert await delivery_log.retention_sweep() == 1

        entries = await delivery_log.get_entries(notification_id)
        assert [entry.message for entry in entries] == ["message 1", "message 0"]

    async def test_nothing_to_delete(self, delivery_log) -> None:
        assert await delivery_log.retention_sweep() == 0

    async def test_store_failure_returns_zero(self, engine, delivery_log) -> None:
        await drop_tables(engine)

        assert await delivery_log.retention_sweep() == 0


class TestPurge:
    async def test_purge_only_removes_one_config(self, session_maker, delivery_log) -> None:
        first, second = uuid4(), uuid4()
        await insert_entries(session_maker, first, 3)
        await insert_entries(session_maker, second, 2)

        assert await delivery_log.purge(first) == 3

        assert await delivery_log.get_entries(first) == []
        assert len(await delivery_log.get_entries(second)) == 2
