"""Shared test fixtures."""

import asyncio
import json
from collections.abc import AsyncGenerator, Callable
from typing import Any
from uuid import UUID

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from healarr_notify.config import Settings
from healarr_notify.database import create_engine, create_session_maker, create_tables, session_scope
from healarr_notify.eventbus import EventHandler
from healarr_notify.models.domain.event import Event
from healarr_notify.repositories.notification_repository import NotificationRepository
from healarr_notify.security.encryption import SecretCipher

TEST_SECRET = "test-encryption-secret"
DISCORD_WEBHOOK = "https://discord.com/api/webhooks/123456789/abcdefTOKEN"
DISCORD_URL = "discord://abcdefTOKEN@123456789"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport:
    """Transport that records sends instead of performing them.

    With a gate, every send waits until the gate is set.
    """

    def __init__(self, error: Exception | None = None, gate: asyncio.Event | None = None) -> None:
        self.error = error
        self.gate = gate
        self.sent: list[tuple[str, str]] = []
        self.active = 0
        self.max_active = 0

    async def send(self, url: str, message: str) -> None:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.gate is not None:
                await self.gate.wait()
            if self.error is not None:
                raise self.error
            self.sent.append((url, message))
        finally:
            self.active -= 1


class RecordingEventBus:
    """Event bus that records subscriptions and published events."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.handlers: dict[str, list[EventHandler]] = {}
        self.published: list[Event] = []

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self.handlers.setdefault(event_type, []).append(handler)

    async def publish(self, event: Event) -> None:
        if self.error is not None:
            raise self.error
        self.published.append(event)

    async def emit(self, event: Event) -> None:
        """Invoke subscribed handlers directly."""
        for handler in self.handlers.get(event.event_type, []):
            await handler(event)


async def wait_for(condition: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll until a condition holds."""
    async with asyncio.timeout(timeout):
        while not condition():
            await asyncio.sleep(0.01)


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-memory database."""
    return Settings(
        database_url="sqlite+aiosqlite://",
        healarr_encryption_key=TEST_SECRET,
        store_timeout_seconds=5,
        http_timeout_seconds=5,
    )


@pytest.fixture
def cipher() -> SecretCipher:
    """Cipher with the test secret."""
    return SecretCipher(TEST_SECRET)


@pytest.fixture
async def engine(settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database engine with all tables created."""
    engine = create_engine(settings)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return create_session_maker(engine)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def event_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def add_config(
    session_maker: async_sessionmaker[AsyncSession], cipher: SecretCipher
) -> Callable[..., Any]:
    """Insert a notification row directly, bypassing validation."""

    async def _add(
        *,
        name: str = "Test",
        provider_type: str = "discord",
        params: dict[str, Any] | None = None,
        events: list[str] | None = None,
        enabled: bool = True,
        throttle_seconds: int = 0,
        raw_config: str | None = None,
        raw_events: str | None = None,
    ) -> UUID:
        if params is None:
            params = {"webhook_url": DISCORD_WEBHOOK}
        if events is None:
            events = ["CorruptionDetected"]
        async with session_scope(session_maker, 5) as session:
            row = await NotificationRepository(session).create(
                name=name,
                provider_type=provider_type,
                config=raw_config if raw_config is not None else cipher.encrypt(json.dumps(params)),
                events=raw_events if raw_events is not None else json.dumps(events),
                enabled=enabled,
                throttle_seconds=throttle_seconds,
            )
            return row.id

    return _add
