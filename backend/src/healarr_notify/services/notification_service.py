"""Notification dispatch service.

Subscribes to domain events, matches them against enabled notification
configurations and delivers notifications concurrently, one task per
matching configuration.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from healarr_notify.config import Settings, get_settings
from healarr_notify.database import session_scope
from healarr_notify.eventbus import EventBus
from healarr_notify.exceptions import (
    ConfigurationError,
    EncryptionError,
    NotificationConfigNotFoundError,
    NotifierError,
)
from healarr_notify.models.domain.event import Event, EventType, get_notifiable_event_types
from healarr_notify.models.domain.notification import (
    DeliveryStatus,
    NotificationConfig,
    NotificationLogEntry,
    get_provider_label,
)
from healarr_notify.models.dto.notification import NotificationConfigCreate, NotificationConfigUpdate
from healarr_notify.providers.generic import GenericWebhookProvider
from healarr_notify.providers.registry import build_provider_url, get_provider
from healarr_notify.repositories.notification_repository import NotificationRepository
from healarr_notify.security.encryption import SecretCipher
from healarr_notify.services.config_cache import ConfigCache
from healarr_notify.services.config_codec import encode_events, encode_params, row_to_config
from healarr_notify.services.delivery_log_service import DeliveryLogService
from healarr_notify.services.message_formatter import file_name_from_path, format_message, format_title
from healarr_notify.services.throttle import ThrottleGate
from healarr_notify.services.transport import Transport
from healarr_notify.utils.secure_logging import log_error, log_warning

logger = logging.getLogger(__name__)

TEST_MESSAGE = "🧪 Healarr Test Notification\n✅ Your notification configuration is working correctly!"
CORRELATION_AGGREGATE_TYPE = "corruption"


def extract_correlation_id(data: dict[str, Any]) -> str:
    """Get the aggregate ID used to correlate notification outcomes.

    Only ``aggregate_id`` and ``corruption_id`` qualify; a file path is
    never used as a correlation key.

    Returns:
        Correlation ID, or an empty string if none is present
    """
    for key in ("aggregate_id", "corruption_id"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


class NotificationService:
    """Dispatches notifications for domain events.

    Owns the config cache, the throttle state and the set of in-flight
    delivery tasks. Delivery tasks are never cancelled; stop() waits for
    them.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        event_bus: EventBus,
        cipher: SecretCipher,
        transport: Transport,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize service.

        Args:
            session_maker: Session factory for the backing store
            event_bus: Bus to subscribe to and publish outcome events on
            cipher: Cipher for stored provider parameters
            transport: Transport for provider URLs
            http_client: HTTP client for generic webhooks (created and owned if None)
            settings: Application settings
            clock: Monotonic clock for throttling
        """
        self.settings = settings or get_settings()
        self._session_maker = session_maker
        self._event_bus = event_bus
        self._cipher = cipher
        self._transport = transport
        self._store_timeout = self.settings.store_timeout_seconds

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.http_timeout_seconds),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
            headers={"User-Agent": self.settings.user_agent},
        )

        self.cache = ConfigCache(session_maker, cipher, self._store_timeout)
        self.throttle = ThrottleGate(clock)
        self.delivery_log = DeliveryLogService(
            session_maker,
            store_timeout=self._store_timeout,
            retention_days=self.settings.notification_log_retention_days,
            max_entries=self.settings.notification_log_max_entries,
        )

        self._tasks: set[asyncio.Task[None]] = set()
        self._stop_event = asyncio.Event()
        self._reload_event = asyncio.Event()
        self._worker: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._worker is not None

    @property
    def in_flight(self) -> int:
        """Number of delivery tasks still running."""
        return len(self._tasks)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Load configs, subscribe to events and start the background worker.

        Raises:
            StoreError: If the initial config load fails
        """
        if self._worker is not None:
            return

        await self.cache.reload()

        for event_type in get_notifiable_event_types():
            self._event_bus.subscribe(event_type, self._on_event)

        self._stop_event.clear()
        self._worker = asyncio.create_task(self._background_worker(), name="notification-worker")
        logger.info(f"Notification service started with {len(self.cache)} configurations")

    async def stop(self) -> None:
        """Stop the background worker and wait for in-flight deliveries."""
        if self._worker is not None:
            self._stop_event.set()
            await self._worker
            self._worker = None

        await self.wait_idle()

        if self._owns_http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
        logger.info("Notification service stopped")

    async def wait_idle(self) -> None:
        """Wait until every in-flight delivery task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def reload_configs(self) -> None:
        """Request a config reload.

        Requests coalesce: any number of calls before the worker wakes
        up cause a single reload.
        """
        self._reload_event.set()

    async def _background_worker(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self.settings.notification_log_sweep_interval_seconds
        next_sweep = loop.time() + interval

        while not self._stop_event.is_set():
            waiters = {
                asyncio.create_task(self._stop_event.wait()),
                asyncio.create_task(self._reload_event.wait()),
            }
            try:
                await asyncio.wait(
                    waiters,
                    timeout=max(0.0, next_sweep - loop.time()),
                    return_when=asyncio.FIRST_COMPLETED,
                )
            finally:
                for waiter in waiters:
                    waiter.cancel()

            if self._stop_event.is_set():
                break

            if self._reload_event.is_set():
                self._reload_event.clear()
                try:
                    count = await self.cache.reload()
                    logger.info(f"Notification configs reloaded: {count} active")
                except NotifierError as e:
                    log_error(logger, "Failed to reload notification configs", e)

            if loop.time() >= next_sweep:
                await self.delivery_log.retention_sweep()
                next_sweep = loop.time() + interval

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def _on_event(self, event: Event) -> None:
        data = dict(event.event_data)
        if event.aggregate_id:
            data["aggregate_id"] = event.aggregate_id
        self.handle_event(event.event_type, data)

    def handle_event(self, event_type: str, data: dict[str, Any]) -> int:
        """Dispatch an event to every matching configuration.

        Returns immediately; deliveries run as background tasks.

        Args:
            event_type: Event type
            data: Event data

        Returns:
            Number of deliveries started
        """
        dispatched = 0
        for config in self.cache.snapshot().values():
            if not config.enabled or not config.subscribes_to(event_type):
                continue
            if not self.throttle.try_acquire(config.id, config.throttle_seconds):
                logger.debug(f"Throttled notification {config.id} for event {event_type}")
                continue
            self._spawn(self._send_notification(config, event_type, dict(data)))
            dispatched += 1
        return dispatched

    def send_system_health_degraded(self, data: dict[str, Any]) -> int:
        """Dispatch a SystemHealthDegraded notification without the event bus."""
        return self.handle_event(EventType.SYSTEM_HEALTH_DEGRADED, data)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send_notification(
        self,
        config: NotificationConfig,
        event_type: str,
        data: dict[str, Any],
    ) -> None:
        message = format_message(event_type, data)
        failure: Exception | None = None

        try:
            provider = get_provider(config.provider_type, config.config)
            if isinstance(provider, GenericWebhookProvider):
                payload = provider.build_payload(
                    event_type=event_type,
                    title=format_title(event_type, file_name_from_path(str(data.get("file_path") or ""))),
                    message=message,
                    data=data,
                    source=self.settings.notification_source,
                    timestamp=datetime.now(UTC),
                )
                message = f"[Generic Webhook] {event_type}"
                await provider.deliver(
                    self._http_client,
                    payload,
                    user_agent=self.settings.user_agent,
                    timeout=self.settings.http_timeout_seconds,
                )
            else:
                await self._transport.send(provider.build_url(), message)
        except Exception as e:
            if not isinstance(e, NotifierError):
                logger.exception(f"Unexpected error sending notification {config.id}")
            failure = e

        error = _error_text(failure)
        if failure is not None:
            log_warning(logger, f"Failed to send notification {config.id} for event {event_type}", failure)
            await self.delivery_log.record(config.id, event_type, message, DeliveryStatus.FAILED, error)
        else:
            logger.debug(f"Sent notification {config.id} for event {event_type}")
            await self.delivery_log.record(config.id, event_type, message, DeliveryStatus.SENT)

        await self._publish_outcome(config, event_type, data, error)

    async def _publish_outcome(
        self,
        config: NotificationConfig,
        event_type: str,
        data: dict[str, Any],
        error: str,
    ) -> None:
        correlation_id = extract_correlation_id(data)
        if not correlation_id:
            return

        event_data: dict[str, Any] = {
            "provider": get_provider_label(config.provider_type),
            "trigger_event": event_type,
        }
        if error:
            event_data["error"] = error

        event = Event(
            event_type=EventType.NOTIFICATION_FAILED if error else EventType.NOTIFICATION_SENT,
            aggregate_type=CORRELATION_AGGREGATE_TYPE,
            aggregate_id=correlation_id,
            event_data=event_data,
        )
        try:
            await self._event_bus.publish(event)
        except Exception as e:
            log_error(logger, f"Failed to publish {event.event_type} event", e)

    async def send_test(self, provider_type: str, params: dict[str, Any]) -> None:
        """Send the test message to a configuration, bypassing throttle and audit.

        Args:
            provider_type: Provider type
            params: Provider parameters

        Raises:
            ConfigurationError: If the configuration is invalid
            DeliveryError: If sending failed
        """
        url = build_provider_url(provider_type, params)
        await self._transport.send(url, TEST_MESSAGE)

    # =========================================================================
    # Configuration management
    # =========================================================================

    async def list_configs(self) -> list[NotificationConfig]:
        """Get all configurations ordered by name.

        Configurations whose parameters cannot be decrypted are skipped.
        """
        async with session_scope(self._session_maker, self._store_timeout) as session:
            rows = await NotificationRepository(session).get_all()

        configs = []
        for row in rows:
            try:
                configs.append(row_to_config(row, self._cipher))
            except (EncryptionError, ConfigurationError) as e:
                log_error(logger, f"Failed to decode notification {row.id}", e)
        return configs

    async def get_config(self, config_id: UUID) -> NotificationConfig:
        """Get a configuration by ID.

        Raises:
            NotificationConfigNotFoundError: If it does not exist
            EncryptionError: If its parameters cannot be decrypted
        """
        async with session_scope(self._session_maker, self._store_timeout) as session:
            row = await NotificationRepository(session).get_by_id(config_id)
        if row is None:
            raise NotificationConfigNotFoundError(str(config_id))
        return row_to_config(row, self._cipher)

    async def create_config(self, data: NotificationConfigCreate) -> NotificationConfig:
        """Validate, encrypt and store a new configuration.

        Raises:
            ConfigurationError: If the provider parameters are invalid
        """
        build_provider_url(data.provider_type, data.config)

        async with session_scope(self._session_maker, self._store_timeout) as session:
            row = await NotificationRepository(session).create(
                name=data.name,
                provider_type=data.provider_type.value,
                config=encode_params(data.config, self._cipher),
                events=encode_events(_dedupe(data.events)),
                enabled=data.enabled,
                throttle_seconds=data.throttle_seconds,
            )
            config = row_to_config(row, self._cipher)

        logger.info(f"Created notification {config.id} ({config.provider_type})")
        self.reload_configs()
        return config

    async def update_config(self, config_id: UUID, data: NotificationConfigUpdate) -> NotificationConfig:
        """Update a configuration. Unset fields are left unchanged.

        Raises:
            NotificationConfigNotFoundError: If it does not exist
            ConfigurationError: If the resulting provider parameters are invalid
        """
        async with session_scope(self._session_maker, self._store_timeout) as session:
            repo = NotificationRepository(session)
            row = await repo.get_by_id(config_id)
            if row is None:
                raise NotificationConfigNotFoundError(str(config_id))

            updates: dict[str, Any] = {}
            if data.name is not None:
                updates["name"] = data.name
            if data.events is not None:
                updates["events"] = encode_events(_dedupe(data.events))
            if data.enabled is not None:
                updates["enabled"] = data.enabled
            if data.throttle_seconds is not None:
                updates["throttle_seconds"] = data.throttle_seconds

            if data.provider_type is not None or data.config is not None:
                provider_type = data.provider_type.value if data.provider_type else row.provider_type
                if data.config is not None:
                    params = data.config
                else:
                    params = row_to_config(row, self._cipher).config
                build_provider_url(provider_type, params)
                updates["provider_type"] = provider_type
                updates["config"] = encode_params(params, self._cipher)

            row = await repo.update(config_id, **updates)
            config = row_to_config(row, self._cipher)

        logger.info(f"Updated notification {config_id}")
        self.reload_configs()
        return config

    async def delete_config(self, config_id: UUID) -> None:
        """Delete a configuration with its log entries and throttle state.

        Raises:
            NotificationConfigNotFoundError: If it does not exist
        """
        async with session_scope(self._session_maker, self._store_timeout) as session:
            deleted = await NotificationRepository(session).delete(config_id)
        if not deleted:
            raise NotificationConfigNotFoundError(str(config_id))

        await self.delivery_log.purge(config_id)
        self.throttle.forget(config_id)

        logger.info(f"Deleted notification {config_id}")
        self.reload_configs()

    async def get_delivery_log(
        self,
        config_id: UUID | None = None,
        limit: int = 50,
    ) -> list[NotificationLogEntry]:
        """Get recent delivery log entries, newest first."""
        return await self.delivery_log.get_entries(config_id, limit)


def _dedupe(events: list[str]) -> list[str]:
    return list(dict.fromkeys(events))


def _error_text(error: Exception | None) -> str:
    if error is None:
        return ""
    if isinstance(error, NotifierError):
        return error.message
    return f"unexpected error: {type(error).__name__}"
