"""Event bus interface and in-memory implementation."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from healarr_notify.exceptions import EventBusError
from healarr_notify.models.domain.event import Event

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], Awaitable[None]]


class EventBus(Protocol):
    """Publish/subscribe channel for domain events."""

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register a handler for an event type."""
        ...

    async def publish(self, event: Event) -> None:
        """Publish an event to its subscribers.

        Raises:
            EventBusError: If the event could not be published
        """
        ...


@dataclass
class _Subscription:
    event_type: str
    handler: EventHandler
    queue: asyncio.Queue[Event]
    task: asyncio.Task[None] | None = field(default=None)


class InMemoryEventBus:
    """Process-local event bus.

    Each subscription has a bounded queue drained by its own task, so a
    slow handler never blocks publishers. When a queue is full the event
    is dropped for that subscriber and a warning is logged. Must be used
    from a running event loop.
    """

    def __init__(self, queue_size: int = 100) -> None:
        """Initialize event bus.

        Args:
            queue_size: Maximum pending events per subscription
        """
        self._queue_size = queue_size
        self._subscriptions: dict[str, list[_Subscription]] = defaultdict(list)
        self._closed = False

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        if self._closed:
            raise EventBusError("event bus is shut down")

        subscription = _Subscription(
            event_type=event_type,
            handler=handler,
            queue=asyncio.Queue(maxsize=self._queue_size),
        )
        subscription.task = asyncio.create_task(
            self._drain(subscription), name=f"eventbus-{event_type}"
        )
        self._subscriptions[event_type].append(subscription)

    async def publish(self, event: Event) -> None:
        if self._closed:
            raise EventBusError("event bus is shut down")

        for subscription in self._subscriptions.get(event.event_type, []):
            try:
                subscription.queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(
                    f"Subscriber queue full for {event.event_type}, dropping event"
                )

    async def _drain(self, subscription: _Subscription) -> None:
        while True:
            event = await subscription.queue.get()
            try:
                await subscription.handler(event)
            except Exception:
                logger.exception(f"Event handler failed for {subscription.event_type}")
            finally:
                subscription.queue.task_done()

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        for subscriptions in list(self._subscriptions.values()):
            for subscription in subscriptions:
                await subscription.queue.join()

    async def shutdown(self) -> None:
        """Stop all drain tasks. Pending events are discarded."""
        self._closed = True
        tasks = [
            subscription.task
            for subscriptions in self._subscriptions.values()
            for subscription in subscriptions
            if subscription.task is not None
        ]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._subscriptions.clear()
