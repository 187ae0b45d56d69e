"""Per-configuration send throttling."""

import threading
import time
from collections.abc import Callable
from uuid import UUID


class ThrottleGate:
    """Enforces a minimum interval between sends for each configuration.

    State is process-local and reset on restart. Every check and update
    takes the lock exactly once.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the gate.

        Args:
            clock: Returns the current time in seconds (monotonic by default)
        """
        self._clock = clock
        self._last_sent: dict[UUID, float] = {}
        self._lock = threading.Lock()

    def _allowed(self, config_id: UUID, window: float, now: float) -> bool:
        last_sent = self._last_sent.get(config_id)
        if last_sent is None or window <= 0:
            return True
        return now - last_sent >= window

    def can_send(self, config_id: UUID, window: float) -> bool:
        """Check whether a send is allowed now.

        Args:
            config_id: Configuration ID
            window: Minimum seconds between sends

        Returns:
            True if nothing was sent yet, the window is 0, or it has elapsed
        """
        with self._lock:
            return self._allowed(config_id, window, self._clock())

    def mark_sent(self, config_id: UUID) -> None:
        """Record a send at the current time."""
        with self._lock:
            self._last_sent[config_id] = self._clock()

    def try_acquire(self, config_id: UUID, window: float) -> bool:
        """Check and mark in one step.

        Returns:
            True if the send is allowed (and now recorded), False if throttled
        """
        with self._lock:
            now = self._clock()
            if not self._allowed(config_id, window, now):
                return False
            self._last_sent[config_id] = now
            return True

    def forget(self, config_id: UUID) -> None:
        """Drop the throttle state of a configuration."""
        with self._lock:
            self._last_sent.pop(config_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_sent)
