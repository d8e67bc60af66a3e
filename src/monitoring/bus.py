# EventBus for monitoring events
"""
Event bus for the monitoring layer.

Provides a minimal, thread-safe, in-process pub/sub mechanism:

- Subscribers receive MonitoringEvent objects.
- Used by:
    - PathfindingEngine instrumentation
    - File-based logger
    - TUI dashboard
    - CLI
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .events import MonitoringEvent

logger = logging.getLogger(__name__)


# ============================================================
# Type aliases
# ============================================================

SubscriberFn = Callable[[MonitoringEvent], None]


# ============================================================
# Event Bus
# ============================================================

class EventBus:
    """
    Simple in-process event bus for monitoring events.

    - Thread-safe: subscribers list protected by a Lock.
    - Each publish iterates over a snapshot of subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: List[SubscriberFn] = []
        self._lock = Lock()

    # --------------------------------------------------------
    # Subscription API
    # --------------------------------------------------------

    def subscribe(self, fn: SubscriberFn) -> None:
        """
        Register a subscriber to receive MonitoringEvent instances.
        """
        with self._lock:
            self._subscribers.append(fn)

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """
        Remove a previously registered subscriber.

        Safe to call even if `fn` is not present.
        """
        with self._lock:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

    # --------------------------------------------------------
    # Publish API
    # --------------------------------------------------------

    def publish(self, event: MonitoringEvent) -> None:
        """
        Publish a MonitoringEvent to all subscribers.

        Takes a snapshot of subscribers under the lock, then iterates without
        holding the lock to avoid deadlocks if subscribers call back into the bus.
        """
        with self._lock:
            subscribers = list(self._subscribers)

        for fn in subscribers:
            try:
                fn(event)
            except Exception:
                # One bad subscriber must not kill the event stream or
                # abort a search.
                logger.exception("Monitoring subscriber %r failed", fn)

    # --------------------------------------------------------
    # Utility
    # --------------------------------------------------------

    def clear(self) -> None:
        """
        Remove all subscribers. Mostly useful for tests.
        """
        with self._lock:
            self._subscribers.clear()
