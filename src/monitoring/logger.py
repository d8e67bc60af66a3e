# JSON logger subscribing to EventBus
"""
Structured logging for the monitoring layer.

Provides:
- JsonFileLogger: subscribes to an EventBus and writes MonitoringEvents as JSONL.
- log_event: convenience helper for publishing MonitoringEvents via the EventBus.

Usage patterns:

    from pathlib import Path
    from monitoring.bus import EventBus
    from monitoring.logger import JsonFileLogger, log_event
    from monitoring.events import EventType

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/monitoring/events.log"), bus)

    log_event(
        bus=bus,
        module="example.module",
        event_type=EventType.LOG,
        message="Something happened",
        payload={"foo": "bar"},
    )
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent

log = logging.getLogger(__name__)


# ============================================================
# JSONL File Logger
# ============================================================

class JsonFileLogger:
    """
    JSON-lines logger for MonitoringEvent instances.

    - Subscribes to an EventBus and writes one JSON object per line.
    - Ensures UTF-8 encoding.
    - Ensures parent directory exists.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        """
        Initialize the logger and subscribe to the event bus.

        Parameters
        ----------
        path:
            Path to the log file (e.g. logs/monitoring/events.log).
        bus:
            EventBus instance to subscribe to.
        """
        self._path = path
        self._bus = bus
        self._ensure_parent_dir(path)
        self._file = path.open("a", encoding="utf-8")
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def _ensure_parent_dir(path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

    def _on_event(self, event: MonitoringEvent) -> None:
        """
        Write the event as a JSON object to the log file.
        """
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except (OSError, ValueError):
            # Disk full or closed handle: logging must not crash a search.
            log.exception("Failed to write monitoring event to %s", self._path)

    def close(self) -> None:
        """
        Unsubscribe and close the underlying file handle.
        """
        self._bus.unsubscribe(self._on_event)
        self._file.close()


# ============================================================
# Convenience helper for emitting events
# ============================================================

def log_event(
    bus: EventBus,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """
    Create and publish a MonitoringEvent.

    Parameters
    ----------
    bus:
        EventBus instance to publish the event to.
    module:
        String identifying the source module ("nav_core.pathfinder", "cli").
    event_type:
        EventType enum member describing what kind of event this is.
    message:
        Short human-readable description.
    payload:
        Structured JSON-safe data attached to this event.
    correlation_id:
        Optional ID linking related events.
    """
    event = MonitoringEvent(
        ts=time.time(),
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
