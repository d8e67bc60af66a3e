# path: src/monitoring/events.py
"""
Event schemas for the monitoring layer.

This module defines:
- EventType enum
- MonitoringEvent (structured system events)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted by the pathfinding engine and tools."""

    # Search lifecycle
    SEARCH_STARTED = auto()
    PATH_FOUND = auto()
    PATH_NOT_FOUND = auto()

    # Grid access outside bounds (non-fatal)
    BOUNDARY_VIOLATION = auto()

    # Walkability edits between searches
    WALKABILITY_CHANGED = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the engine, the grid or a tool.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("nav_core.pathfinder", "cli", etc.)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (cells, costs, reasons)
    correlation_id: Optional[str] = None  # Used for grouping events per search/session

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
