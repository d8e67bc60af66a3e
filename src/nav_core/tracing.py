# search traces + structured log lines
# src/nav_core/tracing.py
"""
Tracing and metrics for nav_core searches.

Keeps a rolling buffer of SearchTraceRecord entries and emits one
structured log line per search, so monitoring and tools can consume
consistent traces without depending on engine internals.

It does NOT:
- Change search results
- Render anything
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple


@dataclass
class SearchTraceRecord:
    """Structured record of a single find_path call."""

    timestamp: float           # wall-clock time (time.time())
    duration_s: float          # search duration in seconds

    start: Optional[Tuple[int, int]]
    target: Optional[Tuple[int, int]]

    success: bool
    reason: Optional[str]

    expanded: int              # cells closed during the search
    path_length: int           # number of waypoints
    cost: Optional[int]


class SearchTracer:
    """
    In-memory search tracer with logging.

    One info-level line per search; the buffer is bounded so long-running
    hosts do not grow without limit.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        max_records: int = 1_000,
    ) -> None:
        self._logger = logger or logging.getLogger("nav_core.search")
        self._records: Deque[SearchTraceRecord] = deque(maxlen=max_records)

    def record(
        self,
        *,
        start: Optional[Tuple[int, int]],
        target: Optional[Tuple[int, int]],
        success: bool,
        reason: Optional[str],
        expanded: int,
        path_length: int,
        cost: Optional[int],
        duration_s: float,
    ) -> SearchTraceRecord:
        record = SearchTraceRecord(
            timestamp=time.time(),
            duration_s=duration_s,
            start=start,
            target=target,
            success=success,
            reason=reason,
            expanded=expanded,
            path_length=path_length,
            cost=cost,
        )
        self._records.append(record)

        self._logger.info(
            "path_search start=%s target=%s success=%s reason=%s expanded=%d "
            "waypoints=%d cost=%s duration=%.4fs",
            record.start,
            record.target,
            record.success,
            record.reason,
            record.expanded,
            record.path_length,
            record.cost,
            record.duration_s,
        )
        return record

    def get_records(self) -> List[SearchTraceRecord]:
        """Snapshot of all buffered records, oldest first."""
        return list(self._records)

    def last(self) -> Optional[SearchTraceRecord]:
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records.clear()
