#tests/test_monitoring_logger.py
"""
Tests for monitoring.logger.JsonFileLogger and log_event.

Covers:
- JSON structure validity
- Correct field encoding
- Engine events end up in the file
"""

from __future__ import annotations

import json
from pathlib import Path

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import JsonFileLogger, log_event
from nav_core.cells import PathNode
from nav_core.grid import CellGrid
from nav_core.pathfinder import PathfindingEngine


def test_json_file_logger_writes_valid_json(tmp_path: Path):
    bus = EventBus()
    log_path = tmp_path / "events.log"

    logger = JsonFileLogger(log_path, bus)

    log_event(
        bus=bus,
        module="test.module",
        event_type=EventType.LOG,
        message="hello world",
        payload={"a": 1, "b": "x"},
        correlation_id="search-123",
    )

    logger.close()

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 1

    data = json.loads(lines[0])

    assert data["module"] == "test.module"
    assert data["event_type"] == "LOG"
    assert data["message"] == "hello world"
    assert data["payload"] == {"a": 1, "b": "x"}
    assert data["correlation_id"] == "search-123"
    assert isinstance(data["ts"], (int, float))


def test_logger_parent_dir_created(tmp_path: Path):
    log_path = tmp_path / "nested" / "logs" / "events.log"

    bus = EventBus()
    logger = JsonFileLogger(log_path, bus)

    log_event(
        bus=bus,
        module="test.module",
        event_type=EventType.LOG,
        message="hello",
    )
    logger.close()

    assert logger.path == log_path
    assert log_path.read_text(encoding="utf-8").strip()


def test_closed_logger_stops_receiving(tmp_path: Path):
    bus = EventBus()
    log_path = tmp_path / "events.log"
    logger = JsonFileLogger(log_path, bus)
    logger.close()

    log_event(bus=bus, module="m", event_type=EventType.LOG, message="late")

    assert log_path.read_text(encoding="utf-8") == ""


def test_engine_search_events_are_logged(tmp_path: Path):
    bus = EventBus()
    log_path = tmp_path / "search.log"
    logger = JsonFileLogger(log_path, bus)

    grid: CellGrid[PathNode] = CellGrid(3, 3, PathNode())
    engine = PathfindingEngine(grid, bus=bus)
    engine.find_path_between_cells((0, 0), (2, 2))
    logger.close()

    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [r["event_type"] for r in records] == ["SEARCH_STARTED", "PATH_FOUND"]
    assert records[1]["payload"]["cost"] == 28
    assert records[1]["payload"]["waypoints"] == 3
