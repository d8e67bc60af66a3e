# nav_core package
# src/nav_core/__init__.py
"""
nav_core package: grid container + A* pathfinding engine.

Exports:
    - CellGrid: fixed-size grid with world <-> grid index mapping
    - PathNode: per-cell search record
    - PathfindingEngine / PathfindingResult / FailureReason
    - initialize: build an (engine, grid) pair from a GridConfig
"""

from __future__ import annotations

from .bootstrap import initialize
from .cells import (
    DIAGONAL_COST,
    INFINITE_COST,
    STRAIGHT_COST,
    Index,
    NodeStatus,
    PathNode,
    octile_distance,
)
from .errors import GridConfigError, PathReconstructionError
from .grid import BoundaryViolation, CellGrid, GridCell, Vec2
from .pathfinder import FailureReason, OpenSet, PathfindingEngine, PathfindingResult
from .tracing import SearchTraceRecord, SearchTracer

__all__ = [
    "CellGrid",
    "GridCell",
    "BoundaryViolation",
    "Index",
    "Vec2",
    "PathNode",
    "NodeStatus",
    "INFINITE_COST",
    "STRAIGHT_COST",
    "DIAGONAL_COST",
    "octile_distance",
    "PathfindingEngine",
    "PathfindingResult",
    "FailureReason",
    "OpenSet",
    "SearchTracer",
    "SearchTraceRecord",
    "GridConfigError",
    "PathReconstructionError",
    "initialize",
]
