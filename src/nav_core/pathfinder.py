# A* pathfinding over a CellGrid of PathNodes
# src/nav_core/pathfinder.py
"""
A* pathfinding over CellGrid[PathNode].

- Octile heuristic, straight step 10 / diagonal step 14.
- 8-directional neighbours (4 when diagonal movement is disabled).
- Search state lives in the grid's PathNodes and is reset before every
  search, so repeated searches on an unmodified grid are identical.
- Early exit: the search stops as soon as the target is discovered as a
  neighbour of the expanded cell.

Public surface:
    class PathfindingEngine:
        find_path(start_position, target_position) -> PathfindingResult
        find_path_between_cells(start_index, target_index) -> PathfindingResult
        set_walkable(position, walkable) -> bool
        set_walkable_cell(column, row, walkable) -> bool
        is_walkable(position) -> bool
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Iterator, List, Optional, Sequence, Tuple

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from .cells import Index, NodeStatus, PathNode, octile_distance
from .errors import PathReconstructionError
from .grid import BoundaryViolation, CellGrid, Vec2
from .tracing import SearchTracer

log = logging.getLogger(__name__)

MODULE_NAME = "nav_core.pathfinder"

# Neighbour offsets, in expansion order. Diagonals are skipped when
# diagonal movement is disabled.
_NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int, bool], ...] = (
    (1, 0, False),    # right
    (1, 1, True),     # right-up
    (1, -1, True),    # right-down
    (-1, 0, False),   # left
    (-1, 1, True),    # left-up
    (-1, -1, True),   # left-down
    (0, 1, False),    # up
    (0, -1, False),   # down
)


class FailureReason(str, Enum):
    """Why find_path did not produce a path."""

    INVALID_ENDPOINT = "invalid_endpoint"
    NO_PATH_FOUND = "no_path_found"


@dataclass
class PathfindingResult:
    """
    Structured result for a pathfinding attempt.

    A failed result always has an empty path; a successful one has at least
    one waypoint (start == target yields exactly one).
    """

    path: List[Vec2]
    success: bool
    reason: Optional[FailureReason] = None
    cost: Optional[int] = None
    cells: List[Index] = field(default_factory=list)
    expanded: int = 0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "reason": self.reason.value if self.reason else None,
            "cost": self.cost,
            "expanded": self.expanded,
            "path": [list(p) for p in self.path],
            "cells": [list(c) for c in self.cells],
        }


class OpenSet:
    """
    Binary min-heap of open cells keyed by (f, h, insertion sequence).

    Membership is the node's own status flag. Re-prioritising a cell pushes
    a fresh entry; entries whose g no longer matches the node, or whose node
    is no longer OPEN, are dropped when they reach the top.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, int, int, PathNode]] = []
        self._counter = itertools.count()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def push(self, node: PathNode) -> None:
        """Insert an UNVISITED node, or re-prioritise an OPEN one."""
        if node.status is not NodeStatus.OPEN:
            node.status = NodeStatus.OPEN
            self._size += 1
        heapq.heappush(
            self._heap,
            (node.f_cost, node.h_cost, next(self._counter), node.g_cost, node),
        )

    def pop(self) -> Optional[PathNode]:
        """Remove and return the lowest-cost OPEN node, or None when empty."""
        while self._heap:
            _, _, _, g_cost, node = heapq.heappop(self._heap)
            if node.status is not NodeStatus.OPEN or node.g_cost != g_cost:
                continue
            node.status = NodeStatus.CLOSED
            self._size -= 1
            return node
        return None


class PathfindingEngine:
    """
    A* search engine bound to one CellGrid[PathNode].

    The engine owns the grid's search state: one search at a time, and
    walkability edits only between searches.
    """

    def __init__(
        self,
        grid: CellGrid[PathNode],
        *,
        diagonal_movement: bool = True,
        bus: Optional[EventBus] = None,
        tracer: Optional[SearchTracer] = None,
    ) -> None:
        self._grid = grid
        self._diagonal_movement = diagonal_movement
        self._bus = bus
        self._tracer = tracer or SearchTracer()

        if bus is not None and grid.on_boundary_violation is None:
            grid.on_boundary_violation = self._on_boundary_violation

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def grid(self) -> CellGrid[PathNode]:
        return self._grid

    @property
    def diagonal_movement(self) -> bool:
        return self._diagonal_movement

    @property
    def tracer(self) -> SearchTracer:
        return self._tracer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_path(
        self,
        start_position: Sequence[float],
        target_position: Sequence[float],
    ) -> PathfindingResult:
        """
        Search for the cheapest walkable route between two world positions.

        Returns a PathfindingResult whose path holds world-space cell centres
        from start to target, or a failed result with reason INVALID_ENDPOINT
        or NO_PATH_FOUND.
        """
        if not (
            self._grid.is_valid_world(start_position)
            and self._grid.is_valid_world(target_position)
        ):
            # reported as given; non-finite positions have no cell index
            return self._invalid_endpoint(
                (float(start_position[0]), float(start_position[1])),
                (float(target_position[0]), float(target_position[1])),
            )

        return self._search(
            self._grid.world_to_grid(start_position),
            self._grid.world_to_grid(target_position),
        )

    def find_path_between_cells(self, start: Index, target: Index) -> PathfindingResult:
        """Same search as find_path, addressed by grid index."""
        start = (int(start[0]), int(start[1]))
        target = (int(target[0]), int(target[1]))
        if not (self._grid.is_valid(*start) and self._grid.is_valid(*target)):
            return self._invalid_endpoint(start, target)
        return self._search(start, target)

    def set_walkable(self, position: Sequence[float], walkable: bool) -> bool:
        """
        Set the walkable flag of the cell at a world position.

        Returns False (no-op) for positions outside the grid. Existing
        results are not recomputed; call find_path again to see the effect.
        """
        if not self._grid.is_valid_world(position):
            return False
        column, row = self._grid.world_to_grid(position)
        return self.set_walkable_cell(column, row, walkable)

    def set_walkable_cell(self, column: int, row: int, walkable: bool) -> bool:
        if not self._grid.is_valid(column, row):
            return False

        node = self._grid.get_cell(column, row)
        node.walkable = bool(walkable)

        self._emit(
            EventType.WALKABILITY_CHANGED,
            "Cell walkability changed",
            {"cell": [column, row], "walkable": node.walkable},
        )
        return True

    def is_walkable(self, position: Sequence[float]) -> bool:
        if not self._grid.is_valid_world(position):
            return False
        return self._grid.get_cell_at(position).walkable

    def path_cost(self, cells: Sequence[Index]) -> int:
        """Sum of step costs along consecutive cells."""
        return sum(
            octile_distance(a, b) for a, b in zip(cells, cells[1:])
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _search(self, start_index: Index, target_index: Index) -> PathfindingResult:
        t0 = perf_counter()
        self._emit(
            EventType.SEARCH_STARTED,
            "Path search started",
            {"start": list(start_index), "target": list(target_index)},
        )

        self._reset_search_state()

        start = self._grid.get_cell(*start_index)
        target = self._grid.get_cell(*target_index)

        start.set_costs(0, octile_distance(start.index, target.index))

        if start.index == target.index:
            return self._finish_success([start.index], cost=0, expanded=0, t0=t0)

        open_set = OpenSet()
        open_set.push(start)

        expanded = 0
        target_found = False
        current = open_set.pop()

        while current is not None:
            expanded += 1
            target_found = self._reveal_neighbours(current, target, open_set)
            if target_found:
                break
            current = open_set.pop()

        if not target_found:
            return self._finish_failure(
                FailureReason.NO_PATH_FOUND,
                start_index,
                target_index,
                expanded=expanded,
                t0=t0,
            )

        cells = self._reconstruct_cells(target.index, start.index)
        return self._finish_success(
            cells, cost=target.g_cost, expanded=expanded, t0=t0
        )

    def _reveal_neighbours(
        self,
        current: PathNode,
        target: PathNode,
        open_set: OpenSet,
    ) -> bool:
        """
        Expand `current`. Returns True when the target is one of its
        neighbours; the target's predecessor and cost are recorded then.
        """
        neighbours = list(self._neighbours(current.index))

        for node in neighbours:
            if node.index == target.index:
                target.predecessor = current.index
                target.set_costs(
                    current.g_cost + octile_distance(current.index, target.index),
                    0,
                )
                return True

        for node in neighbours:
            if node.status is NodeStatus.CLOSED or not node.walkable:
                continue

            g_from_current = current.g_cost + octile_distance(current.index, node.index)

            if g_from_current < node.g_cost:
                node.set_costs(g_from_current, octile_distance(node.index, target.index))
                node.predecessor = current.index
                open_set.push(node)

        return False

    def _neighbours(self, index: Index) -> Iterator[PathNode]:
        column, row = index
        for dx, dy, diagonal in _NEIGHBOUR_OFFSETS:
            if diagonal and not self._diagonal_movement:
                continue
            nx, ny = column + dx, row + dy
            if self._grid.is_valid(nx, ny):
                yield self._grid.get_cell(nx, ny)

    def _reset_search_state(self) -> None:
        for node in self._grid.cells():
            node.reset()

    def _reconstruct_cells(self, target_index: Index, start_index: Index) -> List[Index]:
        """
        Follow predecessors from target back to start; returns indices in
        start -> target order.
        """
        cells: List[Index] = []
        current: Optional[Index] = target_index

        # Each cell can appear at most once on a valid chain.
        for _ in range(len(self._grid)):
            if current is None or current == start_index:
                break
            cells.append(current)
            current = self._grid.get_cell(*current).predecessor

        if current != start_index:
            raise PathReconstructionError(
                target=target_index, start=start_index, reached=current
            )

        cells.append(start_index)
        cells.reverse()
        return cells

    # ------------------------------------------------------------------
    # Result helpers
    # ------------------------------------------------------------------

    def _finish_success(
        self,
        cells: List[Index],
        *,
        cost: int,
        expanded: int,
        t0: float,
    ) -> PathfindingResult:
        result = PathfindingResult(
            path=[self._grid.grid_to_world(c, r) for c, r in cells],
            success=True,
            cost=cost,
            cells=cells,
            expanded=expanded,
        )
        self._tracer.record(
            start=cells[0],
            target=cells[-1],
            success=True,
            reason=None,
            expanded=expanded,
            path_length=len(result.path),
            cost=cost,
            duration_s=perf_counter() - t0,
        )
        self._emit(
            EventType.PATH_FOUND,
            "Path found",
            {
                "start": list(cells[0]),
                "target": list(cells[-1]),
                "waypoints": len(cells),
                "cost": cost,
                "expanded": expanded,
            },
        )
        return result

    def _finish_failure(
        self,
        reason: FailureReason,
        start_index: Index,
        target_index: Index,
        *,
        expanded: int,
        t0: float,
    ) -> PathfindingResult:
        self._tracer.record(
            start=start_index,
            target=target_index,
            success=False,
            reason=reason.value,
            expanded=expanded,
            path_length=0,
            cost=None,
            duration_s=perf_counter() - t0,
        )
        self._emit(
            EventType.PATH_NOT_FOUND,
            "No path found",
            {
                "start": list(start_index),
                "target": list(target_index),
                "reason": reason.value,
                "expanded": expanded,
            },
        )
        return PathfindingResult(
            path=[], success=False, reason=reason, expanded=expanded
        )

    def _invalid_endpoint(
        self,
        start: Tuple[float, float],
        target: Tuple[float, float],
    ) -> PathfindingResult:
        log.warning(
            "find_path endpoint outside grid: start=%s target=%s",
            start,
            target,
        )
        return self._finish_failure(
            FailureReason.INVALID_ENDPOINT,
            start,
            target,
            expanded=0,
            t0=perf_counter(),
        )

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def _on_boundary_violation(self, violation: BoundaryViolation) -> None:
        self._emit(
            EventType.BOUNDARY_VIOLATION,
            "Grid access outside boundaries",
            {
                "operation": violation.operation,
                "cell": [violation.column, violation.row],
            },
        )

    def _emit(self, event_type: EventType, message: str, payload: dict) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module=MODULE_NAME,
            event_type=event_type,
            message=message,
            payload=payload,
        )
