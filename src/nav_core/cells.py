# per-cell search record stored in the grid
# src/nav_core/cells.py
"""
PathNode: the cell record the pathfinding engine keeps in a CellGrid.

Each record carries:
- its grid index (fixed by the grid when the record is placed)
- the walkable flag (persists across searches)
- A* bookkeeping: g/h costs, predecessor and open/closed status

f_cost is derived from g_cost + h_cost on every read, so it can never be
stale after either cost changes.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

# (column, row) grid index
Index = Tuple[int, int]

# Sentinel for "not reached yet". Python ints do not overflow, so
# f_cost = INFINITE_COST + INFINITE_COST is still well defined.
INFINITE_COST = sys.maxsize

STRAIGHT_COST = 10
DIAGONAL_COST = 14


class NodeStatus(Enum):
    """Search membership of a cell, tracked per grid slot."""

    UNVISITED = auto()
    OPEN = auto()
    CLOSED = auto()


@dataclass
class PathNode:
    """Search record for a single grid cell."""

    index: Index = (0, 0)
    walkable: bool = True
    g_cost: int = INFINITE_COST
    h_cost: int = INFINITE_COST
    predecessor: Optional[Index] = None
    status: NodeStatus = NodeStatus.UNVISITED

    @property
    def f_cost(self) -> int:
        return self.g_cost + self.h_cost

    def set_costs(self, g_cost: int, h_cost: int) -> None:
        self.g_cost = g_cost
        self.h_cost = h_cost

    def reset(self) -> None:
        """
        Clear all search state. The walkable flag and index are kept.
        """
        self.g_cost = INFINITE_COST
        self.h_cost = INFINITE_COST
        self.predecessor = None
        self.status = NodeStatus.UNVISITED


def octile_distance(a: Index, b: Index) -> int:
    """
    Scaled octile distance between two indices.

    straight steps = |dx - dy|, diagonal steps = min(dx, dy), weighted
    10 and 14. Serves as both the A* heuristic and the step cost between
    adjacent cells.
    """
    dx = abs(b[0] - a[0])
    dy = abs(b[1] - a[1])

    straight_steps = abs(dx - dy)
    diagonal_steps = min(dx, dy)

    return straight_steps * STRAIGHT_COST + diagonal_steps * DIAGONAL_COST
