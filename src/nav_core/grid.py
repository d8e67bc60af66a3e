# fixed-size 2D cell container with world <-> grid mapping
# src/nav_core/grid.py
"""
CellGrid: fixed-size 2D arena of cell records.

Responsibilities:
- Own one record per (column, row), stored in a flat list.
- Convert between world positions and grid indices. The grid is centred
  on its origin rather than anchored at a corner.
- Bounds-checked access. Out-of-bounds reads return a detached copy of the
  default record, out-of-bounds writes are no-ops. Both are reported as a
  BoundaryViolation (logged, optionally forwarded to a callback) and never
  raise.

It does NOT:
- Know anything about pathfinding costs.
- Render itself.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass
from typing import (
    Callable,
    Generic,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
)

from .errors import GridConfigError

log = logging.getLogger(__name__)

# (column, row) grid index
Index = Tuple[int, int]
# 2D world-space position
Vec2 = Tuple[float, float]


class GridCell(Protocol):
    """Anything the grid can store: a record with a writable index."""

    index: Index


T = TypeVar("T", bound=GridCell)


@dataclass(frozen=True)
class BoundaryViolation:
    """Report for a grid access addressed outside the grid."""

    operation: str
    column: int
    row: int


BoundaryViolationFn = Callable[[BoundaryViolation], None]


def _is_finite(position: Sequence[float]) -> bool:
    """NaN or infinite coordinates never map to a cell."""
    return math.isfinite(float(position[0])) and math.isfinite(float(position[1]))


class CellGrid(Generic[T]):
    """
    Fixed-size grid of cell records.

    Slot for (column, row) is `row * columns + column`. Every stored record's
    `index` equals its slot coordinate; construction, `clear_all` and
    `set_cell` all re-establish that.
    """

    def __init__(
        self,
        columns: int,
        rows: int,
        default_value: T,
        *,
        cell_size: float = 1.0,
        origin: Sequence[float] = (0.0, 0.0),
        on_boundary_violation: Optional[BoundaryViolationFn] = None,
    ) -> None:
        if int(columns) <= 0 or int(rows) <= 0:
            raise GridConfigError(
                code="invalid_dimensions",
                details={"columns": columns, "rows": rows},
            )
        if not cell_size or float(cell_size) <= 0.0:
            raise GridConfigError(
                code="invalid_cell_size",
                details={"cell_size": cell_size},
            )
        if len(origin) < 2:
            raise GridConfigError(
                code="invalid_origin",
                details={"origin": list(origin)},
            )

        self._columns = int(columns)
        self._rows = int(rows)
        self._cell_size = float(cell_size)
        self._origin: Vec2 = (float(origin[0]), float(origin[1]))
        self._default = default_value
        self.on_boundary_violation = on_boundary_violation

        self._cells: List[T] = []
        self.clear_all()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def origin(self) -> Vec2:
        return self._origin

    def __len__(self) -> int:
        return len(self._cells)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get_cell(self, column: int, row: int) -> T:
        """
        Return the stored record at (column, row).

        Out of bounds: a copy of the default record is returned, so callers
        that mutate it cannot corrupt the grid.
        """
        if self._check_bounds("get_cell", column, row):
            return self._cells[self._slot(column, row)]
        return copy.copy(self._default)

    def get_cell_at(self, position: Sequence[float]) -> T:
        if not _is_finite(position):
            self._check_bounds("get_cell_at", position[0], position[1])
            return copy.copy(self._default)
        column, row = self.world_to_grid(position)
        return self.get_cell(column, row)

    def set_cell(self, column: int, row: int, value: T) -> None:
        """Overwrite the slot at (column, row). No-op when out of bounds."""
        if not self._check_bounds("set_cell", column, row):
            return
        value.index = (column, row)
        self._cells[self._slot(column, row)] = value

    def set_cell_at(self, position: Sequence[float], value: T) -> None:
        if not _is_finite(position):
            self._check_bounds("set_cell_at", position[0], position[1])
            return
        column, row = self.world_to_grid(position)
        self.set_cell(column, row, value)

    def cells(self) -> Iterator[T]:
        """Iterate over all records in slot order (row-major)."""
        return iter(self._cells)

    def indices(self) -> Iterator[Index]:
        for row in range(self._rows):
            for column in range(self._columns):
                yield (column, row)

    def clear_all(self, default_value: Optional[T] = None) -> None:
        """
        Reinitialise every slot with a fresh copy of the default record.

        Passing `default_value` replaces the grid's default for this and
        later out-of-bounds reads.
        """
        if default_value is not None:
            self._default = default_value

        cells: List[T] = []
        for column, row in self.indices():
            cell = copy.copy(self._default)
            cell.index = (column, row)
            cells.append(cell)
        self._cells = cells

    # ------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------

    def world_to_grid(self, position: Sequence[float]) -> Index:
        """
        Map a world position to (column, row).

        The offset of half the grid extent centres the grid on its origin.
        Coordinates must be finite; check with is_valid_world first.
        """
        x = (float(position[0]) - self._origin[0]) / self._cell_size
        y = (float(position[1]) - self._origin[1]) / self._cell_size

        column = math.floor(x + self._columns * 0.5)
        row = math.floor(y + self._rows * 0.5)
        return column, row

    def grid_to_world(self, column: int, row: int) -> Vec2:
        """
        World-space centre of (column, row); (0.0, 0.0) when out of bounds.
        """
        if not self._check_bounds("grid_to_world", column, row):
            return (0.0, 0.0)

        half_x = (self._columns - 1) * self._cell_size * 0.5
        half_y = (self._rows - 1) * self._cell_size * 0.5

        x = column * self._cell_size - half_x + self._origin[0]
        y = row * self._cell_size - half_y + self._origin[1]
        return (x, y)

    def is_valid(self, column: int, row: int) -> bool:
        return 0 <= column < self._columns and 0 <= row < self._rows

    def is_valid_world(self, position: Sequence[float]) -> bool:
        if not _is_finite(position):
            return False
        column, row = self.world_to_grid(position)
        return self.is_valid(column, row)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _slot(self, column: int, row: int) -> int:
        return row * self._columns + column

    def _check_bounds(self, operation: str, column: int, row: int) -> bool:
        """
        Bounds check that reports violations. Use `is_valid` for a silent
        predicate.
        """
        if self.is_valid(column, row):
            return True

        log.warning(
            "Position (%s, %s) is outside of the boundaries of the grid "
            "(%sx%s) during %s",
            column,
            row,
            self._columns,
            self._rows,
            operation,
        )
        if self.on_boundary_violation is not None:
            self.on_boundary_violation(
                BoundaryViolation(operation=operation, column=column, row=row)
            )
        return False
