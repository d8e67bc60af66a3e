# GridConfig dataclass
# src/env/schema.py

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class GridConfig:
    """Resolved grid + engine configuration for one profile."""
    name: str
    columns: int
    rows: int
    cell_size: float = 1.0
    origin: Tuple[float, float] = (0.0, 0.0)    # world-space centre of the grid
    diagonal_movement: bool = True
    blocked: List[Tuple[int, int]] = field(default_factory=list)  # (column, row) cells made unwalkable at startup
