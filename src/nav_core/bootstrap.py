# explicit engine/grid construction from a GridConfig
# src/nav_core/bootstrap.py
"""
Bootstrap for nav_core.

`initialize(config)` turns a resolved GridConfig into a ready-to-use
(PathfindingEngine, CellGrid) pair. Hosts call it once at startup instead
of relying on any framework lifecycle hook.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from env.schema import GridConfig
from monitoring.bus import EventBus

from .cells import PathNode
from .errors import GridConfigError
from .grid import CellGrid
from .pathfinder import PathfindingEngine
from .tracing import SearchTracer

log = logging.getLogger(__name__)


def default_path_node() -> PathNode:
    """Template record for a fresh grid: walkable, no search state."""
    return PathNode(walkable=True)


def initialize(
    config: GridConfig,
    *,
    bus: Optional[EventBus] = None,
    tracer: Optional[SearchTracer] = None,
) -> Tuple[PathfindingEngine, CellGrid[PathNode]]:
    """
    Build the grid described by `config`, apply its blocked cells and bind
    an engine to it.

    Raises GridConfigError for malformed configs.
    """
    grid: CellGrid[PathNode] = CellGrid(
        config.columns,
        config.rows,
        default_path_node(),
        cell_size=config.cell_size,
        origin=config.origin,
    )
    engine = PathfindingEngine(
        grid,
        diagonal_movement=config.diagonal_movement,
        bus=bus,
        tracer=tracer,
    )

    for column, row in config.blocked:
        if not engine.set_walkable_cell(column, row, False):
            raise GridConfigError(
                code="blocked_out_of_bounds",
                details={"profile": config.name, "cell": [column, row]},
            )

    log.info(
        "Initialized grid profile=%s size=%dx%d cell_size=%s origin=%s "
        "diagonal=%s blocked=%d",
        config.name,
        config.columns,
        config.rows,
        config.cell_size,
        config.origin,
        config.diagonal_movement,
        len(config.blocked),
    )
    return engine, grid
