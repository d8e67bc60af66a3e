# domain errors for nav_core
# src/nav_core/errors.py
"""
Domain errors for nav_core.

Only construction-time problems and internal invariant breaches raise.
Out-of-bounds access, invalid endpoints and unreachable targets are
reported through return values (see grid.BoundaryViolation and
pathfinder.PathfindingResult).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GridConfigError(ValueError):
    """
    Raised for malformed grid parameters or config files.

    Examples:
        - non-positive column / row count
        - non-positive cell size
        - missing or mistyped keys in grid.yaml
    """

    code: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"GridConfigError(code={self.code!r}, details={self.details!r})"


@dataclass
class PathReconstructionError(RuntimeError):
    """
    Raised when a predecessor chain does not lead back to the start cell.

    The engine writes every predecessor it follows, so this signals a bug
    or a grid mutated during a search, never a normal "no path" outcome.
    """

    target: tuple[int, int]
    start: tuple[int, int]
    reached: tuple[int, int] | None

    def __str__(self) -> str:
        return (
            f"PathReconstructionError(target={self.target!r}, "
            f"start={self.start!r}, reached={self.reached!r})"
        )
