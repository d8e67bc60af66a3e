from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from nav_core.errors import GridConfigError

from .schema import GridConfig

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "grid.yaml"

# Overrides for hosts that keep their grid config elsewhere.
CONFIG_PATH_ENV = "GRIDNAV_CONFIG"
PROFILE_ENV = "GRIDNAV_PROFILE"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file, requiring a mapping at the top level."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise GridConfigError(
            code="invalid_config_file",
            details={"path": str(path), "type": type(data).__name__},
        )
    return data


def _select_profile(
    cfg: Dict[str, Any],
    profile_name: Optional[str],
) -> Tuple[str, Dict[str, Any]]:
    """Return (active_profile_name, active_profile_mapping)."""
    name = profile_name or cfg.get("profile")
    if not name:
        raise GridConfigError(code="missing_profile_key", details={})
    profiles = cfg.get("profiles")
    if not isinstance(profiles, dict):
        raise GridConfigError(code="missing_profiles_mapping", details={})
    if name not in profiles:
        raise GridConfigError(
            code="unknown_profile",
            details={"profile": name, "available": sorted(profiles)},
        )
    raw = profiles[name]
    if not isinstance(raw, dict):
        raise GridConfigError(code="invalid_profile", details={"profile": name})
    return name, raw


def _parse_pair(value: Any, key: str, cast: type) -> Tuple[Any, Any]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise GridConfigError(code="invalid_pair", details={"key": key, "value": value})
    try:
        return cast(value[0]), cast(value[1])
    except (TypeError, ValueError) as exc:
        raise GridConfigError(
            code="invalid_pair", details={"key": key, "value": value}
        ) from exc


def _parse_blocked(raw: Any) -> List[Tuple[int, int]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise GridConfigError(code="invalid_blocked", details={"value": raw})
    return [_parse_pair(item, "blocked", int) for item in raw]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def config_from_mapping(name: str, raw: Dict[str, Any]) -> GridConfig:
    """Build and validate a GridConfig from one profile mapping."""
    missing = [key for key in ("columns", "rows") if key not in raw]
    if missing:
        raise GridConfigError(
            code="missing_keys", details={"profile": name, "keys": missing}
        )

    diagonal_movement = raw.get("diagonal_movement", True)
    if not isinstance(diagonal_movement, bool):
        raise GridConfigError(
            code="invalid_value",
            details={"profile": name, "key": "diagonal_movement", "value": diagonal_movement},
        )

    try:
        config = GridConfig(
            name=name,
            columns=int(raw["columns"]),
            rows=int(raw["rows"]),
            cell_size=float(raw.get("cell_size", 1.0)),
            origin=_parse_pair(raw.get("origin", [0.0, 0.0]), "origin", float),
            diagonal_movement=diagonal_movement,
            blocked=_parse_blocked(raw.get("blocked")),
        )
    except GridConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise GridConfigError(
            code="invalid_value", details={"profile": name, "error": str(exc)}
        ) from exc

    validate_grid_config(config)
    return config


def load_grid_config(
    profile: Optional[str] = None,
    path: Optional[Path] = None,
) -> GridConfig:
    """
    Main entry point: returns the resolved GridConfig.

    Resolution order for the file: `path`, $GRIDNAV_CONFIG, config/grid.yaml.
    Resolution order for the profile: `profile`, $GRIDNAV_PROFILE, the
    file's top-level `profile` key.
    """
    config_path = path or Path(os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
    profile_name = profile or os.getenv(PROFILE_ENV)

    cfg = _load_yaml(Path(config_path))
    name, raw = _select_profile(cfg, profile_name)

    config = config_from_mapping(name, raw)
    log.debug("Loaded grid profile %r from %s", name, config_path)
    return config


def validate_grid_config(config: GridConfig) -> None:
    """Sanity checks that must hold before a grid is built."""
    if config.columns <= 0 or config.rows <= 0:
        raise GridConfigError(
            code="invalid_dimensions",
            details={"columns": config.columns, "rows": config.rows},
        )
    if config.cell_size <= 0.0:
        raise GridConfigError(
            code="invalid_cell_size", details={"cell_size": config.cell_size}
        )
    for column, row in config.blocked:
        if not (0 <= column < config.columns and 0 <= row < config.rows):
            raise GridConfigError(
                code="blocked_out_of_bounds",
                details={"cell": [column, row]},
            )
