# tests/test_grid_config_loader.py
"""
Tests for env.loader: YAML grid profiles -> GridConfig.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from env.loader import (
    CONFIG_PATH_ENV,
    PROFILE_ENV,
    config_from_mapping,
    load_grid_config,
)
from env.schema import GridConfig
from nav_core.errors import GridConfigError


def write_config(tmp_path: Path, data: Any, name: str = "grid.yaml") -> Path:
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


SAMPLE = {
    "profile": "small",
    "profiles": {
        "small": {
            "columns": 4,
            "rows": 3,
            "cell_size": 0.5,
            "origin": [1, -1],
            "diagonal_movement": False,
            "blocked": [[1, 1], [2, 0]],
        },
        "minimal": {"columns": 2, "rows": 2},
    },
}


def test_load_active_profile(tmp_path: Path) -> None:
    config = load_grid_config(path=write_config(tmp_path, SAMPLE))

    assert config == GridConfig(
        name="small",
        columns=4,
        rows=3,
        cell_size=0.5,
        origin=(1.0, -1.0),
        diagonal_movement=False,
        blocked=[(1, 1), (2, 0)],
    )


def test_explicit_profile_uses_defaults(tmp_path: Path) -> None:
    config = load_grid_config(profile="minimal", path=write_config(tmp_path, SAMPLE))

    assert config.name == "minimal"
    assert config.cell_size == 1.0
    assert config.origin == (0.0, 0.0)
    assert config.diagonal_movement is True
    assert config.blocked == []


def test_environment_overrides(tmp_path: Path, monkeypatch: Any) -> None:
    path = write_config(tmp_path, SAMPLE, name="elsewhere.yaml")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    monkeypatch.setenv(PROFILE_ENV, "minimal")

    config = load_grid_config()

    assert config.name == "minimal"
    assert config.columns == 2


def test_repository_config_profiles_load() -> None:
    default = load_grid_config()
    corridor = load_grid_config(profile="corridor")

    assert default.name == "default"
    assert corridor.columns == 5 and corridor.rows == 5
    assert corridor.blocked == [(2, 0), (2, 1), (2, 2), (2, 3)]


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_grid_config(path=tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "data, profile, code",
    [
        (["not", "a", "mapping"], None, "invalid_config_file"),
        ({"profiles": {"a": {"columns": 1, "rows": 1}}}, None, "missing_profile_key"),
        ({"profile": "a"}, None, "missing_profiles_mapping"),
        (SAMPLE, "huge", "unknown_profile"),
        ({"profile": "a", "profiles": {"a": {"rows": 3}}}, None, "missing_keys"),
        ({"profile": "a", "profiles": {"a": {"columns": 0, "rows": 3}}}, None, "invalid_dimensions"),
        ({"profile": "a", "profiles": {"a": {"columns": 2, "rows": 2, "cell_size": -1}}}, None, "invalid_cell_size"),
        ({"profile": "a", "profiles": {"a": {"columns": 2, "rows": 2, "origin": [1]}}}, None, "invalid_pair"),
        ({"profile": "a", "profiles": {"a": {"columns": "x", "rows": 2}}}, None, "invalid_value"),
        ({"profile": "a", "profiles": {"a": {"columns": 2, "rows": 2, "diagonal_movement": "false"}}}, None, "invalid_value"),
        ({"profile": "a", "profiles": {"a": {"columns": 2, "rows": 2, "blocked": [[2, 0]]}}}, None, "blocked_out_of_bounds"),
        ({"profile": "a", "profiles": {"a": {"columns": 2, "rows": 2, "blocked": "all"}}}, None, "invalid_blocked"),
    ],
)
def test_invalid_configs_raise_grid_config_error(tmp_path: Path, data, profile, code) -> None:
    path = write_config(tmp_path, data)

    with pytest.raises(GridConfigError) as exc_info:
        load_grid_config(profile=profile, path=path)

    assert exc_info.value.code == code


def test_config_from_mapping_direct() -> None:
    config = config_from_mapping("inline", {"columns": 3, "rows": 1, "blocked": [(0, 0)]})

    assert config.name == "inline"
    assert config.blocked == [(0, 0)]


@pytest.mark.parametrize("flag", ["false", "no", 0, 1, None])
def test_diagonal_movement_must_be_a_boolean(flag: Any) -> None:
    with pytest.raises(GridConfigError) as exc_info:
        config_from_mapping("inline", {"columns": 3, "rows": 3, "diagonal_movement": flag})

    assert exc_info.value.code == "invalid_value"
    assert exc_info.value.details["key"] == "diagonal_movement"


def test_diagonal_movement_accepts_yaml_booleans() -> None:
    assert config_from_mapping("a", {"columns": 2, "rows": 2, "diagonal_movement": False}).diagonal_movement is False
    assert config_from_mapping("b", {"columns": 2, "rows": 2}).diagonal_movement is True
