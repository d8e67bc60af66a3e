# tests/test_validate_grid_tool.py
"""
Tests for config/tools/validate_grid.py (loaded from its file path, the
same way it is run as a script).
"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

import pytest


TOOL_PATH = Path(__file__).resolve().parents[1] / "config" / "tools" / "validate_grid.py"


@pytest.fixture
def tool():
    spec = importlib.util.spec_from_file_location("validate_grid", TOOL_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_validate_grid_ok(tool: Any, capsys: Any) -> None:
    assert tool.main(["corridor"]) == 0

    out = capsys.readouterr().out
    assert "Grid config validation OK." in out
    assert "Cells: 25 (21 walkable)" in out


def test_validate_grid_unknown_profile(tool: Any, capsys: Any) -> None:
    assert tool.main(["does_not_exist"]) == 1

    assert "unknown_profile" in capsys.readouterr().err
