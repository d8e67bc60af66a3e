# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure src/ is on sys.path for test imports like `import nav_core`, `import env`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def _isolate_grid_env(monkeypatch: Any) -> None:
    """Tests always read config/grid.yaml unless they point elsewhere."""
    monkeypatch.delenv("GRIDNAV_CONFIG", raising=False)
    monkeypatch.delenv("GRIDNAV_PROFILE", raising=False)
