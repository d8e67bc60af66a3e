# tests/test_nav_cells.py
"""
Unit tests for nav_core.cells: PathNode cost bookkeeping and the octile
distance cost model.
"""

from __future__ import annotations

import pytest

from nav_core.cells import (
    INFINITE_COST,
    NodeStatus,
    PathNode,
    octile_distance,
)


def test_fresh_node_has_infinite_costs_and_no_predecessor() -> None:
    node = PathNode()

    assert node.g_cost == INFINITE_COST
    assert node.h_cost == INFINITE_COST
    assert node.f_cost == INFINITE_COST * 2
    assert node.predecessor is None
    assert node.status is NodeStatus.UNVISITED
    assert node.walkable is True


def test_f_cost_tracks_g_and_h() -> None:
    node = PathNode(index=(1, 1))

    node.set_costs(20, 34)
    assert node.f_cost == 54

    node.g_cost = 10
    assert node.f_cost == 44

    node.h_cost = 0
    assert node.f_cost == 10


def test_reset_keeps_walkable_and_index() -> None:
    node = PathNode(index=(3, 4), walkable=False)
    node.set_costs(5, 6)
    node.predecessor = (2, 4)
    node.status = NodeStatus.CLOSED

    node.reset()

    assert node.index == (3, 4)
    assert node.walkable is False
    assert node.g_cost == INFINITE_COST
    assert node.h_cost == INFINITE_COST
    assert node.predecessor is None
    assert node.status is NodeStatus.UNVISITED


def test_str_is_the_dataclass_repr() -> None:
    node = PathNode(index=(3, 4), walkable=False)

    assert str(node) == repr(node)
    assert str(node).startswith("PathNode(index=(3, 4), walkable=False")
    assert "\n" not in str(node)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((0, 0), (0, 0), 0),
        ((0, 0), (1, 0), 10),
        ((0, 0), (0, -1), 10),
        ((0, 0), (1, 1), 14),
        ((0, 0), (4, 0), 40),
        ((0, 0), (2, 4), 48),
        ((0, 0), (3, 5), 62),
        ((7, 2), (1, 9), 6 * 14 + 1 * 10),
    ],
)
def test_octile_distance(a, b, expected) -> None:
    assert octile_distance(a, b) == expected
    assert octile_distance(b, a) == expected
