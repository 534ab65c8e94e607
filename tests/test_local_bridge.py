from __future__ import annotations

import pytest

from hpd_graph.graph.local_bridge import LocalBridgeFinder

TWO_TRIANGLES = [
    # Clique A
    (1, 2),
    (2, 3),
    (3, 1),
    # Bridge
    (1, 4),
    # Clique B
    (4, 5),
    (5, 6),
    (6, 4),
]


def _adjacency(edges: list[tuple[int, int]]) -> dict[int, list[int]]:
    adjacency: dict[int, list[int]] = {}
    for a, b in edges:
        adjacency.setdefault(a, []).append(b)
        adjacency.setdefault(b, []).append(a)
    return adjacency


def _finder(edges: list[tuple[int, int]], start: int) -> LocalBridgeFinder[int]:
    adjacency = _adjacency(edges)
    return LocalBridgeFinder(lambda node: adjacency.get(node, []), start)


@pytest.mark.parametrize("start", [1, 2, 3, 4, 5, 6])
def test_two_triangles_have_exactly_one_bridge(start: int) -> None:
    finder = _finder(TWO_TRIANGLES, start)

    assert finder.is_local_bridge(1, 4) is True
    assert finder.is_local_bridge(4, 1) is True
    assert finder.is_local_bridge(1, 2) is False
    assert finder.is_local_bridge(5, 6) is False
    assert [frozenset(pair) for pair in finder.find_local_bridges()] == [frozenset((1, 4))]


def test_nodes_outside_the_traversal_are_not_applicable() -> None:
    finder = _finder(TWO_TRIANGLES, 2)

    assert finder.is_local_bridge(1, 101) is None
    assert finder.is_local_bridge(100, 1) is None
    assert finder.is_local_bridge(100, 101) is None
    assert finder.lowest_entry_time(100, 1) is None


def test_traversal_stays_inside_the_start_component() -> None:
    finder = _finder(TWO_TRIANGLES + [(7, 8), (8, 9)], 1)

    assert finder.is_local_bridge(7, 8) is None
    assert set(finder.entry_times) == {1, 2, 3, 4, 5, 6}


def test_entry_times_strictly_increase_along_tree_edges() -> None:
    finder = _finder(TWO_TRIANGLES, 3)

    assert finder.entry_times[3] == 0
    assert sorted(finder.entry_times.values()) == list(range(6))
    for child, parent in finder.parents.items():
        assert finder.entry_times[parent] < finder.entry_times[child]


def test_every_edge_of_a_path_is_a_bridge() -> None:
    finder = _finder([(1, 2), (2, 3), (3, 4)], 2)

    assert sorted(frozenset(pair) for pair in finder.find_local_bridges()) == sorted(
        [frozenset((1, 2)), frozenset((2, 3)), frozenset((3, 4))]
    )


def test_cycle_has_no_bridges_and_non_adjacent_pair_is_false() -> None:
    finder = _finder([(1, 2), (2, 3), (3, 4), (4, 1)], 1)

    assert finder.find_local_bridges() == []
    assert finder.is_local_bridge(1, 3) is False


def test_lowest_entry_time_excludes_only_the_given_node() -> None:
    finder = _finder(TWO_TRIANGLES, 1)

    # DFS from 1 visits 2, 3, then 4, 5, 6.
    assert finder.entry_times == {1: 0, 2: 1, 3: 2, 4: 3, 5: 4, 6: 5}
    assert finder.lowest_entry_time(2, 1) == 0
    assert finder.lowest_entry_time(3, 2) == 0
    assert finder.lowest_entry_time(3, 1) == 1
    assert finder.lowest_entry_time(4, 1) == 3
