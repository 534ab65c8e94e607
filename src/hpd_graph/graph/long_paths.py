from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from hpd_graph.graph.model import HpdGraph


@dataclass(frozen=True)
class LongPath:
    length: int
    nodes: tuple[int, ...]


def shortest_path_tree(graph: HpdGraph, source: int) -> tuple[dict[int, int], dict[int, int]]:
    """Hop counts and BFS predecessors for every node reachable from ``source``."""
    distances = {source: 0}
    predecessors: dict[int, int] = {}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for other in graph.neighbors(node):
            if other not in distances:
                distances[other] = distances[node] + 1
                predecessors[other] = node
                queue.append(other)
    return distances, predecessors


def _walk_back(predecessors: dict[int, int], source: int, target: int) -> tuple[int, ...]:
    path = [target]
    while path[-1] != source:
        path.append(predecessors[path[-1]])
    return tuple(reversed(path))


def find_long_paths(
    graph: HpdGraph,
    min_length: int,
    visited: set[int] | None = None,
) -> list[LongPath]:
    """One farthest-name shortest path per search, for searches reaching ``min_length``.

    Every node reached by a search is added to ``visited`` and never starts a
    search of its own, so each cluster reports at most one path.
    """
    visited = set() if visited is None else visited
    paths: list[LongPath] = []
    for node in graph.node_ids():
        if node in visited:
            continue
        visited.add(node)
        if not graph.is_name(node):
            continue
        distances, predecessors = shortest_path_tree(graph, node)
        max_cost = 0
        farthest: int | None = None
        for other, cost in distances.items():
            visited.add(other)
            if graph.is_name(other) and cost > max_cost:
                max_cost = cost
                farthest = other
        if farthest is not None and max_cost >= min_length:
            paths.append(LongPath(length=max_cost, nodes=_walk_back(predecessors, node, farthest)))
    return paths
