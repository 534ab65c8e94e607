"""Bridge detection inside one connected component.

Follows the DFS entry-time / low-link method described at
https://cp-algorithms.com/graph/bridge-searching.html
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import Generic, TypeVar

NodeT = TypeVar("NodeT", bound=Hashable)


class LocalBridgeFinder(Generic[NodeT]):
    """Classifies edges reached by one depth-first traversal from ``start``.

    Nodes the traversal never reached have no entry time, and every query
    touching them answers ``None`` rather than ``False``.
    """

    def __init__(self, neighbors: Callable[[NodeT], Iterable[NodeT]], start: NodeT) -> None:
        self.start = start
        self.entry_times: dict[NodeT, int] = {}
        self.parents: dict[NodeT, NodeT] = {}
        self.tree_edges: dict[NodeT, list[NodeT]] = {}
        self.back_edges: dict[NodeT, list[NodeT]] = {}
        self._traverse(neighbors, start)
        self._low: dict[NodeT, int] = {}
        # Children are discovered after their parents, so reverse entry order
        # settles every subtree before the node above it.
        for node in sorted(self.entry_times, key=self.entry_times.__getitem__, reverse=True):
            self._low[node] = self._compute_low(node, self.parents.get(node))

    def _traverse(self, neighbors: Callable[[NodeT], Iterable[NodeT]], start: NodeT) -> None:
        on_stack: set[NodeT] = {start}
        self.entry_times[start] = 0
        stack = [(start, iter(neighbors(start)))]
        while stack:
            node, pending = stack[-1]
            advanced = False
            for other in pending:
                if other not in self.entry_times:
                    self.tree_edges.setdefault(node, []).append(other)
                    self.parents[other] = node
                    self.entry_times[other] = len(self.entry_times)
                    on_stack.add(other)
                    stack.append((other, iter(neighbors(other))))
                    advanced = True
                    break
                if other in on_stack:
                    # Includes the edge back to the tree parent; low() skips it.
                    self.back_edges.setdefault(node, []).append(other)
            if not advanced:
                stack.pop()
                on_stack.discard(node)

    def _compute_low(self, node: NodeT, exclude: NodeT | None) -> int:
        times = [self.entry_times[node]]
        for target in self.back_edges.get(node, ()):
            if target != exclude:
                times.append(self.entry_times[target])
        for child in self.tree_edges.get(node, ()):
            times.append(self._low[child])
        return min(times)

    def lowest_entry_time(self, node: NodeT, exclude: NodeT) -> int | None:
        """Earliest entry time reachable from ``node``'s subtree without using ``exclude``."""
        if node not in self.entry_times:
            return None
        if self.parents.get(node) == exclude and node in self._low:
            return self._low[node]
        return self._compute_low(node, exclude)

    def is_local_bridge(self, a: NodeT, b: NodeT) -> bool | None:
        if a not in self.entry_times or b not in self.entry_times:
            return None
        if self.parents.get(b) == a:
            parent, child = a, b
        elif self.parents.get(a) == b:
            parent, child = b, a
        else:
            # Not a tree edge: either a back edge or no edge at all.
            return False
        low = self.lowest_entry_time(child, parent)
        return low is not None and low > self.entry_times[parent]

    def find_local_bridges(self) -> list[tuple[NodeT, NodeT]]:
        """Every tree edge ``(parent, child)`` that is a local bridge, in discovery order."""
        bridges: list[tuple[NodeT, NodeT]] = []
        for child in sorted(self.parents, key=self.entry_times.__getitem__):
            parent = self.parents[child]
            if self._low[child] > self.entry_times[parent]:
                bridges.append((parent, child))
        return bridges
