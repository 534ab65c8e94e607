from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from hpd_graph.graph.local_bridge import LocalBridgeFinder
from hpd_graph.graph.model import HpdGraph
from hpd_graph.ranking import rank_tuples

LOGGER = logging.getLogger(__name__)

UNKNOWN_NAME = "???"


def best_name(graph: HpdGraph, nodes: tuple[int, ...]) -> str | None:
    """Name node with the most registration-contact mentions; earliest node wins ties."""
    best: tuple[int, int] | None = None
    for node in nodes:
        if not graph.is_name(node):
            continue
        count = graph.mention_count(node)
        if best is None or best[1] < count:
            best = (node, count)
    return graph.label(best[0]) if best is not None else None


def portfolio_title(name: str | None) -> str:
    return f"{name or UNKNOWN_NAME}'s portfolio"


@dataclass(frozen=True)
class Portfolio:
    """A connected component of the graph.

    ``nodes`` holds node ids in creation order; ``name`` is computed once when
    the portfolio is built.
    """

    index: int
    nodes: tuple[int, ...]
    name: str

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    def name_nodes(self, graph: HpdGraph) -> list[int]:
        return [node for node in self.nodes if graph.is_name(node)]

    def bizaddr_nodes(self, graph: HpdGraph) -> list[int]:
        return [node for node in self.nodes if graph.is_bizaddr(node)]

    def registration_ids(self, graph: HpdGraph) -> set[int]:
        registration_ids: set[int] = set()
        for node in self.name_nodes(graph):
            for edge in graph.incident_edges(node):
                registration_ids.update(ref.registration_id for ref in edge.refs)
        return registration_ids

    def building_count(self, graph: HpdGraph) -> int:
        # One registration roughly corresponds to one building.
        return len(self.registration_ids(graph))

    def rank_bizaddrs(self, graph: HpdGraph) -> list[tuple[str, int]]:
        return rank_tuples(
            (graph.label(node), graph.mention_count(node)) for node in self.bizaddr_nodes(graph)
        )

    def rank_names(self, graph: HpdGraph) -> list[tuple[str, int]]:
        return rank_tuples(
            (graph.label(node), graph.mention_count(node)) for node in self.name_nodes(graph)
        )

    def bridge_finder(self, graph: HpdGraph) -> LocalBridgeFinder[int]:
        return LocalBridgeFinder(graph.neighbors, self.nodes[0])

    def find_local_bridges(self, graph: HpdGraph) -> list[tuple[int, int]]:
        """Local bridges that separate two clusters, leaving out pendant nodes."""
        return [
            (a, b)
            for a, b in self.bridge_finder(graph).find_local_bridges()
            if graph.degree(a) > 1 and graph.degree(b) > 1
        ]


class PortfolioMap:
    def __init__(self, portfolios: list[Portfolio], node_portfolios: dict[int, int]) -> None:
        self.portfolios = portfolios
        self.node_portfolios = node_portfolios

    @classmethod
    def from_graph(cls, graph: HpdGraph) -> PortfolioMap:
        visited: set[int] = set()
        portfolios: list[Portfolio] = []
        node_portfolios: dict[int, int] = {}

        for start in graph.node_ids():
            if start in visited:
                continue
            portfolio_idx = len(portfolios)
            visited.add(start)
            component: list[int] = []
            stack = [start]
            while stack:
                node = stack.pop()
                component.append(node)
                node_portfolios[node] = portfolio_idx
                for other in graph.neighbors(node):
                    if other not in visited:
                        visited.add(other)
                        stack.append(other)

            nodes = tuple(sorted(component))
            portfolios.append(
                Portfolio(
                    index=portfolio_idx,
                    nodes=nodes,
                    name=portfolio_title(best_name(graph, nodes)),
                )
            )

        LOGGER.info("Partitioned %d nodes into %d portfolios", graph.node_count, len(portfolios))
        return cls(portfolios=portfolios, node_portfolios=node_portfolios)

    def __len__(self) -> int:
        return len(self.portfolios)

    def __iter__(self) -> Iterator[Portfolio]:
        return iter(self.portfolios)

    def all(self) -> list[Portfolio]:
        return self.portfolios

    def for_node(self, node: int) -> Portfolio | None:
        idx = self.node_portfolios.get(node)
        return None if idx is None else self.portfolios[idx]

    def rank_by_building_count(
        self, graph: HpdGraph, min_buildings: int = 0
    ) -> list[tuple[Portfolio, int]]:
        sized = (
            (portfolio, portfolio.building_count(graph)) for portfolio in self.portfolios
        )
        return rank_tuples((portfolio, size) for portfolio, size in sized if size >= min_buildings)
