from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from hpd_graph.graph.model import HpdGraph
from hpd_graph.graph.portfolios import Portfolio


def portfolio_document(
    graph: HpdGraph,
    portfolio: Portfolio,
    bridges: Iterable[tuple[int, int]] = (),
    building_id: Callable[[int], str] | None = None,
) -> dict[str, Any]:
    """Structured description of one portfolio for the browser graph view.

    Each undirected edge appears exactly once. ``building_id`` maps a
    registration id to the building the edge should link to.
    """
    bridge_keys = {frozenset(pair) for pair in bridges}
    nodes: list[dict[str, Any]] = []
    edges: list[dict[str, Any]] = []
    seen_edges: set[int] = set()

    for node in portfolio.nodes:
        nodes.append({"id": node, "kind": graph.kind(node).value, "label": graph.label(node)})
        for edge in graph.incident_edges(node):
            if edge.id in seen_edges:
                continue
            seen_edges.add(edge.id)
            first_registration = edge.refs[0].registration_id
            edges.append(
                {
                    "from": edge.source,
                    "to": edge.target,
                    "mention_count": edge.mention_count,
                    "is_bridge": frozenset((edge.source, edge.target)) in bridge_keys,
                    "representative_building_id": (
                        building_id(first_registration) if building_id is not None else ""
                    ),
                }
            )

    return {"title": portfolio.name, "nodes": nodes, "edges": edges}
