from __future__ import annotations

from collections.abc import Iterable

from hpd_graph.graph.model import HpdGraph, NodeKind
from hpd_graph.graph.portfolios import Portfolio

NODE_STYLES = {
    NodeKind.BIZADDR: "color=lightblue2, style=filled, shape=box",
    NodeKind.NAME: "color=whitesmoke, style=filled",
}
BRIDGE_STYLE = "color=red, penwidth=3"


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def dot_graph(
    graph: HpdGraph,
    portfolio: Portfolio,
    bridges: Iterable[tuple[int, int]] = (),
) -> str:
    """Render one portfolio as Graphviz text, with local bridges highlighted."""
    bridge_keys = {frozenset(pair) for pair in bridges}
    lines = [f"// {portfolio.name}", "", "graph {"]
    for node in portfolio.nodes:
        style = NODE_STYLES[graph.kind(node)]
        lines.append(f"    {node} [ label={_quote(graph.label(node))}, {style} ]")

    seen_edges: set[int] = set()
    for node in portfolio.nodes:
        for edge in graph.incident_edges(node):
            if edge.id in seen_edges:
                continue
            seen_edges.add(edge.id)
            attrs = f"label={_quote(str(edge.mention_count))}"
            if frozenset((edge.source, edge.target)) in bridge_keys:
                attrs = f"{attrs}, {BRIDGE_STYLE}"
            lines.append(f"    {edge.source} -- {edge.target} [ {attrs} ]")
    lines.append("}")
    return "\n".join(lines) + "\n"
