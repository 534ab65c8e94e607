from __future__ import annotations

from hpd_graph.graph.long_paths import LongPath
from hpd_graph.graph.model import HpdGraph
from hpd_graph.graph.portfolios import Portfolio, PortfolioMap


def format_graph_counts(graph: HpdGraph, portfolios: PortfolioMap) -> str:
    return (
        f"Read {len(graph.name_nodes)} unique names, {len(graph.addr_nodes)} unique addresses, "
        f"and {len(portfolios)} connected components."
    )


def format_portfolio_info(graph: HpdGraph, portfolio: Portfolio, top: int = 5) -> list[str]:
    lines = [
        f"This is {portfolio.name}.",
        f"It has {portfolio.building_count(graph)} buildings.",
        "",
        "The most frequent business addresses mentioned in the portfolio are:",
        "",
    ]
    for bizaddr, total_regs in portfolio.rank_bizaddrs(graph)[:top]:
        lines.append(f"{bizaddr} (mentioned in {total_regs} HPD registration contacts)")

    lines.extend(["", "The most frequent names mentioned in the portfolio are:", ""])
    for name, total_regs in portfolio.rank_names(graph)[:top]:
        lines.append(f"{name} (mentioned in {total_regs} HPD registration contacts)")

    bridges = len(portfolio.find_local_bridges(graph))
    if bridges > 0:
        plural = "s" if bridges > 1 else ""
        lines.extend(["", f"The portfolio has {bridges} local bridge{plural}."])
    return lines


def format_ranking(ranking: list[tuple[Portfolio, int]]) -> list[str]:
    return [
        f"{rank}. {portfolio.name} - {size} buildings"
        for rank, (portfolio, size) in enumerate(ranking, start=1)
    ]


def format_long_paths(graph: HpdGraph, paths: list[LongPath], min_length: int) -> list[str]:
    lines = [f"Paths with minimum length {min_length}:", ""]
    for path in paths:
        lines.append(f"length {path.length} path: {graph.path_to_string(list(path.nodes))}")
        lines.append("")
    return lines
