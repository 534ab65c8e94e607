from __future__ import annotations

import pandas as pd

from hpd_graph.graph.model import HpdGraph
from hpd_graph.graph.portfolios import Portfolio

RANKING_COLUMNS = ["rank", "portfolio", "buildings", "n_names", "n_bizaddrs", "n_local_bridges"]


def build_ranking_table(graph: HpdGraph, ranking: list[tuple[Portfolio, int]]) -> pd.DataFrame:
    rows = [
        {
            "rank": rank,
            "portfolio": portfolio.name,
            "buildings": size,
            "n_names": len(portfolio.name_nodes(graph)),
            "n_bizaddrs": len(portfolio.bizaddr_nodes(graph)),
            "n_local_bridges": len(portfolio.find_local_bridges(graph)),
        }
        for rank, (portfolio, size) in enumerate(ranking, start=1)
    ]
    return pd.DataFrame(rows, columns=RANKING_COLUMNS)
