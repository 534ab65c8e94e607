from __future__ import annotations

import pandas as pd

from hpd_graph.graph.builder import build_graph
from hpd_graph.graph.model import HpdGraph
from hpd_graph.graph.portfolios import PortfolioMap


def _graph(rows: list[tuple[str, str, int, int]]) -> HpdGraph:
    return build_graph(
        pd.DataFrame(rows, columns=["name", "address", "registration_id", "contact_id"])
    )


def _two_cluster_graph() -> HpdGraph:
    return _graph(
        [
            # Cluster one: two people sharing two addresses.
            ("ALICE", "ADDR A", 1, 1),
            ("ALICE", "ADDR A", 2, 2),
            ("ALICE", "ADDR B", 3, 3),
            ("BOB", "ADDR A", 1, 4),
            ("BOB", "ADDR B", 4, 5),
            # Cluster two: a single owner.
            ("CAROL", "ADDR C", 5, 6),
        ]
    )


def test_partition_is_total_and_disjoint() -> None:
    graph = _two_cluster_graph()
    portfolios = PortfolioMap.from_graph(graph)

    all_nodes = [node for portfolio in portfolios for node in portfolio.nodes]
    assert sorted(all_nodes) == list(graph.node_ids())
    assert len(all_nodes) == len(set(all_nodes))
    assert len(portfolios) == 2
    for node in graph.node_ids():
        assert node in portfolios.for_node(node)
    assert portfolios.for_node(999) is None


def test_portfolios_are_ordered_by_discovery() -> None:
    graph = _two_cluster_graph()
    portfolios = PortfolioMap.from_graph(graph)

    assert [portfolio.index for portfolio in portfolios] == [0, 1]
    assert portfolios.all()[1].nodes == (graph.addr_nodes["ADDR C"], graph.name_nodes["CAROL"])


def test_building_count_counts_distinct_registrations() -> None:
    graph = _two_cluster_graph()
    first, second = PortfolioMap.from_graph(graph).all()

    assert first.building_count(graph) == 4
    assert second.building_count(graph) == 1


def test_rankings_sort_descending_and_keep_tie_order() -> None:
    graph = _two_cluster_graph()
    first = PortfolioMap.from_graph(graph).all()[0]

    assert first.rank_names(graph) == [("ALICE", 3), ("BOB", 2)]
    # ADDR A has three mentions, ADDR B two.
    assert first.rank_bizaddrs(graph) == [("ADDR A", 3), ("ADDR B", 2)]

    tied = _graph([("X", "ADDR 1", 1, 1), ("Y", "ADDR 2", 2, 2), ("X", "ADDR 2", 3, 3)])
    portfolio = PortfolioMap.from_graph(tied).all()[0]
    assert portfolio.rank_names(tied) == [("X", 2), ("Y", 1)]
    assert portfolio.rank_bizaddrs(tied) == [("ADDR 2", 2), ("ADDR 1", 1)]

    even = _graph([("P", "ADDR 1", 1, 1), ("Q", "ADDR 1", 2, 2)])
    assert PortfolioMap.from_graph(even).all()[0].rank_names(even) == [("P", 1), ("Q", 1)]


def test_portfolio_name_uses_most_mentioned_name() -> None:
    graph = _two_cluster_graph()
    first, second = PortfolioMap.from_graph(graph).all()

    assert first.name == "ALICE's portfolio"
    assert second.name == "CAROL's portfolio"


def test_rank_by_building_count_applies_minimum() -> None:
    graph = _two_cluster_graph()
    portfolios = PortfolioMap.from_graph(graph)

    ranked = portfolios.rank_by_building_count(graph)
    assert [(portfolio.name, size) for portfolio, size in ranked] == [
        ("ALICE's portfolio", 4),
        ("CAROL's portfolio", 1),
    ]
    assert len(portfolios.rank_by_building_count(graph, min_buildings=2)) == 1


def test_local_bridges_skip_pendant_nodes() -> None:
    graph = _graph(
        [
            # Two owner clusters joined through ADDR SHARED.
            ("ALICE", "ADDR A", 1, 1),
            ("BOB", "ADDR A", 2, 2),
            ("ALICE", "ADDR B", 3, 3),
            ("BOB", "ADDR B", 4, 4),
            ("BOB", "ADDR SHARED", 5, 5),
            ("CAROL", "ADDR SHARED", 6, 6),
            ("CAROL", "ADDR C", 7, 7),
            ("DAN", "ADDR C", 8, 8),
            ("CAROL", "ADDR D", 9, 9),
            ("DAN", "ADDR D", 10, 10),
            # ADDR LONELY only hangs off DAN.
            ("DAN", "ADDR LONELY", 11, 11),
        ]
    )
    portfolio = PortfolioMap.from_graph(graph).all()[0]

    bridges = {frozenset(pair) for pair in portfolio.find_local_bridges(graph)}
    raw = {frozenset(pair) for pair in portfolio.bridge_finder(graph).find_local_bridges()}

    bob, carol, dan = (graph.name_nodes[name] for name in ("BOB", "CAROL", "DAN"))
    shared = graph.addr_nodes["ADDR SHARED"]
    lonely = graph.addr_nodes["ADDR LONELY"]
    assert bridges == {frozenset((bob, shared)), frozenset((shared, carol))}
    assert frozenset((dan, lonely)) in raw
