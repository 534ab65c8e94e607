from __future__ import annotations

import pandas as pd
import pytest

from hpd_graph.graph.builder import GraphBuilder, build_graph
from hpd_graph.graph.model import NodeKind, RegistrationContactRef


def _accepted(rows: list[tuple[str, str, int, int]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=["name", "address", "registration_id", "contact_id"])


def test_duplicate_tuple_appends_to_one_edge() -> None:
    graph = build_graph(
        _accepted(
            [
                ("JANE DOE", "10 MAIN ST , NEW YORK NY", 1, 11),
                ("JANE DOE", "10 MAIN ST , NEW YORK NY", 1, 11),
            ]
        )
    )

    assert graph.node_count == 2
    assert graph.edge_count == 1
    assert graph.edges[0].refs == [
        RegistrationContactRef(registration_id=1, contact_id=11),
        RegistrationContactRef(registration_id=1, contact_id=11),
    ]


def test_names_and_addresses_are_interned_separately() -> None:
    graph = build_graph(
        _accepted(
            [
                ("SAME", "SAME", 1, 1),
                ("JANE DOE", "SAME", 2, 2),
            ]
        )
    )

    assert len(graph.name_nodes) == 2
    assert len(graph.addr_nodes) == 1
    assert graph.kind(graph.addr_nodes["SAME"]) is NodeKind.BIZADDR
    assert graph.kind(graph.name_nodes["SAME"]) is NodeKind.NAME
    assert graph.label(graph.name_nodes["SAME"]) == "SAME"
    # One arena entry serves both nodes that share a display string.
    assert len(graph.strings) == 2


def test_node_ids_follow_input_order() -> None:
    rows = [
        ("B NAME", "ADDR 1", 1, 1),
        ("A NAME", "ADDR 2", 2, 2),
        ("B NAME", "ADDR 2", 3, 3),
    ]

    first = build_graph(_accepted(rows))
    second = build_graph(_accepted(rows))

    assert [first.label(node) for node in first.node_ids()] == [
        "ADDR 1",
        "B NAME",
        "ADDR 2",
        "A NAME",
    ]
    assert [(e.source, e.target) for e in first.edges] == [
        (e.source, e.target) for e in second.edges
    ]
    assert first.name_nodes == second.name_nodes


def test_edges_and_neighbors_are_undirected() -> None:
    builder = GraphBuilder()
    edge_id = builder.add_contact("JANE DOE", "ADDR", 5, 50)
    graph = builder.build()

    name = graph.name_nodes["JANE DOE"]
    addr = graph.addr_nodes["ADDR"]
    assert graph.edge_between(name, addr).id == edge_id
    assert graph.edge_between(addr, name).id == edge_id
    assert graph.neighbors(name) == [addr]
    assert graph.neighbors(addr) == [name]
    assert graph.mention_count(addr) == 1


def test_adding_contact_without_name_is_a_contract_violation() -> None:
    builder = GraphBuilder()
    with pytest.raises(ValueError, match="without a name or address"):
        builder.add_contact("", "ADDR", 1, 1)


def test_find_name_prefers_exact_match_then_substring() -> None:
    graph = build_graph(
        _accepted(
            [
                ("JOHN SMITHSON", "ADDR 1", 1, 1),
                ("JOHN SMITH", "ADDR 2", 2, 2),
            ]
        )
    )

    assert graph.label(graph.find_name("JOHN SMITH")) == "JOHN SMITH"
    assert graph.label(graph.find_name("SMITH")) == "JOHN SMITHSON"
    assert graph.find_name("ADDR 1") is None
    assert graph.find_name("NOBODY") is None
