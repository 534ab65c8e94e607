from __future__ import annotations

import logging

import pandas as pd

from hpd_graph.graph.model import HpdGraph, NodeKind, RegistrationContactRef

LOGGER = logging.getLogger(__name__)


class GraphBuilder:
    """Interns names and addresses into nodes and accumulates one edge per pair."""

    def __init__(self) -> None:
        self._graph = HpdGraph()

    def intern_name(self, name: str) -> int:
        node = self._graph.name_nodes.get(name)
        if node is None:
            node = self._graph.add_node(NodeKind.NAME, name)
            self._graph.name_nodes[name] = node
        return node

    def intern_address(self, address: str) -> int:
        node = self._graph.addr_nodes.get(address)
        if node is None:
            node = self._graph.add_node(NodeKind.BIZADDR, address)
            self._graph.addr_nodes[address] = node
        return node

    def add_contact(self, name: str, address: str, registration_id: int, contact_id: int) -> int:
        """Record one accepted contact and return the id of the edge it landed on."""
        if not name or not address:
            raise ValueError(
                f"Contact {contact_id} reached the graph without a name or address"
            )
        addr_node = self.intern_address(address)
        name_node = self.intern_name(name)
        edge = self._graph.edge_between(name_node, addr_node)
        if edge is None:
            edge = self._graph.add_edge(name_node, addr_node)
        edge.refs.append(
            RegistrationContactRef(registration_id=int(registration_id), contact_id=int(contact_id))
        )
        return edge.id

    def build(self) -> HpdGraph:
        return self._graph


def build_graph(contacts: pd.DataFrame) -> HpdGraph:
    """Build the name/address graph from filtered contacts, in row order."""
    builder = GraphBuilder()
    for row in contacts.itertuples(index=False):
        builder.add_contact(
            name=row.name,
            address=row.address,
            registration_id=row.registration_id,
            contact_id=row.contact_id,
        )
    graph = builder.build()
    LOGGER.info(
        "Read %d unique names, %d unique addresses and %d edges",
        len(graph.name_nodes),
        len(graph.addr_nodes),
        graph.edge_count,
    )
    return graph
