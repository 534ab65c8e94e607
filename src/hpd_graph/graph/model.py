from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class NodeKind(str, Enum):
    NAME = "name"
    BIZADDR = "bizaddr"


@dataclass(frozen=True)
class Node:
    kind: NodeKind
    label_id: int


@dataclass(frozen=True)
class RegistrationContactRef:
    registration_id: int
    contact_id: int


@dataclass
class Edge:
    id: int
    source: int
    target: int
    refs: list[RegistrationContactRef] = field(default_factory=list)

    @property
    def mention_count(self) -> int:
        return len(self.refs)

    def other(self, node: int) -> int:
        return self.target if node == self.source else self.source


class StringArena:
    """Interned strings addressed by integer id."""

    def __init__(self) -> None:
        self._strings: list[str] = []
        self._ids: dict[str, int] = {}

    def intern(self, value: str) -> int:
        existing = self._ids.get(value)
        if existing is not None:
            return existing
        string_id = len(self._strings)
        self._strings.append(value)
        self._ids[value] = string_id
        return string_id

    def __getitem__(self, string_id: int) -> str:
        return self._strings[string_id]

    def __len__(self) -> int:
        return len(self._strings)


class HpdGraph:
    """Undirected name/business-address graph.

    Node ids are dense integers assigned in creation order, so iterating
    ``node_ids()`` follows the order in which input rows introduced them.
    At most one edge joins any pair of nodes.
    """

    def __init__(self) -> None:
        self.strings = StringArena()
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.name_nodes: dict[str, int] = {}
        self.addr_nodes: dict[str, int] = {}
        self._adjacency: list[list[int]] = []
        self._edge_index: dict[tuple[int, int], int] = {}

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> range:
        return range(len(self.nodes))

    def add_node(self, kind: NodeKind, label: str) -> int:
        node_id = len(self.nodes)
        self.nodes.append(Node(kind=kind, label_id=self.strings.intern(label)))
        self._adjacency.append([])
        return node_id

    def add_edge(self, source: int, target: int) -> Edge:
        key = (min(source, target), max(source, target))
        if key in self._edge_index:
            raise ValueError(f"Edge already exists between nodes {source} and {target}")
        edge = Edge(id=len(self.edges), source=source, target=target)
        self.edges.append(edge)
        self._edge_index[key] = edge.id
        self._adjacency[source].append(edge.id)
        self._adjacency[target].append(edge.id)
        return edge

    def edge_between(self, a: int, b: int) -> Edge | None:
        edge_id = self._edge_index.get((min(a, b), max(a, b)))
        return None if edge_id is None else self.edges[edge_id]

    def label(self, node: int) -> str:
        return self.strings[self.nodes[node].label_id]

    def kind(self, node: int) -> NodeKind:
        return self.nodes[node].kind

    def is_name(self, node: int) -> bool:
        return self.nodes[node].kind is NodeKind.NAME

    def is_bizaddr(self, node: int) -> bool:
        return self.nodes[node].kind is NodeKind.BIZADDR

    def incident_edges(self, node: int) -> Iterator[Edge]:
        for edge_id in self._adjacency[node]:
            yield self.edges[edge_id]

    def neighbors(self, node: int) -> list[int]:
        return [self.edges[edge_id].other(node) for edge_id in self._adjacency[node]]

    def degree(self, node: int) -> int:
        return len(self._adjacency[node])

    def mention_count(self, node: int) -> int:
        """Registration-contact references across every edge touching ``node``."""
        return sum(edge.mention_count for edge in self.incident_edges(node))

    def find_name(self, search: str) -> int | None:
        exact = self.name_nodes.get(search)
        if exact is not None:
            return exact
        for name, node in self.name_nodes.items():
            if search in name:
                return node
        return None

    def path_to_string(self, path: list[int]) -> str:
        return " -> ".join(self.label(node) for node in path)
