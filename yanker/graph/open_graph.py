"""Open graph data model.

Pure Python.  An OpenGraph is a boundary (ordered gates not attached to any
node), a sequence of (node_id, Node) pairs kept in insertion order, and a set
of edges.  Graph values are immutable: every "mutator" below returns a new
graph, so an editor can keep old values around for undo and several readers
can share one value without locking.

Polarity as seen by an edge
---------------------------
A real node's gate is used with its stored polarity.  A boundary gate is seen
from inside the graph, so its polarity is negated: a boundary PRODUCER is an
output of the whole graph, which means that inside the graph it is the target
of exactly one edge.  effective_polarity() derives this from resolve_gate();
nothing caches polarity anywhere else.

Well-formedness
---------------
check_graph() verifies:
  1. every edge endpoint resolves to an existing gate,
  2. every edge runs from an (effective) producer to an (effective) consumer,
  3. every consumer gate is the target of exactly one edge,
  4. every producer gate is the source of at least one edge.
Graphs are allowed to be invalid in between edits; nothing here enforces the
invariants eagerly.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional
import re

from .primitives import (
    BOUNDARY_ID, Edge, Gate, Node, Path, Polarity,
)


_NUMERIC_NAME = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class OpenGraph:
    boundary: tuple[Gate, ...] = field(default_factory=tuple)
    nodes: tuple[tuple[int, Node], ...] = field(default_factory=tuple)
    edges: frozenset[Edge] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.boundary, tuple):
            object.__setattr__(self, "boundary", tuple(self.boundary))
        if isinstance(self.nodes, dict):
            object.__setattr__(self, "nodes", tuple(self.nodes.items()))
        elif not isinstance(self.nodes, tuple):
            object.__setattr__(self, "nodes", tuple((nid, n) for nid, n in self.nodes))
        if not isinstance(self.edges, frozenset):
            object.__setattr__(self, "edges", frozenset(self.edges))

    # -- Node accessors --

    def node(self, node_id: int) -> Optional[Node]:
        return next((n for nid, n in self.nodes if nid == node_id), None)

    def node_ids(self) -> list[int]:
        return [nid for nid, _ in self.nodes]

    def edges_for_node(self, node_id: int) -> list[Edge]:
        return sorted(e for e in self.edges
                      if e.source.node_id == node_id or e.target.node_id == node_id)

    # -- Value-returning mutators --

    def with_node(self, node_id: int, node: Node) -> "OpenGraph":
        """Insert a node, or replace the node already holding that id in place."""
        if node_id == BOUNDARY_ID:
            raise ValueError("node id 0 is reserved for the boundary")
        if self.node(node_id) is not None:
            nodes = tuple((nid, node if nid == node_id else n) for nid, n in self.nodes)
        else:
            nodes = self.nodes + ((node_id, node),)
        return replace(self, nodes=nodes)

    def with_gate(self, node_id: int, gate: Gate) -> "OpenGraph":
        """Append a gate to a real node, or to the boundary for BOUNDARY_ID."""
        if node_id == BOUNDARY_ID:
            return replace(self, boundary=self.boundary + (gate,))
        node = self.node(node_id)
        if node is None:
            raise KeyError(node_id)
        return self.with_node(node_id, Node(node.label, node.gates + (gate,)))

    def without_node(self, node_id: int) -> "OpenGraph":
        """Drop a node together with every edge touching it."""
        return replace(
            self,
            nodes=tuple((nid, n) for nid, n in self.nodes if nid != node_id),
            edges=frozenset(e for e in self.edges
                            if e.source.node_id != node_id and e.target.node_id != node_id),
        )

    def with_edge(self, edge: Edge) -> "OpenGraph":
        return replace(self, edges=self.edges | {edge})

    def without_edge(self, edge: Edge) -> "OpenGraph":
        return replace(self, edges=self.edges - {edge})

    # -- Serialisation --

    def to_dict(self) -> dict:
        return {
            "boundary": [g.to_dict() for g in self.boundary],
            "nodes": [{"id": nid, "node": n.to_dict()} for nid, n in self.nodes],
            "edges": [e.to_dict() for e in sorted(self.edges)],
        }

    @staticmethod
    def from_dict(d: dict) -> "OpenGraph":
        return OpenGraph(
            boundary=tuple(Gate.from_dict(g) for g in d.get("boundary", [])),
            nodes=tuple((int(n["id"]), Node.from_dict(n["node"])) for n in d.get("nodes", [])),
            edges=frozenset(Edge.from_dict(e) for e in d.get("edges", [])),
        )


def seed_graph(gate: Gate) -> OpenGraph:
    """Starting graph for the editor: no nodes, no edges, one boundary gate."""
    return OpenGraph(boundary=(gate,))


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def nodes_and_boundary(graph: OpenGraph) -> list[tuple[int, Node]]:
    """All nodes, with the boundary first as a synthetic unlabeled node."""
    return [(BOUNDARY_ID, Node("", graph.boundary))] + list(graph.nodes)


def resolve_gate(graph: OpenGraph, path: Path) -> Optional[Polarity]:
    """Stored polarity of the gate a path points at, or None if it does not exist."""
    if path.node_id == BOUNDARY_ID:
        gates = graph.boundary
    else:
        node = graph.node(path.node_id)
        if node is None:
            return None
        gates = node.gates
    return next((g.polarity for g in gates if g.name == path.gate_name), None)


def effective_polarity(graph: OpenGraph, path: Path) -> Optional[Polarity]:
    """Polarity of a gate as seen by an edge inside the graph."""
    polarity = resolve_gate(graph, path)
    if polarity is None:
        return None
    return polarity.negated() if path.node_id == BOUNDARY_ID else polarity


def fresh_gate_name(graph: OpenGraph, node_id: int) -> Optional[str]:
    """Next numeric gate name for a node: one past the largest numeric name, or "0".

    Names that do not parse as integers are ignored.  Returns None if the node
    does not exist (the boundary is not a node here).
    """
    node = graph.node(node_id)
    if node is None:
        return None
    nxt = 0
    for g in node.gates:
        if _NUMERIC_NAME.fullmatch(g.name):
            nxt = max(nxt, int(g.name) + 1)
    return str(nxt)


def max_node_id(nodes: Iterable[tuple[int, Node]]) -> int:
    return max((nid for nid, _ in nodes), default=BOUNDARY_ID)


# ---------------------------------------------------------------------------
# Validity
# ---------------------------------------------------------------------------

def has_edge(edges: Iterable[Edge], path: Path, producer_role: bool) -> bool:
    """Arity rule for one gate.

    A producer must be the source of at least one edge; a consumer must be the
    target of exactly one.
    """
    if producer_role:
        return any(e.source == path for e in edges)
    return sum(1 for e in edges if e.target == path) == 1


def check_graph(graph: OpenGraph) -> bool:
    for e in graph.edges:
        if effective_polarity(graph, e.source) is not Polarity.PRODUCER:
            return False
        if effective_polarity(graph, e.target) is not Polarity.CONSUMER:
            return False

    for nid, node in nodes_and_boundary(graph):
        for g in node.gates:
            path = Path(nid, g.name)
            role = effective_polarity(graph, path)
            if not has_edge(graph.edges, path, role is Polarity.PRODUCER):
                return False
    return True


def check_add_edge(graph: OpenGraph, edge: Edge) -> bool:
    """An edge may be added only if nothing is connected to its target yet."""
    return not any(e.target == edge.target for e in graph.edges)


def make_edge(graph: OpenGraph, path_a: Path, path_b: Path) -> Optional[Edge]:
    """Orient a connection between two gates, if it is admissible.

    Exactly one side must be a producer and the other a consumer, and the
    consumer must still be free.  Returns None otherwise.
    """
    pa = effective_polarity(graph, path_a)
    pb = effective_polarity(graph, path_b)
    if pa is Polarity.PRODUCER and pb is Polarity.CONSUMER:
        edge = Edge(path_a, path_b)
    elif pa is Polarity.CONSUMER and pb is Polarity.PRODUCER:
        edge = Edge(path_b, path_a)
    else:
        return None
    return edge if check_add_edge(graph, edge) else None


# ---------------------------------------------------------------------------
# Id shifting
# ---------------------------------------------------------------------------

def _shift_path(path: Path, offset: int) -> Path:
    if path.node_id == BOUNDARY_ID:
        return path
    return Path(path.node_id + offset, path.gate_name)


def shift_graph_ids(graph: OpenGraph, offset: int) -> OpenGraph:
    """Add offset to every real node id; the boundary keeps id 0."""
    return OpenGraph(
        boundary=graph.boundary,
        nodes=tuple((nid + offset, n) for nid, n in graph.nodes),
        edges=frozenset(Edge(_shift_path(e.source, offset), _shift_path(e.target, offset))
                        for e in graph.edges),
    )
