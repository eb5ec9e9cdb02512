"""Composition of open graphs.

vert_comp – sequential: A's outputs are plugged into B's inputs.
hori_comp – parallel: A and B side by side, nothing glued.

Both return new graph values and leave their operands untouched.

Vertical gluing
---------------
A boundary PRODUCER of A is an output of A: inside A it is the target of the
edge from whatever produces it.  A boundary CONSUMER of B is an input of B:
inside B it is the source of the edges to everything consuming it.  When the
two are glued, each B edge leaving the shared boundary gate is rerouted to
start at A's real producer, and each A edge entering it is rerouted to end at
B's real consumers.  Both sides yield the same spliced edges, which collapse
under set union.
"""

from __future__ import annotations
from typing import Optional

from .primitives import BOUNDARY_ID, Edge, Gate, Path, consumers, negate, producers
from .open_graph import OpenGraph, max_node_id, shift_graph_ids


def boundaries_match(a: OpenGraph, b: OpenGraph) -> bool:
    """Whether A's outputs line up, in order, with B's inputs.

    B's input gates are the duals of A's output gates, so they are compared
    after negation.
    """
    return producers(a.boundary) == tuple(negate(g) for g in consumers(b.boundary))


def vert_comp(a: OpenGraph, b: OpenGraph) -> Optional[OpenGraph]:
    """Compose A above B, or None when A's outputs do not match B's inputs.

    The new boundary is A's inputs followed by B's outputs, names unchanged.
    If one of A's inputs shares a name with one of B's outputs, the result
    has two boundary gates with that name; paths resolve to the first, so
    check_graph() rejects it even when A and B are both valid.
    """
    if not boundaries_match(a, b):
        return None

    b = shift_graph_ids(b, max_node_id(a.nodes))
    glued = {g.name for g in producers(a.boundary)}

    def glued_path(path: Path) -> bool:
        return path.node_id == BOUNDARY_ID and path.gate_name in glued

    edges = set()
    # A side: edges ending on a shared gate continue into B.
    for e in a.edges:
        if glued_path(e.target):
            edges.update(Edge(e.source, be.target)
                         for be in b.edges if be.source == e.target)
        else:
            edges.add(e)
    # B side: edges starting on a shared gate are fed by A.
    for e in b.edges:
        if glued_path(e.source):
            edges.update(Edge(ae.source, e.target)
                         for ae in a.edges if ae.target == e.source)
        else:
            edges.add(e)

    return OpenGraph(
        boundary=consumers(a.boundary) + producers(b.boundary),
        nodes=a.nodes + b.nodes,
        edges=frozenset(edges),
    )


def _prefix_gate(prefix: str, gate: Gate) -> Gate:
    return Gate(prefix + gate.name, gate.polarity)


def _prefix_path(prefix: str, path: Path) -> Path:
    if path.node_id != BOUNDARY_ID:
        return path
    return Path(path.node_id, prefix + path.gate_name)


def _prefix_edges(prefix: str, edges) -> set[Edge]:
    return {Edge(_prefix_path(prefix, e.source), _prefix_path(prefix, e.target)) for e in edges}


def hori_comp(a: OpenGraph, b: OpenGraph) -> OpenGraph:
    """Put A and B side by side.

    Boundary names get a "0" (A) or "1" (B) prefix.  Node ids are kept as they
    are: the caller is responsible for A and B using disjoint ids.
    """
    return OpenGraph(
        boundary=tuple(_prefix_gate("0", g) for g in a.boundary)
                 + tuple(_prefix_gate("1", g) for g in b.boundary),
        nodes=a.nodes + b.nodes,
        edges=frozenset(_prefix_edges("0", a.edges) | _prefix_edges("1", b.edges)),
    )
