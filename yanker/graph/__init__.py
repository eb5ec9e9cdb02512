"""Open graph algebra.

Public surface:
  Polarity, Gate, Node, Path, Edge      – primitives
  OpenGraph                             – boundary + nodes + edges
  check_graph, make_edge, ...           – lookup, validity, id management
  vert_comp, hori_comp                  – composition
"""

from .primitives import (
    BOUNDARY_ID, Polarity, Gate, Node, Path, Edge,
    negate, flip_node, producers, consumers,
    gate_position, boundary_gate_position,
)
from .open_graph import (
    OpenGraph, seed_graph, nodes_and_boundary,
    resolve_gate, effective_polarity, fresh_gate_name,
    has_edge, check_graph, check_add_edge, make_edge,
    max_node_id, shift_graph_ids,
)
from .compose import boundaries_match, vert_comp, hori_comp

__all__ = [
    "BOUNDARY_ID", "Polarity", "Gate", "Node", "Path", "Edge",
    "negate", "flip_node", "producers", "consumers",
    "gate_position", "boundary_gate_position",
    "OpenGraph", "seed_graph", "nodes_and_boundary",
    "resolve_gate", "effective_polarity", "fresh_gate_name",
    "has_edge", "check_graph", "check_add_edge", "make_edge",
    "max_node_id", "shift_graph_ids",
    "boundaries_match", "vert_comp", "hori_comp",
]
