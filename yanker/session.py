"""Editing session: one current graph plus its history.

The graph algebra is purely functional; the session is the single owner of a
"current graph" value.  Every accepted edit builds a new graph, replaces the
current one wholesale and pushes it onto the history, so undo/redo is just
moving through old values.  Rejected edits leave everything untouched and
return None/False.

Listeners registered with on_change() are called after every change with a
short source string ('load', 'node', 'gate', 'edge', 'compose', 'undo', ...).
"""

from typing import Callable, Iterable, Optional

from .core.settings import Settings
from .graph.primitives import Edge, Gate, Node, Path, Polarity
from .graph.open_graph import (
    OpenGraph, check_graph, fresh_gate_name, make_edge, max_node_id, shift_graph_ids,
)
from .graph.compose import hori_comp, vert_comp
from .ops.skeleton import DEFAULT_SKELETON, Skeleton, graph_from_skeleton
from .undo import GraphHistory


class GraphSession:
    """Central editing state with observer pattern for UI updates."""

    def __init__(self, graph: Optional[OpenGraph] = None, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.history = GraphHistory(max_size=self.settings.undo_max_size)
        self._listeners: list[Callable] = []
        self.graph: OpenGraph = graph if graph is not None else graph_from_skeleton(DEFAULT_SKELETON)
        self.history.push(self.graph)

    def on_change(self, callback: Callable):
        self._listeners.append(callback)

    def notify(self, source=None):
        for cb in self._listeners:
            cb(source)

    def _log(self, msg: str):
        if self.settings.verbose:
            print(f"[Session] {msg}")

    def _commit(self, graph: OpenGraph, source: str):
        self.graph = graph
        self.history.push(graph)
        self.notify(source)

    # -- Loading --

    def load(self, graph: OpenGraph):
        """Start over from a graph; history is reset."""
        self.history.clear()
        self.graph = graph
        self.history.push(graph)
        self._log(f"Loaded graph with {len(graph.boundary)} boundary gates, {len(graph.nodes)} nodes")
        self.notify('load')

    def load_skeleton(self, skel: Skeleton):
        self.load(graph_from_skeleton(skel))

    # -- Nodes and gates --

    def add_node(self, label: str = "", gates: Iterable[Gate] = ()) -> int:
        """Insert a node under the next free id and return that id."""
        nid = max_node_id(self.graph.nodes) + 1
        self._commit(self.graph.with_node(nid, Node(label, tuple(gates))), 'node')
        self._log(f"Added node {nid} {label!r}")
        return nid

    def add_gate(self, node_id: int, polarity: Polarity) -> Optional[Path]:
        """Give a node a new gate with a fresh numeric name.

        Returns the new gate's path, or None if the node does not exist.
        """
        name = fresh_gate_name(self.graph, node_id)
        if name is None:
            self._log(f"Cannot add gate: node {node_id} not found")
            return None
        self._commit(self.graph.with_gate(node_id, Gate(name, polarity)), 'gate')
        return Path(node_id, name)

    def delete_node(self, node_id: int) -> bool:
        if self.graph.node(node_id) is None:
            return False
        dropped = len(self.graph.edges_for_node(node_id))
        self._commit(self.graph.without_node(node_id), 'node')
        self._log(f"Deleted node {node_id} and {dropped} incident edges")
        return True

    # -- Edges --

    def connect(self, path_a: Path, path_b: Path) -> Optional[Edge]:
        """Connect two gates in whichever direction their polarities allow."""
        edge = make_edge(self.graph, path_a, path_b)
        if edge is None:
            self._log(f"Rejected edge between {path_a} and {path_b}")
            return None
        self._commit(self.graph.with_edge(edge), 'edge')
        self._log(f"Current edges list is {sorted(self.graph.edges)}")
        return edge

    def disconnect(self, edge: Edge) -> bool:
        if edge not in self.graph.edges:
            return False
        self._commit(self.graph.without_edge(edge), 'edge')
        return True

    # -- Composition --

    def compose_below(self, other: OpenGraph) -> bool:
        """Plug the current graph's outputs into other's inputs."""
        result = vert_comp(self.graph, other)
        if result is None:
            self._log("Vertical composition undefined: boundaries do not match")
            return False
        self._commit(result, 'compose')
        return True

    def compose_beside(self, other: OpenGraph):
        """Place other next to the current graph, renumbering its nodes past ours."""
        other = shift_graph_ids(other, max_node_id(self.graph.nodes))
        self._commit(hori_comp(self.graph, other), 'compose')

    # -- Validity / history --

    def is_valid(self) -> bool:
        return check_graph(self.graph)

    def undo(self) -> bool:
        graph = self.history.undo()
        if graph is None:
            return False
        self.graph = graph
        self.notify('undo')
        return True

    def redo(self) -> bool:
        graph = self.history.redo()
        if graph is None:
            return False
        self.graph = graph
        self.notify('redo')
        return True
