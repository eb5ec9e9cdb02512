"""Graph save/load operations: compact binary form and JSON form.

Binary layout (all integers little-endian)
------------------------------------------
  header   b"YOG" + version byte
  tag      1 byte: which value follows (gate, node, path, edge, graph)
  str      <I byte length + UTF-8 bytes
  polarity 1 byte: 1 producer, 0 consumer
  node id  <q (ids outside int64 raise ValueError)
  count    <I, followed by that many items

  gate  = str name, polarity
  node  = str label, count, gate*
  path  = node id, str gate name
  edge  = path source, path target
  graph = count, gate* (boundary), count, (node id, node)*, count, edge*

Edges are written in sorted order so the same graph always produces the same
bytes.  Decoding is strict: trailing bytes, unknown tags and truncated input
raise ValueError.
"""

import json
import struct
from pathlib import Path as FilePath

from ..graph.primitives import Edge, Gate, Node, Path, Polarity
from ..graph.open_graph import OpenGraph

MAGIC = b"YOG"
VERSION = 1

TAG_GATE = 1
TAG_NODE = 2
TAG_PATH = 3
TAG_EDGE = 4
TAG_GRAPH = 5

_TAGS = {Gate: TAG_GATE, Node: TAG_NODE, Path: TAG_PATH, Edge: TAG_EDGE, OpenGraph: TAG_GRAPH}


# ---------------------------------------------------------------------------
# Binary encoding
# ---------------------------------------------------------------------------

def _str(s: str) -> bytes:
    raw = s.encode("utf-8")
    return struct.pack("<I", len(raw)) + raw


_ID_MIN, _ID_MAX = -2 ** 63, 2 ** 63 - 1


def _node_id(nid: int) -> bytes:
    if not _ID_MIN <= nid <= _ID_MAX:
        raise ValueError(f"node id {nid} does not fit the binary format")
    return struct.pack("<q", nid)


def _gate(g: Gate) -> bytes:
    return _str(g.name) + struct.pack("<B", 1 if g.productive else 0)


def _node(n: Node) -> bytes:
    return _str(n.label) + struct.pack("<I", len(n.gates)) + b"".join(_gate(g) for g in n.gates)


def _path(p: Path) -> bytes:
    return _node_id(p.node_id) + _str(p.gate_name)


def _edge(e: Edge) -> bytes:
    return _path(e.source) + _path(e.target)


def _graph(g: OpenGraph) -> bytes:
    out = [struct.pack("<I", len(g.boundary))]
    out += [_gate(b) for b in g.boundary]
    out.append(struct.pack("<I", len(g.nodes)))
    out += [_node_id(nid) + _node(n) for nid, n in g.nodes]
    out.append(struct.pack("<I", len(g.edges)))
    out += [_edge(e) for e in sorted(g.edges)]
    return b"".join(out)


_ENCODERS = {TAG_GATE: _gate, TAG_NODE: _node, TAG_PATH: _path, TAG_EDGE: _edge, TAG_GRAPH: _graph}


def dumps(value) -> bytes:
    """Encode a Gate, Node, Path, Edge or OpenGraph."""
    tag = _TAGS.get(type(value))
    if tag is None:
        raise TypeError(f"cannot encode {type(value).__name__}")
    return MAGIC + struct.pack("<BB", VERSION, tag) + _ENCODERS[tag](value)


# ---------------------------------------------------------------------------
# Binary decoding
# ---------------------------------------------------------------------------

class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def take(self, n: int) -> bytes:
        if self.pos + n > len(self.data):
            raise ValueError(f"truncated graph data at byte {self.pos}")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def unpack(self, fmt: str):
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))[0]

    def string(self) -> str:
        try:
            return self.take(self.unpack("<I")).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"invalid UTF-8 in graph data: {e}") from e

    def gate(self) -> Gate:
        name = self.string()
        flag = self.unpack("<B")
        if flag not in (0, 1):
            raise ValueError(f"invalid polarity byte {flag}")
        return Gate(name, Polarity.PRODUCER if flag else Polarity.CONSUMER)

    def node(self) -> Node:
        label = self.string()
        return Node(label, tuple(self.gate() for _ in range(self.unpack("<I"))))

    def path(self) -> Path:
        nid = self.unpack("<q")
        return Path(nid, self.string())

    def edge(self) -> Edge:
        source = self.path()
        return Edge(source, self.path())

    def graph(self) -> OpenGraph:
        boundary = tuple(self.gate() for _ in range(self.unpack("<I")))
        nodes = []
        for _ in range(self.unpack("<I")):
            nid = self.unpack("<q")
            nodes.append((nid, self.node()))
        edges = frozenset(self.edge() for _ in range(self.unpack("<I")))
        return OpenGraph(boundary, tuple(nodes), edges)


_DECODERS = {
    TAG_GATE: _Reader.gate, TAG_NODE: _Reader.node, TAG_PATH: _Reader.path,
    TAG_EDGE: _Reader.edge, TAG_GRAPH: _Reader.graph,
}


def loads(data: bytes):
    """Decode bytes written by dumps().  Raises ValueError on malformed input."""
    r = _Reader(bytes(data))
    if r.take(len(MAGIC)) != MAGIC:
        raise ValueError("not a yanker graph file (bad magic)")
    version = r.unpack("<B")
    if version != VERSION:
        raise ValueError(f"unsupported graph format version {version}")
    tag = r.unpack("<B")
    decoder = _DECODERS.get(tag)
    if decoder is None:
        raise ValueError(f"unknown value tag {tag}")
    value = decoder(r)
    if r.pos != len(r.data):
        raise ValueError(f"{len(r.data) - r.pos} trailing bytes after graph data")
    return value


# ---------------------------------------------------------------------------
# JSON form
# ---------------------------------------------------------------------------

def graph_to_json(graph: OpenGraph) -> str:
    return json.dumps({"type": "open_graph", "v": VERSION, "graph": graph.to_dict()}, indent=2)


def graph_from_json(text: str) -> OpenGraph:
    """Parse a JSON graph document.

    Raises ValueError if the document is not an open graph or is malformed.
    """
    data = json.loads(text)
    if not isinstance(data, dict) or data.get("type") != "open_graph":
        kind = data.get("type") if isinstance(data, dict) else type(data).__name__
        raise ValueError(f"Expected an open graph document (type='open_graph'), got type={kind!r}.")
    if not isinstance(data.get("graph"), dict):
        raise ValueError("malformed open graph document: 'graph' must be an object")
    try:
        return OpenGraph.from_dict(data["graph"])
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"malformed open graph document: {e!r}") from e


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def _format_for(path, fmt=None) -> str:
    if fmt:
        if fmt not in ("json", "binary"):
            raise ValueError(f"unknown graph format {fmt!r}")
        return fmt
    return "json" if FilePath(path).suffix.lower() == ".json" else "binary"


def save_graph(graph: OpenGraph, path, fmt=None):
    """Write a graph to disk.  Format follows the suffix unless fmt is given."""
    if _format_for(path, fmt) == "json":
        with open(path, "w", encoding="utf-8") as f:
            f.write(graph_to_json(graph))
    else:
        data = dumps(graph)
        with open(path, "wb") as f:
            f.write(data)
    print(f"[ProjectIO] Saved graph ({len(graph.nodes)} nodes, {len(graph.edges)} edges) to {path}")


def load_graph(path) -> OpenGraph:
    """Read a graph written by save_graph().

    JSON and binary files are told apart by content, not by suffix.
    Raises ValueError on malformed content; I/O errors propagate.
    """
    with open(path, "rb") as f:
        data = f.read()
    if data.startswith(MAGIC):
        graph = loads(data)
        if not isinstance(graph, OpenGraph):
            raise ValueError(f"{path} holds a {type(graph).__name__}, not a graph")
        return graph
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"{path} is neither a binary nor a JSON graph file") from e
    return graph_from_json(text)
