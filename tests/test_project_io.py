import json
import struct

import pytest

from yanker.graph import Edge, Gate, Node, OpenGraph, Path, Polarity, shift_graph_ids, vert_comp
from yanker.ops.project_io import (
    MAGIC, dumps, graph_from_json, graph_to_json, load_graph, loads, save_graph,
)

from conftest import relay_graph, source_graph

P = Polarity.PRODUCER
C = Polarity.CONSUMER


def rich_graph():
    g = vert_comp(source_graph(), relay_graph())
    return g.with_node(7, Node("λ-node ünïcode", (Gate("np1", C), Gate("10", P)))).with_gate(0, Gate("s", C))


@pytest.mark.parametrize("value", [
    Gate("np1", P),
    Gate("", C),
    Node("f", (Gate("i", C), Gate("o", P))),
    Node(),
    Path(0, "x"),
    Path(123456789, "gate"),
    Edge(Path(1, "o"), Path(0, "y")),
    OpenGraph(),
    relay_graph(),
    rich_graph(),
])
def test_binary_round_trip(value):
    data = dumps(value)
    assert data.startswith(MAGIC)
    back = loads(data)
    assert back == value
    assert type(back) is type(value)


def test_node_order_survives():
    g = OpenGraph(nodes=((5, Node("e")), (2, Node("b")), (9, Node("i"))))
    assert loads(dumps(g)).node_ids() == [5, 2, 9]


def test_equal_graphs_encode_identically():
    edges = [Edge(Path(i, "o"), Path(i + 1, "i")) for i in range(30)]
    a = OpenGraph(edges=frozenset(edges))
    b = OpenGraph(edges=frozenset(reversed(edges)))
    assert dumps(a) == dumps(b)


def test_dumps_rejects_other_types():
    with pytest.raises(TypeError):
        dumps({"not": "a graph"})


@pytest.mark.parametrize("data", [
    b"",
    b"XYZ\x01\x05",
    MAGIC + b"\x09\x05",
    MAGIC + b"\x01\x63",
    dumps(relay_graph())[:-3],
    dumps(relay_graph()) + b"\x00",
    MAGIC + b"\x01\x01" + struct.pack("<I", 1) + b"a" + b"\x07",
])
def test_loads_rejects_malformed(data):
    with pytest.raises(ValueError):
        loads(data)


def test_json_round_trip():
    g = rich_graph()
    text = graph_to_json(g)
    assert json.loads(text)["type"] == "open_graph"
    assert graph_from_json(text) == g


def test_json_wrong_type():
    with pytest.raises(ValueError, match="open_graph"):
        graph_from_json(json.dumps({"type": "pattern", "pattern": {}}))
    with pytest.raises(ValueError):
        graph_from_json("[1, 2]")
    with pytest.raises(ValueError):
        graph_from_json('{"type": "open_graph"}')
    with pytest.raises(ValueError):
        graph_from_json("{nope")


@pytest.mark.parametrize("graph", [
    None, "g", 3, [],
    {"boundary": [{"name": 5, "polarity": "producer"}]},
    {"nodes": [{"id": 1, "node": {"label": 7}}]},
    {"nodes": [{"id": 1, "node": "f"}]},
    {"edges": [{"from": {"node_id": 1, "gate": 2}, "to": {"node_id": 0, "gate": "x"}}]},
])
def test_json_malformed_graph(graph):
    with pytest.raises(ValueError):
        graph_from_json(json.dumps({"type": "open_graph", "graph": graph}))


def test_node_ids_outside_int64(tmp_path):
    g = shift_graph_ids(OpenGraph(nodes=((1, Node("a")),)), 2 ** 63)
    with pytest.raises(ValueError, match="does not fit"):
        dumps(g)
    with pytest.raises(ValueError):
        dumps(Path(-2 ** 63 - 1, "x"))
    assert loads(dumps(Path(2 ** 63 - 1, "x"))) == Path(2 ** 63 - 1, "x")
    path = tmp_path / "big.graph"
    with pytest.raises(ValueError):
        save_graph(g, path)
    assert not path.exists()
    save_graph(g, tmp_path / "big.json")
    assert load_graph(tmp_path / "big.json") == g


@pytest.mark.parametrize("name,fmt", [
    ("g.json", None), ("g.graph", None), ("g.bin", "json"), ("g.json", "binary"),
])
def test_save_and_load_files(tmp_path, name, fmt):
    g = rich_graph()
    path = tmp_path / name
    save_graph(g, path, fmt)
    raw = path.read_bytes()
    expect_binary = fmt == "binary" or (fmt is None and not name.endswith(".json"))
    assert raw.startswith(MAGIC) == expect_binary
    assert load_graph(path) == g


def test_load_graph_rejects_non_graph_binary(tmp_path):
    path = tmp_path / "gate.bin"
    path.write_bytes(dumps(Gate("x", P)))
    with pytest.raises(ValueError):
        load_graph(path)


def test_load_graph_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_graph(tmp_path / "missing.graph")


def test_save_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        save_graph(OpenGraph(), tmp_path / "g", "yaml")
