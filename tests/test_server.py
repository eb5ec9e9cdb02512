import pytest

from yanker.graph import Edge, OpenGraph, Path, vert_comp
from yanker.server import app

from conftest import relay_graph, source_graph


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_check(client):
    r = client.post("/api/check", json={"graph": relay_graph().to_dict()})
    assert r.status_code == 200
    assert r.get_json() == {"valid": True}
    dangling = OpenGraph(edges={Edge(Path(1, "o"), Path(2, "i"))})
    r = client.post("/api/check", json={"graph": dangling.to_dict()})
    assert r.get_json() == {"valid": False}


def test_make_edge(client):
    g = relay_graph().without_edge(Edge(Path(0, "x"), Path(1, "i")))
    body = {"graph": g.to_dict(), "a": Path(1, "i").to_dict(), "b": Path(0, "x").to_dict()}
    r = client.post("/api/make_edge", json=body)
    assert Edge.from_dict(r.get_json()["edge"]) == Edge(Path(0, "x"), Path(1, "i"))
    body["b"] = Path(0, "y").to_dict()
    assert client.post("/api/make_edge", json=body).get_json() == {"edge": None}


def test_vcomp(client):
    r = client.post("/api/vcomp", json={"a": source_graph().to_dict(), "b": relay_graph().to_dict()})
    assert OpenGraph.from_dict(r.get_json()["graph"]) == vert_comp(source_graph(), relay_graph())
    r = client.post("/api/vcomp", json={"a": relay_graph().to_dict(), "b": relay_graph().to_dict()})
    assert r.get_json() == {"graph": None}


def test_hcomp_and_shift(client):
    r = client.post("/api/shift", json={"graph": relay_graph().to_dict(), "offset": 1})
    shifted = r.get_json()["graph"]
    r = client.post("/api/hcomp", json={"a": source_graph().to_dict(), "b": shifted})
    g = OpenGraph.from_dict(r.get_json()["graph"])
    assert [b.name for b in g.boundary] == ["0x", "1x", "1y"]
    assert g.node_ids() == [1, 2]


def test_dot(client):
    r = client.post("/api/dot", json={"graph": relay_graph().to_dict()})
    assert r.mimetype == "text/plain"
    assert '"1" -> "0";' in r.get_data(as_text=True)


@pytest.mark.parametrize("url,body", [
    ("/api/check", {}),
    ("/api/check", {"graph": {"boundary": [{"name": "x", "polarity": "sideways"}]}}),
    ("/api/make_edge", {"graph": {}, "a": {"node_id": 1}}),
    ("/api/vcomp", {"a": {}}),
    ("/api/hcomp", {"a": [], "b": {}}),
])
def test_malformed_payloads(client, url, body):
    r = client.post(url, json=body)
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_non_json_body(client):
    r = client.post("/api/check", data="nope", content_type="text/plain")
    assert r.status_code == 400
