import pytest

from yanker.core.settings import Settings
from yanker.graph import Edge, Gate, Node, OpenGraph, Path, Polarity

P = Polarity.PRODUCER
C = Polarity.CONSUMER


def source_graph(name="x"):
    """One node producing a value that leaves the graph through output `name`."""
    return OpenGraph(
        boundary=(Gate(name, P),),
        nodes=((1, Node("a", (Gate("o", P),))),),
        edges={Edge(Path(1, "o"), Path(0, name))},
    )


def relay_graph(inp="x", out="y"):
    """Input `inp` feeds node 1, whose result leaves through output `out`."""
    return OpenGraph(
        boundary=(Gate(inp, C), Gate(out, P)),
        nodes=((1, Node("f", (Gate("i", C), Gate("o", P))),),),
        edges={Edge(Path(0, inp), Path(1, "i")), Edge(Path(1, "o"), Path(0, out))},
    )


def wire_graph(inp="x", out="y"):
    """No nodes: the input is routed straight to the output."""
    return OpenGraph(
        boundary=(Gate(inp, C), Gate(out, P)),
        edges={Edge(Path(0, inp), Path(0, out))},
    )


@pytest.fixture
def source():
    return source_graph()


@pytest.fixture
def relay():
    return relay_graph()


@pytest.fixture
def settings(tmp_path):
    return Settings(tmp_path / "settings.json")
