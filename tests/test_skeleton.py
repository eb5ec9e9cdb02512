import pytest

from yanker.graph import Gate, Polarity, check_graph
from yanker.ops.skeleton import (
    DEFAULT_SKELETON, Atom, Left, Right, Var,
    graph_from_skeleton, render_skeleton, skeleton_gates,
)

P = Polarity.PRODUCER
C = Polarity.CONSUMER


def test_single_variable_seed():
    g = graph_from_skeleton(DEFAULT_SKELETON)
    assert g.boundary == (Gate("1-1", C),)
    assert g.nodes == () and g.edges == frozenset()
    assert not check_graph(g)


def test_atom():
    assert skeleton_gates(Atom("np")) == [Gate("np1", C)]


def test_right_visits_body_then_inverted_argument():
    # s / np
    assert skeleton_gates(Right(Atom("s"), Atom("np"))) == [Gate("s1", C), Gate("np2", P)]


def test_left_visits_inverted_argument_then_body():
    # np \ s
    assert skeleton_gates(Left(Atom("s"), Atom("np"))) == [Gate("np1", P), Gate("s2", C)]


def test_transitive_verb():
    # (np \ s) / np
    skel = Right(Left(Atom("s"), Atom("np")), Atom("np"))
    assert skeleton_gates(skel) == [Gate("np1", P), Gate("s2", C), Gate("np3", P)]


def test_nested_argument_inverts_twice():
    # s / (np / n): the inner argument flips back
    skel = Right(Atom("s"), Right(Atom("np"), Var(4)))
    assert skeleton_gates(skel) == [Gate("s1", C), Gate("np2", P), Gate("4-3", C)]


def test_render_skeleton():
    skel = Right(Left(Atom("s"), Atom("np")), Var(2))
    assert render_skeleton(skel) == "((np \\ s) / 2)"


def test_rejects_non_skeleton():
    with pytest.raises(TypeError):
        skeleton_gates(Right(Atom("s"), "np"))
