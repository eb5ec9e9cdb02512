"""Skeleton → seed graph.

A skeleton is the structural shape of a Lambek type with the atoms left open:

  Atom(base)            – a named base type, e.g. "np"
  Var(name)             – an unknown, numbered slot
  Left(body, argument)  – argument \\ body
  Right(body, argument) – body / argument

Parsing skeleton text is not done here; callers build the tree themselves.
graph_from_skeleton() turns a skeleton into the editor's starting graph: one
boundary gate per leaf, no nodes and no edges.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from ..graph.primitives import Gate, Polarity
from ..graph.open_graph import OpenGraph


@dataclass(frozen=True)
class Atom:
    base: str


@dataclass(frozen=True)
class Var:
    name: int


@dataclass(frozen=True)
class Left:
    body: "Skeleton"
    argument: "Skeleton"


@dataclass(frozen=True)
class Right:
    body: "Skeleton"
    argument: "Skeleton"


Skeleton = Union[Atom, Var, Left, Right]


def render_skeleton(skel: Skeleton) -> str:
    if isinstance(skel, Atom):
        return skel.base
    if isinstance(skel, Var):
        return str(skel.name)
    if isinstance(skel, Left):
        return f"({render_skeleton(skel.argument)} \\ {render_skeleton(skel.body)})"
    return f"({render_skeleton(skel.body)} / {render_skeleton(skel.argument)})"


def skeleton_gates(skel: Skeleton) -> list[Gate]:
    """Boundary gates for a skeleton, in depth-first leaf order.

    Leaves are numbered from 1 in visiting order.  The whole type starts
    consumptive; a left argument is visited before its body with the polarity
    inverted, a right body is visited before its argument, which gets the
    inverted polarity.
    """
    gates: list[Gate] = []

    def walk(node: Skeleton, productive: bool):
        polarity = Polarity.PRODUCER if productive else Polarity.CONSUMER
        count = len(gates) + 1
        if isinstance(node, Atom):
            gates.append(Gate(f"{node.base}{count}", polarity))
        elif isinstance(node, Var):
            gates.append(Gate(f"{node.name}-{count}", polarity))
        elif isinstance(node, Left):
            walk(node.argument, not productive)
            walk(node.body, productive)
        elif isinstance(node, Right):
            walk(node.body, productive)
            walk(node.argument, not productive)
        else:
            raise TypeError(f"not a skeleton: {node!r}")

    walk(skel, False)
    return gates


def graph_from_skeleton(skel: Skeleton) -> OpenGraph:
    return OpenGraph(boundary=tuple(skeleton_gates(skel)))


# The editor starts out on the single-variable skeleton.
DEFAULT_SKELETON = Var(1)
