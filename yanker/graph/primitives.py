"""Open graph primitives.

Pure Python.  The atomic addressable units of an open graph:

  Polarity – PRODUCER (emits a connection) or CONSUMER (accepts exactly one)
  Gate     – named, polarized port on a node or on the boundary
  Node     – a label plus an ordered tuple of gates
  Path     – (node_id, gate_name), addresses one gate
  Edge     – (source, target) path pair, producer → consumer

Node ids
--------
Real nodes get positive integer ids.  BOUNDARY_ID (0) never names a real node:
it addresses the graph's own boundary, which is treated as a synthetic node
whose gates are the boundary gates.

All values are frozen and compare structurally, so they can live in sets and
be shared freely between graph values.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional
from enum import Enum


BOUNDARY_ID = 0


def _text(value, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Polarity
# ---------------------------------------------------------------------------

class Polarity(Enum):
    PRODUCER = "producer"
    CONSUMER = "consumer"

    def negated(self) -> "Polarity":
        return Polarity.CONSUMER if self is Polarity.PRODUCER else Polarity.PRODUCER


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Gate:
    name: str
    polarity: Polarity

    @property
    def productive(self) -> bool:
        return self.polarity is Polarity.PRODUCER

    def to_dict(self) -> dict:
        return {"name": self.name, "polarity": self.polarity.value}

    @staticmethod
    def from_dict(d: dict) -> "Gate":
        return Gate(name=_text(d["name"], "gate name"), polarity=Polarity(d["polarity"]))


def negate(gate: Gate) -> Gate:
    return Gate(gate.name, gate.polarity.negated())


def producers(gates: Iterable[Gate]) -> tuple[Gate, ...]:
    return tuple(g for g in gates if g.polarity is Polarity.PRODUCER)


def consumers(gates: Iterable[Gate]) -> tuple[Gate, ...]:
    return tuple(g for g in gates if g.polarity is Polarity.CONSUMER)


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """A node: a label (not used by the algebra) and its gates.

    Gate names only need to be unique within one node.
    """
    label: str = ""
    gates: tuple[Gate, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.gates, tuple):
            object.__setattr__(self, "gates", tuple(self.gates))

    def gate(self, name: str) -> Optional[Gate]:
        return next((g for g in self.gates if g.name == name), None)

    def to_dict(self) -> dict:
        return {"label": self.label, "gates": [g.to_dict() for g in self.gates]}

    @staticmethod
    def from_dict(d: dict) -> "Node":
        return Node(
            label=_text(d.get("label", ""), "node label"),
            gates=tuple(Gate.from_dict(g) for g in d.get("gates", [])),
        )


def flip_node(node: Node) -> Node:
    """Turn a node upside down: every gate changes polarity."""
    return Node(node.label, tuple(negate(g) for g in node.gates))


# ---------------------------------------------------------------------------
# Path / Edge
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class Path:
    node_id: int
    gate_name: str

    @property
    def on_boundary(self) -> bool:
        return self.node_id == BOUNDARY_ID

    def to_dict(self) -> dict:
        return {"node_id": self.node_id, "gate": self.gate_name}

    @staticmethod
    def from_dict(d: dict) -> "Path":
        return Path(node_id=int(d["node_id"]), gate_name=_text(d["gate"], "gate name"))


@dataclass(frozen=True, order=True)
class Edge:
    source: Path
    target: Path

    def to_dict(self) -> dict:
        return {"from": self.source.to_dict(), "to": self.target.to_dict()}

    @staticmethod
    def from_dict(d: dict) -> "Edge":
        return Edge(source=Path.from_dict(d["from"]), target=Path.from_dict(d["to"]))


# ---------------------------------------------------------------------------
# Gate positions (for presentation layers)
# ---------------------------------------------------------------------------

def gate_position(name: str, gates: Iterable[Gate]) -> Optional[tuple[int, Polarity]]:
    """Index of a node gate among the gates sharing its polarity.

    Producers and consumers sit on opposite sides of a drawn node, so each
    side is numbered independently.  Returns None if no gate has that name.
    """
    counts = {Polarity.PRODUCER: 0, Polarity.CONSUMER: 0}
    for g in gates:
        if g.name == name:
            return counts[g.polarity], g.polarity
        counts[g.polarity] += 1
    return None


def boundary_gate_position(name: str, gates: Iterable[Gate]) -> Optional[tuple[int, Polarity]]:
    """Index of a boundary gate among all boundary gates."""
    for i, g in enumerate(gates):
        if g.name == name:
            return i, g.polarity
    return None
