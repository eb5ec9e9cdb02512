"""Undo/redo history for the graph editor.

Graph values are immutable, so a snapshot is simply the graph itself: no
copying is needed when pushing or restoring.
"""

from typing import Optional

from .graph.open_graph import OpenGraph


class GraphHistory:
    """Manages undo/redo history of graph values.

    The stack holds the very OpenGraph objects the session committed.  They
    are frozen, so undo hands back the old value itself and the session
    adopts it as its current graph without restoring any fields.
    """

    def __init__(self, max_size: int = 100):
        self.max_size = max_size
        self.stack: list[OpenGraph] = []
        self.pointer = -1  # Current position in stack (-1 = empty)

    def can_undo(self) -> bool:
        return self.pointer > 0

    def can_redo(self) -> bool:
        return self.pointer < len(self.stack) - 1

    def current(self) -> Optional[OpenGraph]:
        return self.stack[self.pointer] if self.pointer >= 0 else None

    def push(self, graph: OpenGraph):
        """Record a new graph value, dropping any redo branch."""
        self.stack = self.stack[:self.pointer + 1]
        self.stack.append(graph)

        if len(self.stack) > self.max_size:
            self.stack.pop(0)
        else:
            self.pointer += 1

    def undo(self) -> Optional[OpenGraph]:
        """Move back one step and return that graph."""
        if not self.can_undo():
            return None
        self.pointer -= 1
        return self.stack[self.pointer]

    def redo(self) -> Optional[OpenGraph]:
        """Move forward one step and return that graph."""
        if not self.can_redo():
            return None
        self.pointer += 1
        return self.stack[self.pointer]

    def clear(self):
        self.stack = []
        self.pointer = -1
