"""Bounded FIFO queue of vertex identifiers used by breadth-first search."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator

from resflow.lib.algorithms.base import VertexID


class VertexQueue:
    """
    First-in, first-out queue of vertex ids with a fixed capacity.

    A breadth-first search enqueues every vertex at most once, so the vertex
    count is a hard upper bound on the number of pushes. Exceeding the
    capacity indicates a broken visited-marker and raises OverflowError.
    """

    __slots__ = ("_items", "_capacity", "_pushed")

    def __init__(self, capacity: int) -> None:
        """
        Args:
            capacity: Maximum number of pushes over the queue's lifetime.

        Raises:
            ValueError: If capacity is negative.
        """
        if capacity < 0:
            raise ValueError(f"Queue capacity must be non-negative, got {capacity}.")
        self._items: Deque[VertexID] = deque()
        self._capacity = capacity
        self._pushed = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, vertex: VertexID) -> None:
        """Append a vertex at the tail."""
        if self._pushed >= self._capacity:
            raise OverflowError(
                f"Queue capacity {self._capacity} exceeded while pushing {vertex}."
            )
        self._items.append(vertex)
        self._pushed += 1

    def pop(self) -> VertexID:
        """Remove and return the vertex at the head.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._items:
            raise IndexError("pop from an empty VertexQueue")
        return self._items.popleft()

    def empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[VertexID]:
        return iter(self._items)
