from __future__ import annotations

from enum import IntEnum

#: Capacities and flows are non-negative integers.
Capacity = int

#: Vertex identifier: a small positive integer in ``1..n``.
VertexID = int

#: Index of an arc in a graph's arc arena.
ArcIndex = int


class ArcOrder(IntEnum):
    """
    Position of a newly added arc within its tail vertex's adjacency list.
    """

    #: Newest arc first; traversal is the reverse of insertion order.
    PREPEND = 1
    #: Newest arc last; traversal follows insertion order.
    APPEND = 2


class SolverState(IntEnum):
    """States of the augmentation loop."""

    SEARCHING = 1
    DONE = 2
