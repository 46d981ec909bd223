"""Types and data structures for the augmentation loop and its analytics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Set, Tuple

from resflow.lib.algorithms.base import ArcIndex, Capacity, VertexID
from resflow.lib.graph import ResidualGraph

# Arc identifier tuple: (tail, head, arc_index)
ArcRef = Tuple[VertexID, VertexID, ArcIndex]


@dataclass(frozen=True)
class Path:
    """An augmenting path through a residual graph.

    Attributes:
        vertices: Vertex ids from source to sink.
        arcs: Residual arc indices traversed, one per consecutive vertex pair.
    """

    vertices: Tuple[VertexID, ...]
    arcs: Tuple[ArcIndex, ...]

    def __post_init__(self) -> None:
        if len(self.arcs) != max(len(self.vertices) - 1, 0):
            raise ValueError(
                f"Path with {len(self.vertices)} vertices needs "
                f"{max(len(self.vertices) - 1, 0)} arcs, got {len(self.arcs)}."
            )

    def __len__(self) -> int:
        return len(self.vertices)

    def pairs(self) -> List[Tuple[VertexID, VertexID]]:
        return list(zip(self.vertices, self.vertices[1:]))

    @classmethod
    def from_vertices(
        cls, residual: ResidualGraph, vertices: Sequence[VertexID]
    ) -> Path:
        """Resolve a bare vertex sequence to residual arcs.

        For each pair ``(u, v)`` the first arc ``u -> v`` in adjacency order
        with positive capacity is chosen; if none has capacity left, the first
        ``u -> v`` arc is used.

        Raises:
            ValueError: If a consecutive pair has no connecting arc.
        """
        arcs: List[ArcIndex] = []
        for u, v in zip(vertices, vertices[1:]):
            chosen = None
            for index in residual.adjacency(u):
                arc = residual.arc(index)
                if arc.head != v:
                    continue
                if arc.capacity > 0:
                    chosen = index
                    break
                if chosen is None:
                    chosen = index
            if chosen is None:
                raise ValueError(f"No residual arc from {u} to {v}.")
            arcs.append(chosen)
        return cls(vertices=tuple(vertices), arcs=tuple(arcs))


@dataclass(frozen=True)
class AugmentationRound:
    """One completed augmentation: the path used and the flow pushed on it."""

    path: Path
    amount: Capacity


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value achieved.
        arc_flow: Flow on each network arc, indexed by ``(tail, head, index)``.
        residual_cap: Remaining capacity on each network arc.
        reachable: Vertices reachable from the source in the residual graph.
        min_cut: Network arcs leaving the reachable set.
        rounds: Number of augmentations performed.
    """

    total_flow: Capacity
    arc_flow: Dict[ArcRef, Capacity]
    residual_cap: Dict[ArcRef, Capacity]
    reachable: Set[VertexID]
    min_cut: List[ArcRef]
    rounds: int
