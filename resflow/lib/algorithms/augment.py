"""Per-round augmentation primitives: bottleneck, residual update, flow projection."""

from __future__ import annotations

from resflow.lib.algorithms.base import Capacity
from resflow.lib.algorithms.types import Path
from resflow.lib.graph import Network, ResidualGraph


def bottleneck(residual: ResidualGraph, path: Path) -> Capacity:
    """Return the minimum residual capacity among the arcs of ``path``.

    Raises:
        ValueError: If the path has fewer than two vertices.
    """
    if len(path) < 2:
        raise ValueError(f"Path needs at least two vertices, got {len(path)}.")
    return min(residual.capacity(index) for index in path.arcs)


def update_residual(residual: ResidualGraph, path: Path, amount: Capacity) -> None:
    """Push ``amount`` units of flow along ``path``.

    Each path arc loses ``amount`` of residual capacity and its twin gains the
    same, so forward + backward capacity of every logical edge is unchanged.

    Args:
        residual: Residual graph to mutate in place.
        path: Augmenting path through ``residual``.
        amount: Positive amount, at most the path's bottleneck.

    Raises:
        ValueError: If ``amount`` is not positive or exceeds the bottleneck.
    """
    if amount <= 0:
        raise ValueError(f"Augmentation amount must be positive, got {amount}.")
    limit = bottleneck(residual, path)
    if amount > limit:
        raise ValueError(
            f"Augmentation amount {amount} exceeds path bottleneck {limit}."
        )
    for index in path.arcs:
        residual.arc(index).capacity -= amount
        residual.arc(residual.twin(index)).capacity += amount


def project_flow(residual: ResidualGraph, network: Network) -> None:
    """Recompute every network arc's flow from the residual graph.

    ``flow = declared capacity - forward residual capacity``. This is a full
    pass over the network, not an incremental update.

    Raises:
        ValueError: If a network arc is not bound to a residual arc.
    """
    for index, arc in network.arcs():
        r_index = network.residual_arc(index)
        if r_index is None:
            raise ValueError(
                f"Network arc {arc.tail} -> {arc.head} has no residual counterpart."
            )
        arc.flow = arc.capacity - residual.capacity(r_index)
