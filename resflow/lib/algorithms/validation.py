"""Consistency checks between a network and its residual graph."""

from __future__ import annotations

from resflow.lib.graph import Network, ResidualGraph
from resflow.logging import get_logger

logger = get_logger(__name__)


class InvariantViolation(AssertionError):
    """Raised when a network/residual pair is inconsistent."""


def check_invariants(network: Network, residual: ResidualGraph) -> None:
    """Verify flow bounds, capacity conservation and non-negativity.

    Raises:
        InvariantViolation: On the first violated condition.
    """
    for index, arc in residual.arcs():
        if arc.capacity < 0:
            _fail(f"Residual arc {arc.tail} -> {arc.head} (#{index}) has negative capacity {arc.capacity}")

    for index, arc in network.arcs():
        if not 0 <= arc.flow <= arc.capacity:
            _fail(
                f"Arc {arc.tail} -> {arc.head} (#{index}) has flow {arc.flow} "
                f"outside [0, {arc.capacity}]"
            )
        fwd = network.residual_arc(index)
        if fwd is None:
            _fail(f"Arc {arc.tail} -> {arc.head} (#{index}) is not bound to the residual graph")
        bwd = residual.twin(fwd)
        total = residual.capacity(fwd) + residual.capacity(bwd)
        if total != arc.capacity:
            _fail(
                f"Arc {arc.tail} -> {arc.head} (#{index}): forward + backward residual "
                f"capacity is {total}, expected {arc.capacity}"
            )


def check_structure(residual: ResidualGraph, num_arcs: int) -> None:
    """Verify the residual graph still has ``num_arcs`` arcs.

    Raises:
        InvariantViolation: If arcs were added or removed.
    """
    if residual.num_arcs != num_arcs:
        _fail(f"Residual graph has {residual.num_arcs} arcs, expected {num_arcs}")
    listed = sum(len(residual.adjacency(u)) for u in residual.vertices())
    if listed != num_arcs:
        _fail(f"Residual adjacency lists hold {listed} arcs, expected {num_arcs}")


def _fail(message: str) -> None:
    logger.error(message)
    raise InvariantViolation(message)
