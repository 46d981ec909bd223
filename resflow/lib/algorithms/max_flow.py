from __future__ import annotations

from typing import List, Literal, Optional, Union, overload

from resflow.config import DEFAULT_CONFIG, SolverConfig
from resflow.lib.algorithms.augment import bottleneck, project_flow, update_residual
from resflow.lib.algorithms.base import Capacity, SolverState
from resflow.lib.algorithms.bfs import reachable_vertices, shortest_augmenting_path
from resflow.lib.algorithms.types import ArcRef, AugmentationRound, FlowSummary
from resflow.lib.algorithms.validation import check_invariants, check_structure
from resflow.lib.graph import Network, ResidualGraph, build_residual_graph
from resflow.logging import get_logger

logger = get_logger(__name__)


class AugmentingPathSolver:
    """
    Drives shortest-augmenting-path rounds over a network until none remain.

    The solver owns a residual graph built from ``network`` at construction.
    Each round finds a fewest-arcs path by BFS, pushes its bottleneck along
    it, recomputes every network arc's flow, and adds the bottleneck to the
    running total. When no augmenting path exists the solver moves to
    ``SolverState.DONE``; by max-flow/min-cut the total is then maximal.

    This is plain breadth-first augmentation (Edmonds-Karp). There are no
    level-graph or blocking-flow phases, so the sequence of rounds is exactly
    one path per round in BFS discovery order.

    Attributes:
        network: The network whose arc flows are updated each round.
        residual: The residual graph mutated each round.
        config: Solver configuration.
        state: Current loop state.
        total_flow: Flow accumulated so far.
        rounds: Completed augmentations in order.
    """

    def __init__(self, network: Network, *, config: Optional[SolverConfig] = None):
        self.config = config or DEFAULT_CONFIG
        src, dst = network.terminals()
        self.network = network
        self.residual = build_residual_graph(network)
        self._num_residual_arcs = self.residual.num_arcs
        self._round_limit = self.config.round_limit(network)
        self.state = SolverState.SEARCHING
        self.total_flow: Capacity = 0
        self.rounds: List[AugmentationRound] = []
        if src == dst:
            logger.warning(f"Source and sink are the same vertex ({src}); flow is 0")

    def step(self) -> Optional[AugmentationRound]:
        """Perform one augmentation round.

        Returns:
            The completed round, or None once no augmenting path remains.

        Raises:
            RuntimeError: If the round limit would be exceeded.
            InvariantViolation: If invariant checking is enabled and fails.
        """
        if self.state == SolverState.DONE:
            return None

        path = shortest_augmenting_path(self.residual)
        if path is None:
            self.state = SolverState.DONE
            logger.debug(
                f"No augmenting path left after {len(self.rounds)} rounds; "
                f"total flow {self.total_flow}"
            )
            return None

        if len(self.rounds) >= self._round_limit:
            raise RuntimeError(
                f"Augmentation round limit {self._round_limit} reached with "
                f"flow {self.total_flow} and an augmenting path still present."
            )

        amount = bottleneck(self.residual, path)
        update_residual(self.residual, path, amount)
        project_flow(self.residual, self.network)
        self.total_flow += amount

        if self.config.check_invariants:
            check_structure(self.residual, self._num_residual_arcs)
            check_invariants(self.network, self.residual)

        completed = AugmentationRound(path=path, amount=amount)
        self.rounds.append(completed)
        logger.debug(
            "Round %d: pushed %d along %s",
            len(self.rounds),
            amount,
            " -> ".join(str(v) for v in path.vertices),
        )
        return completed

    def run(self) -> Capacity:
        """Run rounds until DONE and return the total flow."""
        while self.step() is not None:
            pass
        return self.total_flow

    def summary(self) -> FlowSummary:
        """Build a FlowSummary from the current network and residual state."""
        return _build_flow_summary(self.total_flow, self.network, self.residual, len(self.rounds))


@overload
def calc_max_flow(
    network: Network,
    *,
    return_summary: Literal[False] = False,
    return_network: Literal[False] = False,
    shortest_path: bool = False,
    reset_flow: bool = False,
    copy_network: bool = True,
    config: Optional[SolverConfig] = None,
) -> Capacity: ...


@overload
def calc_max_flow(
    network: Network,
    *,
    return_summary: Literal[True],
    return_network: Literal[False] = False,
    shortest_path: bool = False,
    reset_flow: bool = False,
    copy_network: bool = True,
    config: Optional[SolverConfig] = None,
) -> tuple[Capacity, FlowSummary]: ...


@overload
def calc_max_flow(
    network: Network,
    *,
    return_summary: Literal[False] = False,
    return_network: Literal[True],
    shortest_path: bool = False,
    reset_flow: bool = False,
    copy_network: bool = True,
    config: Optional[SolverConfig] = None,
) -> tuple[Capacity, Network]: ...


@overload
def calc_max_flow(
    network: Network,
    *,
    return_summary: Literal[True],
    return_network: Literal[True],
    shortest_path: bool = False,
    reset_flow: bool = False,
    copy_network: bool = True,
    config: Optional[SolverConfig] = None,
) -> tuple[Capacity, FlowSummary, Network]: ...


def calc_max_flow(
    network: Network,
    *,
    return_summary: bool = False,
    return_network: bool = False,
    shortest_path: bool = False,
    reset_flow: bool = False,
    copy_network: bool = True,
    config: Optional[SolverConfig] = None,
) -> Union[Capacity, tuple]:
    """Compute the maximum flow from the network's source to its sink.

    By default, this function:
      1. Copies the network so the caller's arcs keep their flows.
      2. Builds the residual graph and runs AugmentingPathSolver to completion.

    If ``shortest_path=True``, only one augmentation is performed and the flow
    pushed along that single path is returned (not the true max flow).

    Args:
        network: Network with source and sink set.
        return_summary: If True, also return a FlowSummary.
        return_network: If True, also return the network carrying the flows.
        shortest_path: If True, stop after the first augmentation.
        reset_flow: If True, zero existing arc flows before solving.
        copy_network: If True, work on a copy of ``network``.
        config: Solver configuration; defaults to ``DEFAULT_CONFIG``.

    Returns:
        Union[int, tuple]:
            - Neither flag: total flow.
            - return_summary only: ``(total, FlowSummary)``.
            - return_network only: ``(total, Network)``.
            - Both flags: ``(total, FlowSummary, Network)``.

    Notes:
        Existing arc flows are honored unless ``reset_flow`` is set; the
        returned total is then the additional flow placed by this call.

    Examples:
        >>> net = Network(3, source=1, sink=3)
        >>> net.add_arc(1, 2, 10)
        0
        >>> net.add_arc(2, 3, 5)
        1
        >>> calc_max_flow(net)
        5
        >>> flow, summary = calc_max_flow(net, return_summary=True)
        >>> summary.min_cut
        [(2, 3, 1)]
    """
    flow_network = network.copy() if copy_network else network
    if reset_flow:
        flow_network.reset_flow()

    solver = AugmentingPathSolver(flow_network, config=config)
    if shortest_path:
        solver.step()
    else:
        solver.run()

    if not (return_summary or return_network):
        return solver.total_flow

    ret: list = [solver.total_flow]
    if return_summary:
        ret.append(solver.summary())
    if return_network:
        ret.append(flow_network)
    return tuple(ret)


def _build_flow_summary(
    total_flow: Capacity,
    network: Network,
    residual: ResidualGraph,
    rounds: int,
) -> FlowSummary:
    """Build a FlowSummary from the network and residual state."""
    arc_flow = {}
    residual_cap = {}
    for index, arc in network.arcs():
        ref = (arc.tail, arc.head, index)
        arc_flow[ref] = arc.flow
        residual_cap[ref] = arc.capacity - arc.flow

    reachable = reachable_vertices(residual)

    # Arcs crossing from the source side to the sink side of the cut
    min_cut = [
        ref
        for ref in arc_flow
        if ref[0] in reachable and ref[1] not in reachable
    ]

    return FlowSummary(
        total_flow=total_flow,
        arc_flow=arc_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=min_cut,
        rounds=rounds,
    )


def min_cut_capacity(network: Network, summary: FlowSummary) -> Capacity:
    """Return the total declared capacity of the summary's min-cut arcs."""
    return sum(network.arc(index).capacity for _, _, index in summary.min_cut)


def saturated_arcs(
    network: Network,
    *,
    config: Optional[SolverConfig] = None,
) -> List[ArcRef]:
    """Identify saturated (bottleneck) arcs in the max flow solution.

    Args:
        network: The network to analyze.
        config: Solver configuration.

    Returns:
        Arc refs ``(tail, head, index)`` whose residual capacity is zero.
    """
    _, summary = calc_max_flow(
        network, return_summary=True, reset_flow=True, config=config
    )
    return [ref for ref, residual in summary.residual_cap.items() if residual == 0]


def run_sensitivity(
    network: Network,
    *,
    change_amount: int = 1,
    config: Optional[SolverConfig] = None,
) -> dict[ArcRef, Capacity]:
    """Measure how the max flow reacts to changing each saturated arc's capacity.

    Positive values increase capacity, negative values decrease it; a
    capacity is never driven below zero.

    Args:
        network: The network to analyze.
        change_amount: Capacity delta applied to one arc at a time.
        config: Solver configuration.

    Returns:
        Mapping of arc ref to the resulting change in total flow.
    """
    baseline = calc_max_flow(network, reset_flow=True, config=config)

    sensitivity = {}
    for ref in saturated_arcs(network, config=config):
        _, _, index = ref
        test_network = network.copy()
        arc = test_network.arc(index)
        arc.capacity = max(arc.capacity + change_amount, 0)
        new_flow = calc_max_flow(
            test_network, reset_flow=True, copy_network=False, config=config
        )
        sensitivity[ref] = new_flow - baseline

    return sensitivity
