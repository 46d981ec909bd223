"""resflow: maximum flow by shortest augmenting paths over a residual graph.

resflow reads a capacitated directed network, repeatedly pushes flow along
fewest-arc augmenting paths found by breadth-first search in the residual
graph, and reports the maximum flow with the flow assigned to every arc.

Primary API:
    Network - Capacitated network over vertices 1..n
    calc_max_flow() - One-call max flow, optionally with a FlowSummary
    AugmentingPathSolver - Round-by-round access to the augmentation loop
    read_dimacs() / write_report() - Text input and report output
    from_networkx() / to_networkx() - NetworkX conversion

Example:
    from resflow import Network, calc_max_flow

    net = Network(4, source=1, sink=4)
    net.add_arc(1, 2, 3)
    net.add_arc(2, 4, 3)
    net.add_arc(1, 3, 2)
    net.add_arc(3, 4, 2)

    total, summary = calc_max_flow(net, return_summary=True)
    assert total == 5
"""

from __future__ import annotations

from resflow import cli, logging
from resflow._version import __version__
from resflow.config import DEFAULT_CONFIG, SolverConfig
from resflow.lib.algorithms.base import ArcOrder, SolverState
from resflow.lib.algorithms.max_flow import (
    AugmentingPathSolver,
    calc_max_flow,
    min_cut_capacity,
    run_sensitivity,
    saturated_arcs,
)
from resflow.lib.algorithms.types import AugmentationRound, FlowSummary, Path
from resflow.lib.graph import Arc, Network, ResidualGraph, build_residual_graph
from resflow.lib.io import FatalInputError, format_report, read_dimacs, write_report
from resflow.lib.nx import NodeMap, from_networkx, to_networkx

__all__ = [
    # Version
    "__version__",
    # Model
    "Arc",
    "Network",
    "ResidualGraph",
    "build_residual_graph",
    "ArcOrder",
    # Algorithms
    "AugmentingPathSolver",
    "SolverState",
    "calc_max_flow",
    "min_cut_capacity",
    "saturated_arcs",
    "run_sensitivity",
    # Results
    "Path",
    "AugmentationRound",
    "FlowSummary",
    # Configuration
    "SolverConfig",
    "DEFAULT_CONFIG",
    # I/O
    "FatalInputError",
    "read_dimacs",
    "format_report",
    "write_report",
    # Library integrations (NetworkX)
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
