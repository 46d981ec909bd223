"""Graph model, I/O and library integrations for resflow."""

from resflow.lib.graph import Arc, Network, ResidualGraph, build_residual_graph
from resflow.lib.nx import NodeMap, from_networkx, to_networkx

__all__ = [
    "Arc",
    "Network",
    "ResidualGraph",
    "build_residual_graph",
    "NodeMap",
    "from_networkx",
    "to_networkx",
]
