"""Configuration classes for resflow components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from resflow.lib.algorithms.base import ArcOrder

if TYPE_CHECKING:
    from resflow.lib.graph import Network


@dataclass
class SolverConfig:
    """Configuration for the augmentation loop and its report."""

    # Adjacency order used when building networks and residual graphs
    arc_order: ArcOrder = ArcOrder.PREPEND

    # Verify residual invariants after every augmentation
    check_invariants: bool = False

    # Hard cap on augmentations; None means bounded only by total capacity
    max_rounds: Optional[int] = None

    # Report file written by the CLI, relative to the working directory
    report_filename: str = "resultat.txt"

    def round_limit(self, network: Network) -> int:
        """Return the maximum number of augmentations allowed on ``network``.

        Every augmentation adds at least one unit of flow, so the sum of arc
        capacities is always a valid bound. ``max_rounds`` tightens it.
        """
        bound = network.total_capacity()
        if self.max_rounds is not None:
            bound = min(bound, self.max_rounds)
        return bound


# Global configuration instance
DEFAULT_CONFIG = SolverConfig()
