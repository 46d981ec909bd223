"""Shared network fixtures.

Vertex ids are 1..n. Each fixture returns a fresh Network with all flows at
zero and the default (PREPEND) adjacency order.
"""

from __future__ import annotations

import pytest

from resflow.lib.graph import Network
from resflow.logging import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging_each_test():
    """Reset logging state before and after each test to avoid cross-test bleed."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def single_arc():
    # 1(s) ──[5]──► 2(t)
    net = Network(2, source=1, sink=2)
    net.add_arc(1, 2, 5)
    return net


@pytest.fixture
def two_paths():
    # Capacity:
    #        [3]        [3]
    #   ┌────────►2─────────┐
    #   │                   ▼
    #   1(s)                4(t)
    #   │                   ▲
    #   │    [2]        [2] │
    #   └────────►3─────────┘
    net = Network(4, source=1, sink=4)
    net.add_arc(1, 2, 3)
    net.add_arc(2, 4, 3)
    net.add_arc(1, 3, 2)
    net.add_arc(3, 4, 2)
    return net


@pytest.fixture
def sink_without_inflow():
    # 1(s) ──[5]──► 2      3(t) ──[4]──► 1(s)
    net = Network(3, source=1, sink=3)
    net.add_arc(1, 2, 5)
    net.add_arc(3, 1, 4)
    return net


@pytest.fixture
def bottleneck_chain():
    # 1(s) ──[100]──► 2 ──[1]──► 3 ──[100]──► 4(t)
    net = Network(4, source=1, sink=4)
    net.add_arc(1, 2, 100)
    net.add_arc(2, 3, 1)
    net.add_arc(3, 4, 100)
    return net


@pytest.fixture
def clrs():
    # Classic textbook network, max flow 23.
    # s=1, v1=2, v2=3, v3=4, v4=5, t=6
    #
    #   s->v1 16   s->v2 13   v1->v3 12   v2->v1 4   v2->v4 14
    #   v3->v2 9   v3->t 20   v4->v3 7    v4->t 4
    net = Network(6, source=1, sink=6)
    net.add_arc(1, 2, 16)
    net.add_arc(1, 3, 13)
    net.add_arc(2, 4, 12)
    net.add_arc(3, 2, 4)
    net.add_arc(3, 5, 14)
    net.add_arc(4, 3, 9)
    net.add_arc(4, 6, 20)
    net.add_arc(5, 4, 7)
    net.add_arc(5, 6, 4)
    return net


@pytest.fixture
def parallel_arcs():
    # Two parallel arcs 1->2 with capacities 3 and 4, then 2->3 with 10.
    net = Network(3, source=1, sink=3)
    net.add_arc(1, 2, 3)
    net.add_arc(1, 2, 4)
    net.add_arc(2, 3, 10)
    return net


@pytest.fixture
def two_paths_dimacs() -> str:
    return "\n".join(
        [
            "c two disjoint paths",
            "p max 4 4",
            "n 1 s",
            "n 4 t",
            "a 1 2 3",
            "a 2 4 3",
            "a 1 3 2",
            "a 3 4 2",
        ]
    )
