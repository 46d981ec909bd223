"""Max-flow laws checked on seeded random networks against networkx."""

import random

import networkx as nx
import pytest

from resflow.lib.algorithms.augment import project_flow
from resflow.lib.algorithms.max_flow import (
    AugmentingPathSolver,
    calc_max_flow,
    min_cut_capacity,
)
from resflow.lib.algorithms.validation import check_invariants
from resflow.lib.graph import Network


def random_network(seed: int) -> Network:
    rng = random.Random(seed)
    n = rng.randint(2, 8)
    net = Network(n, source=1, sink=n)
    for _ in range(rng.randint(0, 16)):
        u, v = rng.sample(range(1, n + 1), 2)
        net.add_arc(u, v, rng.randint(0, 10))
    return net


def networkx_max_flow(net: Network) -> int:
    G = nx.DiGraph()
    G.add_nodes_from(net.vertices())
    for _, arc in net.arcs():
        if G.has_edge(arc.tail, arc.head):
            G[arc.tail][arc.head]["capacity"] += arc.capacity
        else:
            G.add_edge(arc.tail, arc.head, capacity=arc.capacity)
    return nx.maximum_flow_value(G, net.source, net.sink)


SEEDS = list(range(25))


@pytest.mark.parametrize("seed", SEEDS)
def test_total_matches_networkx(seed):
    net = random_network(seed)
    assert calc_max_flow(net) == networkx_max_flow(net)


@pytest.mark.parametrize("seed", SEEDS)
def test_total_equals_min_cut_capacity(seed):
    net = random_network(seed)
    total, summary, flow_net = calc_max_flow(
        net, return_summary=True, return_network=True
    )
    assert min_cut_capacity(flow_net, summary) == total
    assert net.sink not in summary.reachable
    # Every cut arc is saturated.
    for _, _, index in summary.min_cut:
        assert flow_net.arc(index).flow == flow_net.arc(index).capacity


@pytest.mark.parametrize("seed", SEEDS)
def test_invariants_hold_after_every_round(seed):
    net = random_network(seed)
    solver = AugmentingPathSolver(net)
    check_invariants(net, solver.residual)
    while solver.step() is not None:
        check_invariants(net, solver.residual)
        for _, arc in solver.residual.arcs():
            assert arc.capacity >= 0


@pytest.mark.parametrize("seed", SEEDS)
def test_flow_conservation_at_inner_vertices(seed):
    _, net = calc_max_flow(random_network(seed), return_network=True)
    balance = {v: 0 for v in net.vertices()}
    for _, arc in net.arcs():
        balance[arc.tail] -= arc.flow
        balance[arc.head] += arc.flow
    total = net.flow_value()
    for v, value in balance.items():
        if v == net.source:
            assert value == -total
        elif v == net.sink:
            assert value == total
        else:
            assert value == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_projection_idempotent_after_convergence(seed):
    net = random_network(seed)
    solver = AugmentingPathSolver(net)
    solver.run()
    before = [arc.flow for _, arc in net.arcs()]
    project_flow(solver.residual, net)
    assert [arc.flow for _, arc in net.arcs()] == before


@pytest.mark.parametrize("seed", SEEDS)
def test_round_count_bounded(seed):
    net = random_network(seed)
    solver = AugmentingPathSolver(net)
    solver.run()
    assert len(solver.rounds) <= net.total_capacity()
    assert all(r.amount >= 1 for r in solver.rounds)
