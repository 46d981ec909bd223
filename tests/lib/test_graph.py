import pytest

from resflow.lib.algorithms.base import ArcOrder
from resflow.lib.graph import Arc, Network, ResidualGraph, build_residual_graph


def test_init_empty_network():
    """A new network has n vertices, no arcs, and no terminals."""
    net = Network(3)
    assert net.num_vertices == 3
    assert net.num_arcs == 0
    assert list(net.vertices()) == [1, 2, 3]
    assert net.source is None and net.sink is None


@pytest.mark.parametrize("n", [0, -2])
def test_non_positive_vertex_count_rejected(n):
    with pytest.raises(ValueError, match="positive"):
        Network(n)


def test_non_integer_vertex_count_rejected():
    with pytest.raises(ValueError, match="integer"):
        Network(2.5)


def test_terminals_validated():
    net = Network(3)
    with pytest.raises(ValueError, match="Source"):
        net.source = 4
    with pytest.raises(ValueError, match="Sink"):
        net.sink = 0
    with pytest.raises(ValueError, match="must both be set"):
        net.terminals()
    net.source, net.sink = 1, 3
    assert net.terminals() == (1, 3)


def test_add_arc_returns_sequential_indices():
    net = Network(3)
    assert net.add_arc(1, 2, 4) == 0
    assert net.add_arc(2, 3, 7) == 1
    assert net.arc(1) == Arc(tail=2, head=3, capacity=7, flow=0, twin=None)


@pytest.mark.parametrize("u,v", [(0, 1), (1, 4), (5, 2)])
def test_add_arc_out_of_range(u, v):
    net = Network(3)
    with pytest.raises(ValueError, match="outside the range"):
        net.add_arc(u, v, 1)


@pytest.mark.parametrize("capacity", [-1, 1.5, True, "3"])
def test_add_arc_invalid_capacity(capacity):
    net = Network(2)
    with pytest.raises(ValueError, match="Capacity"):
        net.add_arc(1, 2, capacity)


def test_prepend_order_lists_newest_arc_first():
    net = Network(4)
    net.add_arc(1, 2, 1)
    net.add_arc(1, 3, 1)
    net.add_arc(1, 4, 1)
    assert [arc.head for arc in net.out_arcs(1)] == [4, 3, 2]
    assert list(net.adjacency(1)) == [2, 1, 0]


def test_append_order_lists_arcs_in_insertion_order():
    net = Network(4, order=ArcOrder.APPEND)
    net.add_arc(1, 2, 1)
    net.add_arc(1, 3, 1)
    net.add_arc(1, 4, 1)
    assert [arc.head for arc in net.out_arcs(1)] == [2, 3, 4]


def test_arcs_iterates_by_vertex_then_adjacency(two_paths):
    refs = [(arc.tail, arc.head, index) for index, arc in two_paths.arcs()]
    assert refs == [(1, 3, 2), (1, 2, 0), (2, 4, 1), (3, 4, 3)]


def test_find_arc_returns_first_match(parallel_arcs):
    # PREPEND: the second 1->2 arc (index 1) comes first.
    assert parallel_arcs.find_arc(1, 2) == 1
    assert parallel_arcs.find_arc(2, 1) is None


def test_total_capacity(clrs):
    assert clrs.total_capacity() == 16 + 13 + 12 + 4 + 14 + 9 + 20 + 7 + 4


def test_copy_is_independent(single_arc):
    clone = single_arc.copy()
    clone.arc(0).flow = 5
    assert single_arc.arc(0).flow == 0
    assert clone.terminals() == single_arc.terminals()


def test_flow_value_and_reset(two_paths):
    for _, arc in two_paths.arcs():
        arc.flow = arc.capacity
    assert two_paths.flow_value() == 5
    two_paths.reset_flow()
    assert all(arc.flow == 0 for _, arc in two_paths.arcs())


def test_repr_mentions_counts(single_arc):
    assert repr(single_arc) == "Network(num_vertices=2, num_arcs=1, source=1, sink=2)"


class TestResidualConstruction:
    def test_pairs_and_twins(self, two_paths):
        residual = build_residual_graph(two_paths)
        assert isinstance(residual, ResidualGraph)
        assert residual.num_arcs == 2 * two_paths.num_arcs
        assert residual.terminals() == (1, 4)

        for index, arc in two_paths.arcs():
            fwd = two_paths.residual_arc(index)
            bwd = residual.twin(fwd)
            assert residual.twin(bwd) == fwd
            assert (residual.arc(fwd).tail, residual.arc(fwd).head) == (arc.tail, arc.head)
            assert (residual.arc(bwd).tail, residual.arc(bwd).head) == (arc.head, arc.tail)
            assert residual.capacity(fwd) == arc.capacity
            assert residual.capacity(bwd) == 0

    def test_prepend_adjacency_layout(self, two_paths):
        """Forward arcs end up in file order; backward arcs are interleaved."""
        residual = build_residual_graph(two_paths)
        assert [two_paths.residual_arc(i) for i in range(4)] == [2, 4, 0, 6]
        assert list(residual.adjacency(1)) == [2, 0]
        assert list(residual.adjacency(2)) == [4, 3]
        assert list(residual.adjacency(3)) == [6, 1]
        assert list(residual.adjacency(4)) == [7, 5]

    def test_append_adjacency_layout(self):
        net = Network(4, source=1, sink=4, order=ArcOrder.APPEND)
        net.add_arc(1, 2, 3)
        net.add_arc(2, 4, 3)
        net.add_arc(1, 3, 2)
        net.add_arc(3, 4, 2)
        residual = build_residual_graph(net)
        assert list(residual.adjacency(1)) == [0, 2]
        assert list(residual.adjacency(2)) == [1, 4]
        assert list(residual.adjacency(3)) == [3, 6]
        assert list(residual.adjacency(4)) == [5, 7]

    def test_existing_flow_is_mirrored(self, single_arc):
        single_arc.arc(0).flow = 2
        residual = build_residual_graph(single_arc)
        fwd = single_arc.residual_arc(0)
        assert residual.capacity(fwd) == 3
        assert residual.capacity(residual.twin(fwd)) == 2

    def test_parallel_arcs_get_distinct_twins(self, parallel_arcs):
        residual = build_residual_graph(parallel_arcs)
        fwd_a = parallel_arcs.residual_arc(0)
        fwd_b = parallel_arcs.residual_arc(1)
        assert fwd_a != fwd_b
        assert residual.twin(fwd_a) != residual.twin(fwd_b)

    def test_network_arc_has_no_twin(self, single_arc):
        assert single_arc.arc(0).twin is None
        residual = ResidualGraph(2)
        residual._insert(Arc(tail=1, head=2, capacity=1))
        with pytest.raises(ValueError, match="no twin"):
            residual.twin(0)
