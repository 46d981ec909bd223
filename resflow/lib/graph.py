from __future__ import annotations

from dataclasses import dataclass
from pickle import dumps, loads
from typing import Iterator, List, Optional, Sequence, Tuple

from resflow.lib.algorithms.base import ArcIndex, ArcOrder, Capacity, VertexID


@dataclass(slots=True)
class Arc:
    """
    A directed arc record.

    In a Network, ``capacity`` is the declared capacity and ``flow`` is the
    flow currently assigned to the arc. In a ResidualGraph, ``capacity`` is the
    remaining residual capacity, ``flow`` stays 0 and ``twin`` holds the index
    of the paired arc in the opposite direction.

    Attributes:
        tail: Vertex the arc leaves.
        head: Vertex the arc enters.
        capacity: Declared or residual capacity.
        flow: Assigned flow (network arcs only).
        twin: Index of the reverse residual arc, or None for network arcs.
    """

    tail: VertexID
    head: VertexID
    capacity: Capacity
    flow: Capacity = 0
    twin: Optional[ArcIndex] = None


def _check_capacity(capacity: Capacity) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValueError(f"Capacity must be an integer, got {capacity!r}.")
    if capacity < 0:
        raise ValueError(f"Capacity must be non-negative, got {capacity}.")


class FlowGraph:
    """
    A directed graph over vertices ``1..n`` stored as an arc arena.

    Every arc lives in a single list and is referred to by its index. Each
    vertex owns an ordered list of the indices of its outgoing arcs. The
    position of a new arc in that list is governed by ``order``.

    This class enforces:
      - Vertex ids within ``[1, n]`` for arcs, source and sink.
      - A fixed vertex count chosen at construction.
    """

    def __init__(
        self,
        num_vertices: int,
        source: Optional[VertexID] = None,
        sink: Optional[VertexID] = None,
        order: ArcOrder = ArcOrder.PREPEND,
    ) -> None:
        """
        Args:
            num_vertices: Number of vertices ``n``; vertices are ``1..n``.
            source: Optional source vertex.
            sink: Optional sink vertex.
            order: Adjacency insertion order for new arcs.

        Raises:
            ValueError: If ``num_vertices`` is not positive or source/sink are
                out of range.
        """
        if isinstance(num_vertices, bool) or not isinstance(num_vertices, int):
            raise ValueError(f"Vertex count must be an integer, got {num_vertices!r}.")
        if num_vertices <= 0:
            raise ValueError(f"Vertex count must be positive, got {num_vertices}.")
        self._n = num_vertices
        self._order = ArcOrder(order)
        self._arcs: List[Arc] = []
        # Index 0 is allocated but never used so vertex ids index directly.
        self._adj: List[List[ArcIndex]] = [[] for _ in range(num_vertices + 1)]
        self._source: Optional[VertexID] = None
        self._sink: Optional[VertexID] = None
        if source is not None:
            self.source = source
        if sink is not None:
            self.sink = sink

    #
    # Vertices and terminals
    #
    @property
    def num_vertices(self) -> int:
        return self._n

    @property
    def num_arcs(self) -> int:
        return len(self._arcs)

    @property
    def order(self) -> ArcOrder:
        return self._order

    def vertices(self) -> range:
        return range(1, self._n + 1)

    def has_vertex(self, v: VertexID) -> bool:
        return isinstance(v, int) and 1 <= v <= self._n

    def _check_vertex(self, v: VertexID, role: str = "Vertex") -> None:
        if not self.has_vertex(v):
            raise ValueError(f"{role} {v!r} is outside the range [1, {self._n}].")

    @property
    def source(self) -> Optional[VertexID]:
        return self._source

    @source.setter
    def source(self, v: VertexID) -> None:
        self._check_vertex(v, "Source")
        self._source = v

    @property
    def sink(self) -> Optional[VertexID]:
        return self._sink

    @sink.setter
    def sink(self, v: VertexID) -> None:
        self._check_vertex(v, "Sink")
        self._sink = v

    def terminals(self) -> Tuple[VertexID, VertexID]:
        """Return ``(source, sink)``.

        Raises:
            ValueError: If either terminal is unset.
        """
        if self._source is None or self._sink is None:
            raise ValueError("Source and sink must both be set.")
        return self._source, self._sink

    #
    # Arcs
    #
    def _insert(self, arc: Arc) -> ArcIndex:
        index = len(self._arcs)
        self._arcs.append(arc)
        if self._order == ArcOrder.PREPEND:
            self._adj[arc.tail].insert(0, index)
        else:
            self._adj[arc.tail].append(index)
        return index

    def arc(self, index: ArcIndex) -> Arc:
        return self._arcs[index]

    def adjacency(self, u: VertexID) -> Sequence[ArcIndex]:
        """Return the indices of the arcs leaving ``u`` in traversal order.

        The returned sequence is the graph's own list and must not be mutated.
        """
        return self._adj[u]

    def out_arcs(self, u: VertexID) -> Iterator[Arc]:
        for index in self._adj[u]:
            yield self._arcs[index]

    def arcs(self) -> Iterator[Tuple[ArcIndex, Arc]]:
        """Yield ``(index, arc)`` for every arc, by tail vertex then adjacency order."""
        for u in self.vertices():
            for index in self._adj[u]:
                yield index, self._arcs[index]

    def find_arc(self, u: VertexID, v: VertexID) -> Optional[ArcIndex]:
        """Return the index of the first arc ``u -> v`` in adjacency order, if any."""
        for index in self._adj[u]:
            if self._arcs[index].head == v:
                return index
        return None

    def total_capacity(self) -> Capacity:
        return sum(arc.capacity for arc in self._arcs)

    def copy(self):
        """Return a deep copy through a pickle round-trip."""
        return loads(dumps(self))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_vertices={self._n}, num_arcs={len(self._arcs)}, "
            f"source={self._source}, sink={self._sink})"
        )


class Network(FlowGraph):
    """
    The input capacitated network.

    Arc capacities are fixed once added. Flows are written only by flow
    projection. After a residual graph has been built from the network, each
    network arc knows the index of its forward residual arc.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._residual_index: List[Optional[ArcIndex]] = []

    def add_arc(self, u: VertexID, v: VertexID, capacity: Capacity) -> ArcIndex:
        """
        Add a directed arc ``u -> v`` with zero flow.

        Args:
            u: Tail vertex.
            v: Head vertex.
            capacity: Non-negative integer capacity.

        Returns:
            The index of the new arc.

        Raises:
            ValueError: If a vertex is out of range or the capacity is invalid.
        """
        self._check_vertex(u, "Arc tail")
        self._check_vertex(v, "Arc head")
        _check_capacity(capacity)
        index = self._insert(Arc(tail=u, head=v, capacity=capacity))
        self._residual_index.append(None)
        return index

    def residual_arc(self, index: ArcIndex) -> Optional[ArcIndex]:
        """Return the forward residual arc index paired with network arc ``index``."""
        return self._residual_index[index]

    def bind_residual(self, index: ArcIndex, residual_index: ArcIndex) -> None:
        self._residual_index[index] = residual_index

    def flow_value(self) -> Capacity:
        """Return the net flow leaving the source."""
        source, _ = self.terminals()
        out_flow = sum(arc.flow for arc in self.out_arcs(source))
        in_flow = sum(arc.flow for _, arc in self.arcs() if arc.head == source)
        return out_flow - in_flow

    def reset_flow(self) -> None:
        for arc in self._arcs:
            arc.flow = 0


class ResidualGraph(FlowGraph):
    """
    The residual counterpart of a Network.

    Arcs come in pairs: a forward arc holding remaining capacity and a
    backward arc holding the capacity that may be pushed back. Each arc
    stores its twin's index. The structure is fixed once built; only
    capacities change.
    """

    def add_pair(
        self,
        u: VertexID,
        v: VertexID,
        forward: Capacity,
        backward: Capacity,
    ) -> Tuple[ArcIndex, ArcIndex]:
        """
        Add a forward arc ``u -> v`` and its backward twin ``v -> u``.

        Returns:
            ``(forward_index, backward_index)``.
        """
        self._check_vertex(u, "Arc tail")
        self._check_vertex(v, "Arc head")
        _check_capacity(forward)
        _check_capacity(backward)
        fwd = self._insert(Arc(tail=u, head=v, capacity=forward))
        bwd = self._insert(Arc(tail=v, head=u, capacity=backward))
        self._arcs[fwd].twin = bwd
        self._arcs[bwd].twin = fwd
        return fwd, bwd

    def twin(self, index: ArcIndex) -> ArcIndex:
        twin = self._arcs[index].twin
        if twin is None:
            raise ValueError(f"Residual arc {index} has no twin.")
        return twin

    def capacity(self, index: ArcIndex) -> Capacity:
        return self._arcs[index].capacity


def build_residual_graph(
    network: Network, order: Optional[ArcOrder] = None
) -> ResidualGraph:
    """
    Build the residual graph of ``network``.

    For every network arc ``u -> v`` with capacity ``c`` and flow ``f``, a
    forward residual arc ``u -> v`` with capacity ``c - f`` and a backward arc
    ``v -> u`` with capacity ``f`` are added. Network arcs are visited by tail
    vertex ``1..n``, then in adjacency order. Each network arc is bound to its
    forward residual arc.

    Args:
        network: The network to mirror. Source and sink are copied over.
        order: Adjacency order for the residual graph; defaults to the
            network's own order.

    Returns:
        A new ResidualGraph.
    """
    residual = ResidualGraph(
        network.num_vertices,
        source=network.source,
        sink=network.sink,
        order=network.order if order is None else order,
    )
    for index, arc in network.arcs():
        fwd, _ = residual.add_pair(
            arc.tail, arc.head, arc.capacity - arc.flow, arc.flow
        )
        network.bind_residual(index, fwd)
    return residual
