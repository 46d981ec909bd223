"""NetworkX graph conversion utilities.

This module converts between NetworkX graphs and the integer-vertex
``Network`` used by the max-flow engine.

Example:
    >>> import networkx as nx
    >>> from resflow.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("s", "a", capacity=3)
    >>> G.add_edge("a", "t", capacity=2)
    >>>
    >>> network, node_map = from_networkx(G, "s", "t")
    >>> # ... run calc_max_flow(network, return_network=True) ...
    >>> G_out = to_networkx(network, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

import networkx as nx

from resflow.lib.algorithms.base import ArcOrder, Capacity, VertexID
from resflow.lib.graph import Network


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex ids ``1..n``.

    Attributes:
        to_vertex: Maps original node names to vertex ids.
        to_name: Maps vertex ids back to original node names.

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_vertex["A"]
        1
        >>> node_map.to_name[2]
        'B'
    """

    to_vertex: Dict[Hashable, VertexID] = field(default_factory=dict)
    to_name: Dict[VertexID, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap numbering ``names`` from 1 in list order."""
        to_vertex = {name: i for i, name in enumerate(names, start=1)}
        to_name = {i: name for i, name in enumerate(names, start=1)}
        return cls(to_vertex=to_vertex, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_vertex)


def _as_capacity(value: Any, u: Hashable, v: Hashable) -> Capacity:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Edge {u!r} -> {v!r} has non-integer capacity {value!r}.")
    return value


def from_networkx(
    G: nx.Graph,
    source: Hashable,
    sink: Hashable,
    *,
    capacity_attr: str = "capacity",
    default_capacity: Optional[Capacity] = None,
    order: ArcOrder = ArcOrder.PREPEND,
) -> Tuple[Network, NodeMap]:
    """Convert a NetworkX graph to a Network.

    Node names are sorted by ``str`` and numbered from 1. Every edge becomes
    an arc; edges of undirected graphs become one arc in each direction.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        source: Name of the source node.
        sink: Name of the sink node.
        capacity_attr: Edge attribute holding the capacity.
        default_capacity: Capacity for edges lacking ``capacity_attr``. When
            None, such edges raise ValueError.
        order: Adjacency insertion order for the network.

    Returns:
        ``(network, node_map)``.

    Raises:
        TypeError: If G is not a NetworkX graph.
        ValueError: If G has no nodes, source/sink are missing, or a
            capacity is missing or not a non-negative integer.
    """
    if not isinstance(G, nx.Graph):
        raise TypeError(f"Expected NetworkX graph, got {type(G).__name__}")
    if G.number_of_nodes() == 0:
        raise ValueError("Graph has no nodes")
    for role, name in (("Source", source), ("Sink", sink)):
        if name not in G:
            raise ValueError(f"{role} node {name!r} is not in the graph")

    node_map = NodeMap.from_names(sorted(G.nodes(), key=str))
    network = Network(
        len(node_map),
        source=node_map.to_vertex[source],
        sink=node_map.to_vertex[sink],
        order=order,
    )

    for u, v, data in G.edges(data=True):
        if capacity_attr in data:
            capacity = _as_capacity(data[capacity_attr], u, v)
        elif default_capacity is not None:
            capacity = default_capacity
        else:
            raise ValueError(f"Edge {u!r} -> {v!r} has no {capacity_attr!r} attribute.")
        network.add_arc(node_map.to_vertex[u], node_map.to_vertex[v], capacity)
        if not G.is_directed():
            network.add_arc(node_map.to_vertex[v], node_map.to_vertex[u], capacity)

    return network, node_map


def to_networkx(
    network: Network,
    node_map: Optional[NodeMap] = None,
    *,
    capacity_attr: str = "capacity",
    flow_attr: str = "flow",
) -> nx.MultiDiGraph:
    """Convert a Network to a NetworkX MultiDiGraph.

    Each arc becomes an edge keyed by its arc index, carrying capacity and
    flow. Original names are restored when ``node_map`` is given; otherwise
    nodes are the vertex ids. The source and sink are recorded in
    ``G.graph["source"]`` and ``G.graph["sink"]``.
    """

    def name(v: VertexID) -> Hashable:
        return node_map.to_name.get(v, v) if node_map is not None else v

    G = nx.MultiDiGraph()
    G.add_nodes_from(name(v) for v in network.vertices())
    if network.source is not None:
        G.graph["source"] = name(network.source)
    if network.sink is not None:
        G.graph["sink"] = name(network.sink)

    for index, arc in network.arcs():
        G.add_edge(
            name(arc.tail),
            name(arc.head),
            key=index,
            **{capacity_attr: arc.capacity, flow_attr: arc.flow},
        )
    return G
