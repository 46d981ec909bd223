from typing import List, Optional

from resflow.lib.algorithms.base import ArcIndex
from resflow.lib.algorithms.types import Path
from resflow.lib.graph import ResidualGraph
from resflow.lib.queue import VertexQueue


def shortest_augmenting_path(residual: ResidualGraph) -> Optional[Path]:
    """
    Breadth-first search for a fewest-arcs path from source to sink.

    Only arcs with positive residual capacity are followed. Arcs are explored
    in adjacency order, so the result is deterministic for a given residual
    state. The search stops as soon as the sink is dequeued.

    Args:
        residual: The residual graph with source and sink set.

    Returns:
        The path, or None if the sink is unreachable or equals the source.
    """
    src, dst = residual.terminals()
    if src == dst:
        return None

    n = residual.num_vertices
    visited = [False] * (n + 1)
    pred_arc: List[Optional[ArcIndex]] = [None] * (n + 1)

    queue = VertexQueue(n)
    queue.push(src)
    visited[src] = True
    found = False
    while not queue.empty():
        u = queue.pop()
        if u == dst:
            found = True
            break
        for index in residual.adjacency(u):
            arc = residual.arc(index)
            v = arc.head
            if not visited[v] and arc.capacity > 0:
                visited[v] = True
                pred_arc[v] = index
                queue.push(v)

    if not found:
        return None

    # Walk predecessor arcs back from the sink.
    vertices = [dst]
    arcs: List[ArcIndex] = []
    v = dst
    while v != src:
        index = pred_arc[v]
        arcs.append(index)
        v = residual.arc(index).tail
        vertices.append(v)
    vertices.reverse()
    arcs.reverse()
    return Path(vertices=tuple(vertices), arcs=tuple(arcs))


def reachable_vertices(residual: ResidualGraph) -> set:
    """Return the set of vertices reachable from the source over positive arcs."""
    src, _ = residual.terminals()
    reachable = {src}
    queue = VertexQueue(residual.num_vertices)
    queue.push(src)
    while not queue.empty():
        u = queue.pop()
        for arc in residual.out_arcs(u):
            if arc.capacity > 0 and arc.head not in reachable:
                reachable.add(arc.head)
                queue.push(arc.head)
    return reachable
