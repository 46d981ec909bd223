from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from resflow.lib.algorithms.base import ArcOrder, Capacity, VertexID
from resflow.lib.graph import Network
from resflow.logging import get_logger

logger = get_logger(__name__)

REPORT_TOTAL_LABEL = "Flot maximal"
REPORT_ARCS_HEADER = "Flux sur les arcs :"


class FatalInputError(ValueError):
    """Raised when an input network description cannot be used."""


def _parse_int(token: str, what: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise FatalInputError(
            f"Line {lineno}: {what} must be an integer, got {token!r}."
        ) from None


def parse_dimacs(
    lines: Iterable[str],
    order: ArcOrder = ArcOrder.PREPEND,
) -> Network:
    """
    Build a Network from DIMACS-style max-flow text.

    Recognized lines (by first character):
        ``c ...``            comment, ignored.
        ``p <tag> <n> <m>``  vertex count ``n`` (vertices ``1..n``) and
                             informational arc count ``m``.
        ``n <id> s|t``       marks ``id`` as source (``s``) or sink (``t``).
        ``a <u> <v> <c>``    arc ``u -> v`` with capacity ``c >= 0``.
    Blank lines and lines of any other kind are skipped. Arcs are added in
    file order; with ``ArcOrder.PREPEND`` each vertex's adjacency therefore
    lists later arcs first.

    Args:
        lines: Input lines, with or without trailing newlines.
        order: Adjacency insertion order for the resulting network.

    Returns:
        The network with source and sink set and all flows at zero.

    Raises:
        FatalInputError: If the problem line is missing or malformed, the
            vertex count is not positive, a designation or arc line is
            malformed or out of range, or source/sink are unset.
    """
    num_vertices: Optional[int] = None
    declared_arcs = 0
    source: Optional[VertexID] = None
    sink: Optional[VertexID] = None
    arcs: List[Tuple[int, VertexID, VertexID, Capacity]] = []

    for lineno, raw in enumerate(lines, start=1):
        tokens = raw.split()
        if not tokens:
            continue
        kind = tokens[0]

        if kind.startswith("c"):
            continue

        if kind == "p":
            if num_vertices is not None:
                raise FatalInputError(f"Line {lineno}: duplicate problem line.")
            if len(tokens) != 4:
                raise FatalInputError(
                    f"Line {lineno}: problem line must be 'p <tag> <n> <m>', got {raw.strip()!r}."
                )
            num_vertices = _parse_int(tokens[2], "vertex count", lineno)
            declared_arcs = _parse_int(tokens[3], "arc count", lineno)
            if num_vertices <= 0:
                raise FatalInputError(
                    f"Line {lineno}: vertex count must be positive, got {num_vertices}."
                )

        elif kind == "n":
            if len(tokens) != 3 or tokens[2] not in ("s", "t"):
                raise FatalInputError(
                    f"Line {lineno}: designation must be 'n <id> s|t', got {raw.strip()!r}."
                )
            vertex = _parse_int(tokens[1], "vertex id", lineno)
            if tokens[2] == "s":
                if source is not None:
                    raise FatalInputError(f"Line {lineno}: source designated twice.")
                source = vertex
            else:
                if sink is not None:
                    raise FatalInputError(f"Line {lineno}: sink designated twice.")
                sink = vertex

        elif kind == "a":
            if len(tokens) != 4:
                raise FatalInputError(
                    f"Line {lineno}: arc must be 'a <u> <v> <c>', got {raw.strip()!r}."
                )
            u = _parse_int(tokens[1], "arc tail", lineno)
            v = _parse_int(tokens[2], "arc head", lineno)
            capacity = _parse_int(tokens[3], "capacity", lineno)
            if capacity < 0:
                raise FatalInputError(
                    f"Line {lineno}: capacity must be non-negative, got {capacity}."
                )
            arcs.append((lineno, u, v, capacity))

        else:
            logger.debug(f"Line {lineno}: skipping unrecognized line {raw.strip()!r}")

    if num_vertices is None:
        raise FatalInputError("Missing problem line 'p <tag> <n> <m>'.")
    if source is None or not 1 <= source <= num_vertices:
        raise FatalInputError(f"Source missing or outside [1, {num_vertices}]: {source}.")
    if sink is None or not 1 <= sink <= num_vertices:
        raise FatalInputError(f"Sink missing or outside [1, {num_vertices}]: {sink}.")

    network = Network(num_vertices, source=source, sink=sink, order=order)
    for lineno, u, v, capacity in arcs:
        for vertex in (u, v):
            if not 1 <= vertex <= num_vertices:
                raise FatalInputError(
                    f"Line {lineno}: arc endpoint {vertex} outside [1, {num_vertices}]."
                )
        network.add_arc(u, v, capacity)

    if declared_arcs != len(arcs):
        logger.warning(
            f"Problem line declares {declared_arcs} arcs but {len(arcs)} were read"
        )
    if source == sink:
        logger.warning(f"Source and sink are the same vertex ({source})")

    logger.debug(
        f"Parsed network: {num_vertices} vertices, {len(arcs)} arcs, "
        f"source {source}, sink {sink}"
    )
    return network


def read_dimacs(
    path: Union[str, Path],
    order: ArcOrder = ArcOrder.PREPEND,
) -> Network:
    """
    Read a DIMACS-style file into a Network. See :func:`parse_dimacs`.

    Raises:
        FatalInputError: If the file cannot be read or its content is invalid.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FatalInputError(f"Cannot read input file {path}: {e}") from e
    return parse_dimacs(text.splitlines(), order=order)


def format_report(network: Network, total_flow: Capacity) -> List[str]:
    """
    Render the max-flow report as a list of lines.

    The first line carries the total flow, followed by a blank line, a
    header, and one ``u -> v : flux <flow> / capacité <capacity>`` line per
    network arc in tail-vertex then adjacency order.
    """
    lines = [f"{REPORT_TOTAL_LABEL} : {total_flow}", "", REPORT_ARCS_HEADER]
    for _, arc in network.arcs():
        lines.append(
            f"{arc.tail} -> {arc.head} : flux {arc.flow} / capacité {arc.capacity}"
        )
    return lines


def write_report(
    network: Network,
    total_flow: Capacity,
    path: Union[str, Path],
) -> Path:
    """Write the report produced by :func:`format_report` to ``path`` (UTF-8)."""
    path = Path(path)
    path.write_text("\n".join(format_report(network, total_flow)) + "\n", encoding="utf-8")
    return path
