"""Command-line interface for resflow."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from resflow.config import DEFAULT_CONFIG, SolverConfig
from resflow.lib.algorithms.max_flow import AugmentingPathSolver
from resflow.lib.io import FatalInputError, read_dimacs, write_report
from resflow.logging import get_logger, level_from_env, set_global_log_level

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _fail(message: str) -> None:
    print(f"❌ ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def _solve(path: Path, config: SolverConfig) -> None:
    """Compute the max flow of the network in ``path`` and write the report.

    The report is only written after the augmentation loop has finished, so
    a failed run leaves no report behind.

    Args:
        path: DIMACS-style input file.
        config: Solver and report settings.
    """
    logger.info(f"Loading network from: {path}")
    _start_time = perf_counter()

    try:
        network = read_dimacs(path, order=config.arc_order)
        logger.info(
            f"Network: {network.num_vertices} vertices, {network.num_arcs} arcs, "
            f"source {network.source}, sink {network.sink}"
        )
        solver = AugmentingPathSolver(network, config=config)
        total = solver.run()
    except FatalInputError as e:
        logger.debug("Input rejected", exc_info=True)
        _fail(str(e))
        return
    except MemoryError:
        logger.debug("Memory exhausted", exc_info=True)
        _fail("Out of memory while computing the maximum flow")
        return

    logger.info(f"Maximum flow {total} found in {len(solver.rounds)} augmentations")

    try:
        report_path = write_report(network, total, config.report_filename)
    except OSError as e:
        _fail(f"Cannot write report {config.report_filename}: {e}")
        return

    _elapsed = perf_counter() - _start_time
    logger.info(f"Run completed successfully in {_format_duration(_elapsed)}")
    print(f"✅ Results written to: {report_path}")


def main(argv: Optional[List[str]] = None, config: Optional[SolverConfig] = None) -> None:
    """Entry point for the ``resflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
        config: Optional solver configuration; defaults to ``DEFAULT_CONFIG``.
    """
    parser = argparse.ArgumentParser(
        prog="resflow",
        description="Compute the maximum flow of a DIMACS-style network.",
    )
    parser.add_argument("input", type=Path, help="Path to the network file")

    effective_args = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(effective_args)

    set_global_log_level(level_from_env())

    _solve(args.input, config or DEFAULT_CONFIG)


if __name__ == "__main__":
    main()
