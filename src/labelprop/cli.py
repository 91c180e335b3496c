"""Command Line Interface for connected component labelling.

This module provides a CLI that reads an edge document, runs bounded min-label
propagation over it and reports the outcome.

The CLI supports the following commands:
    - run: Print the full node -> component assignment as JSON
    - summary: Print component count, sizes and how the run terminated

Edge documents are JSON objects of the form
``{"edges": [[1, 2], [2, 3]], "isolated_nodes": [7]}``. They can be given as a
direct string or as a file path prefixed with '@'.

Exit status is 0 for a converged run, 2 when the run stopped at the iteration
cap or was cancelled, and 1 for invalid input or a failed run.

Example Usage:
    python -m labelprop cli run @data/graph.json --max-iterations 50
    python -m labelprop cli summary '{"edges": [[1, 2], [3, 4]]}'
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
import threading
from typing import Any, Dict, List, Optional

from labelprop.core.analysis import ComponentAnalysis
from labelprop.core.config import DEFAULT_MAX_ITERATIONS, PropagationConfig
from labelprop.core.exceptions import ConfigurationError, GraphOperationError, ValidationError
from labelprop.core.models import ComponentResult
from labelprop.core.propagation import compute_connected_components_async
from labelprop.infrastructure.loader import EdgeDocument, load_edge_file, parse_edge_json

logger = logging.getLogger(__name__)

EXIT_CONVERGED = 0
EXIT_FAILED = 1
EXIT_NOT_CONVERGED = 2


async def read_edge_input(value: str) -> EdgeDocument:
    """Parse an edge document from either a string or a file.

    Args:
        value (str): Either a JSON string or a file path prefixed with '@'.

    Returns:
        EdgeDocument: Validated edges and isolated nodes.

    Raises:
        ValidationError: If the JSON is invalid or the file is not found.
    """
    if value.startswith("@"):
        return await load_edge_file(value[1:])
    return parse_edge_json(value)


def build_config(args: argparse.Namespace) -> PropagationConfig:
    """Create the run configuration from parsed arguments.

    Raises:
        ConfigurationError: If any option value is out of range.
    """
    return PropagationConfig(
        max_iterations=args.max_iterations,
        max_workers=args.workers,
        track_frontier=args.frontier,
        max_memory_mb=args.max_memory_mb,
    )


def format_result(result: ComponentResult) -> Dict[str, Any]:
    """Convert a result into a JSON-serializable dictionary.

    The assignment is emitted as ``[node, component]`` pairs sorted by node,
    which keeps integer node ids intact in JSON.
    """
    return {
        "assignment": [[node, result.assignment[node]] for node in sorted(result.assignment)],
        "converged": result.converged,
        "iterations_used": result.iterations_used,
        "settled_after": result.settled_after,
        "reason": result.reason.value,
    }


def format_summary(result: ComponentResult) -> List[str]:
    """Describe a result as human readable lines."""
    analysis = ComponentAnalysis(result, allow_unconverged=True)
    lines = [
        f"Termination: {result.reason.value} after {result.iterations_used} iteration(s)",
        f"Nodes: {len(result.assignment)}",
        f"Components: {analysis.get_component_count()}",
    ]
    if not result.converged:
        lines.append("Warning: labels are a lower bound, not a certified assignment")
    for label, size in sorted(analysis.get_component_sizes().items()):
        lines.append(f"- {label}: {size} node(s)")
    return lines


def configure_logging(level: str) -> None:
    """Send log records to stderr at the requested level."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _install_cancel_handler(cancel_event: threading.Event) -> bool:
    """Turn SIGINT into a cancellation at the next generation boundary."""
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError, ValueError):
        logger.debug("Signal handlers unavailable; Ctrl-C aborts immediately")
        return False
    return True


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(description="Connected components by label propagation")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("data", help="JSON string or @filename containing the edge document")
    common.add_argument(
        "--max-iterations",
        type=int,
        default=DEFAULT_MAX_ITERATIONS,
        help=f"Safety cap on propagation steps (default: {DEFAULT_MAX_ITERATIONS})",
    )
    common.add_argument("--workers", type=int, default=1, help="Worker threads per step")
    common.add_argument(
        "--frontier", action="store_true", help="Only recompute neighbours of changed nodes"
    )
    common.add_argument("--max-memory-mb", type=float, default=None, help="Memory growth budget")
    common.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity",
    )

    subparsers.add_parser("run", parents=[common], help="Print the component assignment")
    subparsers.add_parser("summary", parents=[common], help="Print component statistics")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Args:
        argv: Argument list, ``sys.argv[1:]`` when omitted.

    Returns:
        int: Process exit status.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    configure_logging(args.log_level)

    try:
        config = build_config(args)
        document = await read_edge_input(args.data)
    except (ConfigurationError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    cancel_event = threading.Event()
    handler_installed = _install_cancel_handler(cancel_event)

    try:
        result = await compute_connected_components_async(
            document.edges,
            config.max_iterations,
            document.isolated_nodes,
            config=config,
            cancel_event=cancel_event,
        )
    except GraphOperationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED
    finally:
        if handler_installed:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)

    if args.command == "run":
        print(json.dumps(format_result(result)))
    elif args.command == "summary":
        for line in format_summary(result):
            print(line)

    return EXIT_CONVERGED if result.converged else EXIT_NOT_CONVERGED


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
