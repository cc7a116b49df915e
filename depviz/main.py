"""Main CLI entry point for depviz.

Provides commands: analyze, validate, prototype
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from depviz.cli.analyze import analyze_command
from depviz.cli.prototype import prototype_command
from depviz.cli.validate import validate_command

logger = logging.getLogger("depviz.cli")


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        log_file: Optional file that receives log records as well. The file
            always gets INFO and above (DEBUG with ``verbose``), independent
            of the console level.
        console: Rich Console instance for coordinated output (optional).
    """
    console_level = logging.DEBUG if verbose else logging.WARNING
    file_level = logging.DEBUG if verbose else logging.INFO

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    rich_handler.setLevel(console_level)
    handlers: List[logging.Handler] = [rich_handler]

    root_level = console_level
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        file_handler.setLevel(file_level)
        handlers.append(file_handler)
        root_level = min(console_level, file_level)

    logging.basicConfig(
        level=root_level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depviz",
        description="Depviz - class/interface/trait dependency graph builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Build and validate a graph from extracted declaration records",
    )
    analyze_parser.add_argument(
        "records",
        help="JSON file with [{declaration, dependencies}, ...] records",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output graph file (JSON)",
    )
    analyze_parser.add_argument(
        "--stats",
        help="Write build statistics to this JSON file",
    )
    analyze_parser.add_argument(
        "--report",
        help="Write the validation report to this JSON file",
    )
    analyze_parser.add_argument(
        "--node-link",
        help="Also export the graph in NetworkX node-link JSON format",
    )
    analyze_parser.add_argument(
        "--max-nodes",
        type=int,
        help="Only build from the N declarations with the most dependencies",
    )
    _add_common_validation_args(analyze_parser)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a previously built graph",
    )
    validate_parser.add_argument(
        "graph",
        help="Graph file produced by the analyze command",
    )
    validate_parser.add_argument(
        "--report",
        help="Write the validation report to this JSON file",
    )
    _add_common_validation_args(validate_parser)

    prototype_parser = subparsers.add_parser(
        "prototype",
        help="Test graph creation with a generated sample dataset",
    )
    prototype_parser.add_argument(
        "-o",
        "--output",
        default="var/prototype-graph.json",
        help="Output file for the graph data (default: var/prototype-graph.json)",
    )
    prototype_parser.add_argument(
        "--nodes",
        type=int,
        default=50,
        help="Number of nodes to generate (default: 50)",
    )
    prototype_parser.add_argument(
        "--connectivity",
        type=float,
        default=0.3,
        help="Connectivity factor between 0.0 and 1.0 (default: 0.3)",
    )
    prototype_parser.add_argument(
        "--hierarchical",
        action="store_true",
        help="Generate a class hierarchy instead of a random network",
    )
    prototype_parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Depth of the hierarchical graph (default: 3)",
    )
    prototype_parser.add_argument(
        "--width",
        type=int,
        default=3,
        help="Width of the hierarchical graph (default: 3)",
    )
    prototype_parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible networks",
    )

    return parser


def _add_common_validation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file or an "
            "inline TOML/JSON string. When omitted, built-in defaults are used."
        ),
    )
    parser.add_argument(
        "--fail-on-invalid",
        action="store_true",
        help=(
            "Exit with non-zero status when inheritance cycles or multiple "
            "inheritance are found. Useful for CI validation."
        ),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, getattr(args, "log_file", None))

    if args.command == "analyze":
        return analyze_command(args)
    elif args.command == "validate":
        return validate_command(args)
    elif args.command == "prototype":
        return prototype_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
