"""Validate command: structural checks on a previously saved graph."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from depviz.analysis.validator import GraphValidator
from depviz.graph.io import load_graph, save_json
from depviz.runtime.config_loader import load_graph_build_config
from depviz.runtime.display import ReportRenderer

logger = logging.getLogger("depviz.cli.validate")


def validate_command(args) -> int:
    """Execute validate command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config = load_graph_build_config(getattr(args, "config", None))
        graph = load_graph(Path(args.graph))
    except (json.JSONDecodeError, OSError, ValidationError, ValueError) as e:
        logger.error("Failed to load graph %s: %s", args.graph, e)
        return 1

    report = GraphValidator(config.validator).validate(graph)

    report_path = getattr(args, "report", None)
    if report_path:
        try:
            save_json(report.to_dict(), Path(report_path))
        except OSError as e:
            logger.error("Failed to write report %s: %s", report_path, e)
            return 1
        logger.info("Validation report written to %s", report_path)

    ReportRenderer(verbose=getattr(args, "verbose", False)).report(report)

    if not report.is_valid and getattr(args, "fail_on_invalid", False):
        logger.error(
            "Graph validation failed: %d cycle(s), %d multiple-inheritance case(s)",
            len(report.circular_dependencies),
            len(report.multiple_inheritance),
        )
        return 1
    return 0
