"""Analyze command implementation.

Builds a dependency graph from extraction records, validates it and writes
the graph (plus optional stats, report and node-link export) to disk.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from depviz.analysis.subset import select_most_connected_subset
from depviz.analysis.validator import GraphValidator
from depviz.graph.builder import GraphBuilder
from depviz.graph.io import export_node_link, load_records, save_graph, save_json
from depviz.runtime.config_loader import load_graph_build_config
from depviz.runtime.display import ReportRenderer

logger = logging.getLogger("depviz.cli.analyze")

RECOVERABLE_ANALYZE_ERRORS = (
    json.JSONDecodeError,
    OSError,
    ValidationError,
    ValueError,
)


def analyze_command(args) -> int:
    """Execute analyze command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    try:
        return _analyze_command_impl(args)
    except RECOVERABLE_ANALYZE_ERRORS as e:
        logger.error("Analyze command failed: %s", e, exc_info=getattr(args, "verbose", False))
        return 1


def _analyze_command_impl(args) -> int:
    logger.debug("Records: %s", args.records)
    logger.debug("Output: %s", args.output)

    config = load_graph_build_config(getattr(args, "config", None))
    records = load_records(Path(args.records))

    max_nodes = getattr(args, "max_nodes", None)
    if max_nodes is not None:
        records = select_most_connected_subset(records, max_nodes)

    result = GraphBuilder(config=config).build(records)
    save_graph(result.graph, Path(args.output))

    stats_path = getattr(args, "stats", None)
    if stats_path:
        save_json(result.stats.to_dict(), Path(stats_path))
        logger.info("Build statistics written to %s", stats_path)

    node_link_path = getattr(args, "node_link", None)
    if node_link_path:
        export_node_link(result.graph, Path(node_link_path))

    report = GraphValidator(config.validator).validate(result.graph)
    report_path = getattr(args, "report", None)
    if report_path:
        save_json(report.to_dict(), Path(report_path))
        logger.info("Validation report written to %s", report_path)

    renderer = ReportRenderer(verbose=getattr(args, "verbose", False))
    renderer.build_stats(result.stats)
    renderer.report(report)

    if not report.is_valid and getattr(args, "fail_on_invalid", False):
        logger.error("Graph validation failed: inheritance anomalies detected")
        return 1
    return 0
