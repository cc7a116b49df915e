"""Prototype command: build and check a graph from generated sample data."""

import logging
from pathlib import Path

from depviz.analysis.subset import check_graph
from depviz.graph.builder import GraphBuilder
from depviz.graph.io import save_graph
from depviz.graph.sample import SampleDataGenerator
from depviz.runtime.display import ReportRenderer

logger = logging.getLogger("depviz.cli.prototype")


def prototype_command(args) -> int:
    """Execute prototype command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    if args.nodes < 0 or args.depth < 0 or args.width < 0:
        logger.error("--nodes, --depth and --width must not be negative")
        return 1
    if not 0.0 <= args.connectivity <= 1.0:
        logger.error("--connectivity must be between 0.0 and 1.0")
        return 1

    generator = SampleDataGenerator(seed=getattr(args, "seed", None))
    if args.hierarchical:
        logger.info(
            "Creating a hierarchical graph with depth %d and width %d",
            args.depth,
            args.width,
        )
        records = generator.generate_class_hierarchy(args.depth, args.width)
    else:
        logger.info(
            "Creating a network graph with %d nodes and %.2f connectivity factor",
            args.nodes,
            args.connectivity,
        )
        records = generator.generate_complex_network(args.nodes, args.connectivity)

    result = GraphBuilder().build(records)

    renderer = ReportRenderer(verbose=getattr(args, "verbose", False))
    renderer.build_stats(result.stats)
    renderer.check(check_graph(result.graph))

    try:
        path = save_graph(result.graph, Path(args.output))
    except OSError as e:
        logger.error("Failed to serialize graph data: %s", e)
        return 1

    renderer.console.print(f"Graph data saved to {path}")
    return 0
