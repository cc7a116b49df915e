"""Helpers for trying graph construction on a subset of the input.

Large extraction results are often easier to inspect on a reduced graph.
``select_most_connected_subset`` keeps the declarations with the most
dependencies, and ``check_graph`` produces a short list of observations
suitable for console output.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from depviz.analysis.validator import GraphValidator
from depviz.graph.core.graph import Graph
from depviz.graph.models.schema import DeclarationRecord

logger = logging.getLogger("depviz.analysis.subset")


@dataclass
class GraphCheck:
    """Observations about a (usually prototype) graph."""

    orphaned_nodes: List[str] = field(default_factory=list)
    subgraph_sizes: List[int] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True when every node takes part in at least one edge."""
        return not self.orphaned_nodes


def select_most_connected_subset(
    records: Sequence[DeclarationRecord], max_nodes: int
) -> List[DeclarationRecord]:
    """Return the ``max_nodes`` records with the most dependencies.

    Records with the same number of dependencies keep their input order.
    """
    ranked = sorted(records, key=lambda record: len(record.dependencies), reverse=True)
    subset = ranked[: max(max_nodes, 0)]
    logger.info("Selected %d of %d declarations", len(subset), len(records))
    return subset


def check_graph(graph: Graph) -> GraphCheck:
    """Summarise orphans and disconnected subgraphs of ``graph``."""
    check = GraphCheck(
        orphaned_nodes=GraphValidator.find_orphaned_nodes(graph),
        subgraph_sizes=[
            len(component) for component in GraphValidator.identify_subgraphs(graph)
        ],
    )

    if check.orphaned_nodes:
        check.issues.append(
            f"Found {len(check.orphaned_nodes)} orphaned nodes (no connections)"
        )
    if len(check.subgraph_sizes) > 1:
        check.issues.append(
            f"Graph contains {len(check.subgraph_sizes)} disconnected subgraphs"
        )

    for issue in check.issues:
        logger.info(issue)
    return check
