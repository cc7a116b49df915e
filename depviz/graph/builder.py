"""Two-pass construction of a dependency graph from extracted declarations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional

from depviz.config.schema import DuplicatePolicy, GraphBuildConfig

from .core.graph import Graph
from .mapper import DependencyMapper
from .models.schema import DeclarationRecord, Node
from .models.stats import BuildStats

logger = logging.getLogger("depviz.graph.builder")


@dataclass(frozen=True)
class BuildResult:
    """A built graph together with its build statistics."""

    graph: Graph
    stats: BuildStats

    def to_dict(self) -> dict:
        return {"graph": self.graph.to_dict(), "stats": self.stats.to_dict()}


class GraphBuilder:
    """Builds a :class:`Graph` from declaration records.

    Pass 1 creates one node per declaration; pass 2 hands every dependency
    to the :class:`DependencyMapper` once the node set is complete, so
    forward references between declarations resolve.
    """

    def __init__(
        self,
        mapper: Optional[DependencyMapper] = None,
        config: Optional[GraphBuildConfig] = None,
    ) -> None:
        self.mapper = mapper or DependencyMapper()
        self.config = config or GraphBuildConfig.default()

    def build(self, records: Iterable[DeclarationRecord]) -> BuildResult:
        """Build a dependency graph.

        Args:
            records: Declarations with their dependencies.

        Returns:
            BuildResult: The graph and its build statistics.
        """
        logger.info("Building dependency graph...")
        start = time.perf_counter()

        ordered = self._order(records)
        graph = Graph()
        stats = BuildStats()

        logger.debug("Creating nodes for %d declarations...", len(ordered))
        stats.duplicate_nodes = self._add_nodes(graph, ordered)
        logger.info("Created %d nodes", graph.node_count())

        logger.debug("Mapping dependencies to edges...")
        stats.dependencies = self.mapper.map_dependencies(graph, ordered)

        stats.node_count = graph.node_count()
        stats.edge_count = graph.edge_count()
        stats.build_time = time.perf_counter() - start

        logger.info("Graph built in %.2f seconds", stats.build_time)
        return BuildResult(graph=graph, stats=stats)

    def _order(self, records: Iterable[DeclarationRecord]) -> List[DeclarationRecord]:
        ordered = list(records)
        if self.config.sort_records:
            ordered.sort(key=lambda record: record.declaration.fully_qualified_name)
        return ordered

    def _add_nodes(self, graph: Graph, records: List[DeclarationRecord]) -> List[str]:
        """Create nodes and return the FQNs declared more than once."""
        duplicates: List[str] = []
        keep_first = self.config.duplicate_policy is DuplicatePolicy.FIRST_WINS

        for record in records:
            node = Node.from_declaration(record.declaration)
            if graph.has_node(node.id):
                if node.id not in duplicates:
                    duplicates.append(node.id)
                logger.warning(
                    "Duplicate declaration of %s in %s (%s)",
                    node.id,
                    record.declaration.file_path or "<unknown file>",
                    "kept first" if keep_first else "replaced earlier",
                )
                if keep_first:
                    continue
            graph.add_node(node)

        return duplicates
