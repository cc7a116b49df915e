"""Mapping of extracted dependencies onto graph edges.

The mapper runs after every node has been created. Each dependency is
checked for referential integrity and, for inheritance kinds, for
circularity before it becomes an edge. Nothing is raised for bad input:
rejected dependencies only show up in the returned statistics.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from .core.graph import Graph
from .models.schema import INHERITANCE_KINDS, DeclarationRecord, Dependency, Edge
from .models.stats import MappingStats

logger = logging.getLogger("depviz.graph.mapper")


class DependencyMapper:
    """Converts dependency facts into edges of an already populated graph."""

    def map_dependencies(
        self, graph: Graph, records: Iterable[DeclarationRecord]
    ) -> MappingStats:
        """Map dependencies to graph edges.

        Args:
            graph: Graph whose nodes have already been created.
            records: Declarations with their dependencies, in build order.

        Returns:
            MappingStats: Per-kind count/missing/invalid/circular counters.
        """
        logger.info("Mapping dependencies to graph edges")
        stats = MappingStats()

        for record in records:
            logger.debug(
                "Processing dependencies for %s (%s, %d dependencies)",
                record.declaration.fully_qualified_name,
                record.declaration.kind.value,
                len(record.dependencies),
            )
            for dependency in record.dependencies:
                stats.record(dependency.kind, self._map_one(graph, dependency))

        total = stats.total
        logger.info(
            "Mapped %d dependencies to edges (missing: %d, invalid: %d, circular: %d)",
            total.count,
            total.missing,
            total.invalid,
            total.circular,
        )
        return stats

    def _map_one(self, graph: Graph, dependency: Dependency) -> str:
        """Apply one dependency to the graph and return its outcome name."""
        source = dependency.source_fqn
        target = dependency.target_fqn

        if not graph.has_node(source):
            logger.warning(
                "Source node %s not found for dependency to %s", source, target
            )
            return "invalid"

        if not graph.has_node(target):
            logger.debug(
                "Target node %s not found for dependency from %s", target, source
            )
            return "missing"

        if dependency.kind in INHERITANCE_KINDS and self.would_create_cycle(
            graph, dependency
        ):
            logger.warning(
                "Circular %s relationship detected: %s -> %s",
                dependency.kind,
                source,
                target,
            )
            return "circular"

        edge = Edge.from_dependency(dependency)
        previous = graph.get_edge(edge.id)
        if previous is not None:
            logger.debug(
                "Edge %s (%s) replaces existing %s edge",
                edge.id,
                edge.kind,
                previous.kind,
            )
        graph.add_edge(edge)
        return "count"

    @staticmethod
    def would_create_cycle(graph: Graph, dependency: Dependency) -> bool:
        """Check whether adding an inheritance edge would close a cycle.

        Walks breadth-first from the dependency's target along the
        extends/implements edges already in the graph. Reaching the
        dependency's source means the new edge would close a loop. Only
        edges accepted so far are considered, so the outcome depends on the
        order in which dependencies are mapped.

        Args:
            graph: Graph in its current, partially mapped state.
            dependency: Candidate dependency.

        Returns:
            bool: True if the dependency must be rejected as circular.
        """
        source = dependency.source_fqn
        visited = {dependency.target_fqn}
        queue = deque([dependency.target_fqn])

        while queue:
            current = queue.popleft()
            for edge in graph.successors(current, INHERITANCE_KINDS):
                if edge.target == source:
                    return True
                if edge.target not in visited:
                    visited.add(edge.target)
                    queue.append(edge.target)

        return False
