"""Structural validation of a built dependency graph.

The validator only reads the graph. It reports orphans, multiple
inheritance, inheritance cycles, the longest dependency paths, the most and
least connected nodes and the connected components. Only multiple
inheritance and cycles make a graph invalid; everything else is advisory.
"""

from __future__ import annotations

import heapq
import logging
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Tuple

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field

from depviz.config.schema import ValidatorConfig
from depviz.graph.core.graph import Graph
from depviz.graph.models.schema import INHERITANCE_KINDS, DependencyKind

logger = logging.getLogger("depviz.analysis.validator")


class ConnectionCount(BaseModel):
    """In/out/total degree of a node."""

    model_config = ConfigDict(populate_by_name=True)

    in_: int = Field(default=0, alias="in")
    out: int = 0
    total: int = 0


class ValidationReport(BaseModel):
    """Fixed-shape result of :meth:`GraphValidator.validate`."""

    model_config = ConfigDict(populate_by_name=True)

    orphaned_nodes: List[str] = Field(default_factory=list, alias="orphanedNodes")
    multiple_inheritance: Dict[str, List[str]] = Field(
        default_factory=dict, alias="multipleInheritance"
    )
    circular_dependencies: List[List[str]] = Field(
        default_factory=list, alias="circularDependencies"
    )
    longest_paths: List[List[str]] = Field(default_factory=list, alias="longestPaths")
    most_connected: Dict[str, ConnectionCount] = Field(
        default_factory=dict, alias="mostConnected"
    )
    least_connected: Dict[str, ConnectionCount] = Field(
        default_factory=dict, alias="leastConnected"
    )
    subgraph_count: int = Field(default=0, alias="subgraphCount")
    largest_subgraph: int = Field(default=0, alias="largestSubgraph")
    smallest_subgraph: int = Field(default=0, alias="smallestSubgraph")
    is_valid: bool = Field(default=True, alias="isValid")

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class GraphValidator:
    """Read-only structural analysis over a :class:`Graph`."""

    def __init__(self, config: Optional[ValidatorConfig] = None) -> None:
        self.config = config or ValidatorConfig()

    def validate(self, graph: Graph) -> ValidationReport:
        """Validate the graph and identify potential issues.

        Args:
            graph: Graph to analyze.

        Returns:
            ValidationReport: Structural findings.
        """
        logger.info("Validating graph structure")

        multiple_inheritance = self.find_multiple_inheritance(graph)
        cycles = self.find_circular_dependencies(graph)
        connections = self.calculate_node_connections(graph)
        components = self.identify_subgraphs(graph)
        sizes = [len(component) for component in components]

        report = ValidationReport(
            orphaned_nodes=self.find_orphaned_nodes(graph),
            multiple_inheritance=multiple_inheritance,
            circular_dependencies=cycles,
            longest_paths=self.find_longest_paths(graph),
            most_connected=self.top_nodes_by_connections(connections, most_connected=True),
            least_connected=self.top_nodes_by_connections(connections, most_connected=False),
            subgraph_count=len(components),
            largest_subgraph=max(sizes, default=0),
            smallest_subgraph=min(sizes, default=0),
            is_valid=not multiple_inheritance and not cycles,
        )

        logger.info(
            "Graph validation completed: %s",
            "Valid" if report.is_valid else "Issues detected",
        )
        return report

    # ------------------------------------------------------------------
    # Orphans and inheritance
    # ------------------------------------------------------------------

    @staticmethod
    def find_orphaned_nodes(graph: Graph) -> List[str]:
        """Return IDs of nodes that are neither source nor target of an edge."""
        connected = set()
        for edge in graph.edges():
            connected.add(edge.source)
            connected.add(edge.target)
        return [node_id for node_id in graph.node_ids() if node_id not in connected]

    @staticmethod
    def find_multiple_inheritance(graph: Graph) -> Dict[str, List[str]]:
        """Return sources with more than one ``extends`` target."""
        parents: Dict[str, List[str]] = defaultdict(list)
        for edge in graph.edges():
            if edge.kind == DependencyKind.EXTENDS.value:
                parents[edge.source].append(edge.target)
        return {child: targets for child, targets in parents.items() if len(targets) > 1}

    @staticmethod
    def find_circular_dependencies(graph: Graph) -> List[List[str]]:
        """Find cycles among extends/implements edges.

        Depth-first search from every unvisited node (node order), following
        outgoing inheritance edges in insertion order. Every back-edge into
        the current path records the path suffix starting at the back-edge
        target, closed by that target. Cycles are not deduplicated.

        Returns:
            List of cycles, each starting and ending with the same node.
        """
        cycles: List[List[str]] = []
        visited = set()

        for root in graph.node_ids():
            if root in visited:
                continue

            path: List[str] = [root]
            on_path = {root}
            visited.add(root)
            frames: List[Iterator[str]] = [
                (edge.target for edge in graph.successors(root, INHERITANCE_KINDS))
            ]

            while frames:
                target = next(frames[-1], None)
                if target is None:
                    frames.pop()
                    on_path.discard(path.pop())
                    continue

                if target in on_path:
                    cycle = path[path.index(target):]
                    cycle.append(target)
                    cycles.append(cycle)
                elif target not in visited:
                    visited.add(target)
                    path.append(target)
                    on_path.add(target)
                    frames.append(
                        edge.target for edge in graph.successors(target, INHERITANCE_KINDS)
                    )

        if cycles:
            logger.warning("Found %d inheritance cycle(s)", len(cycles))
        return cycles

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def find_longest_paths(self, graph: Graph) -> List[List[str]]:
        """Return the longest dependency paths over all edge kinds.

        Paths are enumerated per start node with a per-path visited set and
        a hop ceiling, then ranked by length; ties keep discovery order.
        """
        adjacency: Dict[str, List[str]] = defaultdict(list)
        for edge in graph.edges():
            adjacency[edge.source].append(edge.target)

        discovered = (
            path
            for node_id in graph.node_ids()
            if node_id in adjacency
            for path in self._enumerate_paths(node_id, adjacency)
        )
        # nsmallest is documented as equivalent to sorted(...)[:n], so ties
        # keep their discovery order without materialising every path.
        ranked = heapq.nsmallest(
            self.config.path_limit,
            enumerate(discovered),
            key=lambda item: (-len(item[1]), item[0]),
        )
        return [list(path) for _, path in ranked]

    def _enumerate_paths(
        self, start: str, adjacency: Dict[str, List[str]]
    ) -> Iterator[Tuple[str, ...]]:
        """Yield simple paths from ``start`` that end at a node without successors.

        Frames at or beyond the depth ceiling are abandoned without yielding,
        so no path exceeds ``max_path_depth`` nodes.
        """
        max_depth = self.config.max_path_depth
        stack: List[Tuple[Tuple[str, ...], int]] = [((start,), 0)]

        while stack:
            path, depth = stack.pop()
            if depth >= max_depth:
                continue

            current = path[-1]
            neighbors = adjacency.get(current)
            if not neighbors:
                yield path
                continue

            # Reverse so the first neighbour is explored first.
            for neighbor in reversed(neighbors):
                if neighbor in path:
                    continue
                stack.append((path + (neighbor,), depth + 1))

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_node_connections(graph: Graph) -> Dict[str, ConnectionCount]:
        """Compute in/out/total degree for every node."""
        degrees = {node_id: [0, 0] for node_id in graph.node_ids()}
        for edge in graph.edges():
            if edge.source in degrees:
                degrees[edge.source][1] += 1
            if edge.target in degrees:
                degrees[edge.target][0] += 1
        return {
            node_id: ConnectionCount(in_=inbound, out=outbound, total=inbound + outbound)
            for node_id, (inbound, outbound) in degrees.items()
        }

    def top_nodes_by_connections(
        self,
        connections: Dict[str, ConnectionCount],
        most_connected: bool = True,
    ) -> Dict[str, ConnectionCount]:
        """Return the top nodes by total degree (stable for equal totals)."""
        ranked = sorted(
            connections.items(),
            key=lambda item: item[1].total,
            reverse=most_connected,
        )
        return dict(ranked[: self.config.connection_limit])

    @staticmethod
    def identify_subgraphs(graph: Graph) -> List[List[str]]:
        """Partition nodes into components, treating every edge as undirected."""
        undirected = nx.Graph()
        undirected.add_nodes_from(graph.node_ids())
        undirected.add_edges_from((edge.source, edge.target) for edge in graph.edges())
        return [list(component) for component in nx.connected_components(undirected)]
