"""In-memory dependency graph.

A Graph owns the node and edge collections produced by a build. Nodes are
keyed by FQN and edges by ``source->target``; both collections preserve
insertion order so every traversal over a graph is deterministic. There is
no deletion API: rebuilding means constructing a fresh instance.
"""

from __future__ import annotations

import logging
from typing import Any, Container, Dict, Iterator, Mapping, Optional

import networkx as nx

from ..models.schema import Edge, Node

logger = logging.getLogger("depviz.graph.core.graph")


class Graph:
    """Insertion-ordered collection of nodes and edges.

    Invariant: an edge is only stored when both of its endpoints are
    already present as nodes.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        # source -> {target: edge_id}, kept in edge insertion order.
        self._out: Dict[str, Dict[str, str]] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def add_node(self, node: Node) -> bool:
        """Insert a node, replacing any node with the same ID in place.

        Args:
            node: Node to insert.

        Returns:
            bool: True when an existing node was replaced.
        """
        replaced = node.id in self._nodes
        self._nodes[node.id] = node
        return replaced

    def add_edge(self, edge: Edge) -> bool:
        """Insert an edge if both endpoints exist.

        An edge whose ID is already present replaces the stored edge without
        changing its position.

        Args:
            edge: Edge to insert.

        Returns:
            bool: True if the edge was stored, False if an endpoint is missing.
        """
        if edge.source not in self._nodes or edge.target not in self._nodes:
            logger.debug(
                "Skipping edge %s: endpoint missing from graph", edge.id
            )
            return False

        self._edges[edge.id] = edge
        self._out.setdefault(edge.source, {})[edge.target] = edge.id
        return True

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def nodes(self) -> Iterator[Node]:
        """Iterate over nodes in insertion order."""
        return iter(self._nodes.values())

    def edges(self) -> Iterator[Edge]:
        """Iterate over edges in insertion order."""
        return iter(self._edges.values())

    def node_ids(self) -> Iterator[str]:
        return iter(self._nodes)

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def successors(
        self, node_id: str, kinds: Optional[Container[str]] = None
    ) -> Iterator[Edge]:
        """Iterate over outgoing edges of a node in insertion order.

        Args:
            node_id: Source node ID.
            kinds: Optional set of edge kinds to keep.

        Yields:
            Edge: Outgoing edges, filtered by kind when ``kinds`` is given.
        """
        for edge_id in self._out.get(node_id, {}).values():
            edge = self._edges[edge_id]
            if kinds is None or edge.kind in kinds:
                yield edge

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Export the graph as plain data for serialization.

        Returns:
            Dict with ``nodes`` (FQN -> node dict) and ``edges``
            (edge ID -> edge dict).
        """
        return {
            "nodes": {node_id: node.to_dict() for node_id, node in self._nodes.items()},
            "edges": {edge_id: edge.to_dict() for edge_id, edge in self._edges.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Graph":
        """Rebuild a graph from the structure produced by :meth:`to_dict`.

        Nodes are inserted first so that every edge finds its endpoints;
        edges referring to unknown nodes are dropped like in :meth:`add_edge`.
        """
        graph = cls()
        for node_data in (data.get("nodes") or {}).values():
            graph.add_node(Node.model_validate(node_data))
        for edge_data in (data.get("edges") or {}).values():
            graph.add_edge(Edge.model_validate(edge_data))
        return graph

    def to_networkx(self) -> nx.DiGraph:
        """Return a NetworkX view of the graph.

        Node attributes carry ``label``, ``kind`` and flattened metadata;
        edge attributes carry ``id`` and ``kind``.
        """
        native = nx.DiGraph()
        for node in self._nodes.values():
            native.add_node(
                node.id,
                label=node.label,
                kind=node.kind.value,
                **node.metadata.to_dict(),
            )
        for edge in self._edges.values():
            native.add_edge(edge.source, edge.target, id=edge.id, kind=edge.kind)
        return native
