"""JSON persistence for graphs, statistics, reports and extraction records."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, List, Union

import networkx as nx
from pydantic import ValidationError

from .core.graph import Graph
from .models.schema import DeclarationRecord

logger = logging.getLogger("depviz.graph.io")

PathLike = Union[str, Path]


class GraphFormatError(ValueError):
    """Raised when a graph or records file cannot be interpreted."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def save_json(data: Any, output_path: PathLike) -> Path:
    """Write ``data`` as pretty-printed UTF-8 JSON, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path


def _read_json(input_path: PathLike) -> Any:
    path = Path(input_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise GraphFormatError(path, f"invalid JSON ({exc})") from exc


def save_graph(graph: Graph, output_path: PathLike) -> Path:
    """Serialize a graph to JSON.

    Args:
        graph: Graph to serialize.
        output_path: Output file path.

    Returns:
        Path: The written file.
    """
    logger.info("Serializing graph to JSON: %s", output_path)
    start = time.perf_counter()

    path = save_json(graph.to_dict(), output_path)

    logger.info(
        "Graph serialized in %.2f seconds (%.2f MB): %d nodes, %d edges",
        time.perf_counter() - start,
        path.stat().st_size / 1024 / 1024,
        graph.node_count(),
        graph.edge_count(),
    )
    return path


def load_graph(input_path: PathLike) -> Graph:
    """Load a graph written by :func:`save_graph`.

    Raises:
        GraphFormatError: If the file is not a serialized graph.
        OSError: If the file cannot be read.
    """
    data = _read_json(input_path)
    if not isinstance(data, dict) or "nodes" not in data or "edges" not in data:
        raise GraphFormatError(input_path, "expected an object with 'nodes' and 'edges'")

    try:
        graph = Graph.from_dict(data)
    except ValidationError as exc:
        raise GraphFormatError(input_path, f"invalid node or edge ({exc})") from exc

    logger.info(
        "Loaded graph from %s: %d nodes, %d edges",
        input_path,
        graph.node_count(),
        graph.edge_count(),
    )
    return graph


def export_node_link(graph: Graph, output_path: PathLike) -> Path:
    """Export the graph in NetworkX node-link format."""
    logger.info("Exporting graph to node-link JSON: %s", output_path)
    data = nx.readwrite.json_graph.node_link_data(graph.to_networkx(), edges="edges")
    return save_json(data, output_path)


def load_records(input_path: PathLike) -> List[DeclarationRecord]:
    """Load extraction records.

    Accepts either a JSON list of ``{declaration, dependencies}`` objects or
    an object holding that list under ``records``.

    Raises:
        GraphFormatError: If the file does not hold valid records.
    """
    data = _read_json(input_path)
    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        raise GraphFormatError(input_path, "expected a list of declaration records")

    try:
        records = [DeclarationRecord.model_validate(item) for item in data]
    except ValidationError as exc:
        raise GraphFormatError(input_path, f"invalid declaration record ({exc})") from exc

    logger.info("Loaded %d declaration records from %s", len(records), input_path)
    return records
