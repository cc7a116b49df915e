"""Tests for GraphValidator."""

from typing import Iterable, Tuple

from depviz.analysis.validator import GraphValidator
from depviz.config import ValidatorConfig
from depviz.graph import Declaration, Dependency, Edge, Graph, Node


def _graph(nodes: Iterable[str], edges: Iterable[Tuple[str, str, str]] = ()) -> Graph:
    """Build a graph directly, bypassing the mapper's circularity guard."""
    graph = Graph()
    for fqn in nodes:
        graph.add_node(Node.from_declaration(Declaration(name=fqn, fully_qualified_name=fqn)))
    for source, target, kind in edges:
        assert graph.add_edge(
            Edge.from_dependency(Dependency(source_fqn=source, target_fqn=target, kind=kind))
        )
    return graph


def test_orphaned_node_is_reported_but_graph_stays_valid() -> None:
    graph = _graph(["A", "B", "C"], [("A", "B", "use")])

    report = GraphValidator().validate(graph)

    assert report.orphaned_nodes == ["C"]
    assert report.multiple_inheritance == {}
    assert report.circular_dependencies == []
    assert report.is_valid
    assert all("C" not in path for path in report.longest_paths)
    assert "C" in report.least_connected


def test_three_node_inheritance_cycle() -> None:
    graph = _graph(
        ["A", "B", "C"],
        [("A", "B", "extends"), ("B", "C", "extends"), ("C", "A", "implements")],
    )

    report = GraphValidator().validate(graph)

    assert report.circular_dependencies == [["A", "B", "C", "A"]]
    assert not report.is_valid


def test_every_back_edge_records_a_cycle() -> None:
    graph = _graph(
        ["A", "B", "C"],
        [
            ("A", "B", "extends"),
            ("B", "A", "extends"),
            ("B", "C", "implements"),
            ("C", "A", "implements"),
        ],
    )

    cycles = GraphValidator.find_circular_dependencies(graph)

    assert cycles == [["A", "B", "A"], ["A", "B", "C", "A"]]


def test_self_inheritance_is_a_cycle() -> None:
    graph = _graph(["A"], [("A", "A", "extends")])

    report = GraphValidator().validate(graph)

    assert report.circular_dependencies == [["A", "A"]]
    assert not report.is_valid


def test_use_cycle_is_not_an_inheritance_cycle() -> None:
    graph = _graph(
        ["X", "Y", "Z"],
        [("X", "Y", "use"), ("Y", "Z", "use"), ("Z", "X", "use")],
    )

    report = GraphValidator().validate(graph)

    assert report.circular_dependencies == []
    assert report.is_valid
    # Every walk ends by revisiting a node, so no path reaches a sink.
    assert report.longest_paths == []


def test_multiple_inheritance_makes_graph_invalid() -> None:
    graph = _graph(
        ["A", "B", "C", "I"],
        [("A", "B", "extends"), ("A", "C", "extends"), ("A", "I", "implements")],
    )

    report = GraphValidator().validate(graph)

    assert report.multiple_inheritance == {"A": ["B", "C"]}
    assert not report.is_valid


def test_subgraph_sizes() -> None:
    graph = _graph(
        ["A1", "A2", "A3", "B1", "B2", "B3", "B4", "B5"],
        [
            ("A1", "A2", "use"),
            ("A3", "A2", "use"),
            ("B1", "B2", "use"),
            ("B2", "B3", "use"),
            ("B4", "B3", "extends"),
            ("B5", "B1", "implements"),
        ],
    )

    report = GraphValidator().validate(graph)

    assert report.subgraph_count == 2
    assert report.largest_subgraph == 5
    assert report.smallest_subgraph == 3


def test_empty_graph() -> None:
    report = GraphValidator().validate(Graph())

    assert report.to_dict() == {
        "orphanedNodes": [],
        "multipleInheritance": {},
        "circularDependencies": [],
        "longestPaths": [],
        "mostConnected": {},
        "leastConnected": {},
        "subgraphCount": 0,
        "largestSubgraph": 0,
        "smallestSubgraph": 0,
        "isValid": True,
    }


def test_longest_paths_ranked_by_length_then_discovery() -> None:
    graph = _graph(
        ["A", "B", "C", "D"],
        [("A", "B", "use"), ("B", "C", "use"), ("A", "D", "use")],
    )

    paths = GraphValidator().find_longest_paths(graph)

    assert paths == [["A", "B", "C"], ["A", "D"], ["B", "C"]]


def test_longest_paths_bounded_on_long_chain() -> None:
    names = [f"N{i}" for i in range(1000)]
    graph = _graph(names, [(a, b, "use") for a, b in zip(names, names[1:])])

    paths = GraphValidator().find_longest_paths(graph)

    assert len(paths) == 5
    assert paths[0] == names[980:]
    assert [len(path) for path in paths] == [20, 19, 18, 17, 16]


def test_longest_paths_bounded_with_use_ring_beside_chain() -> None:
    names = [f"N{i}" for i in range(1000)]
    ring = [f"R{i}" for i in range(50)]
    edges = [(a, b, "use") for a, b in zip(names, names[1:])]
    edges += [(a, b, "use") for a, b in zip(ring, ring[1:] + ring[:1])]
    edges += [("N100", "R25", "use"), ("R0", "N500", "use")]
    graph = _graph(names + ring, edges)

    report = GraphValidator().validate(graph)

    assert report.longest_paths[0] == names[980:]
    assert all(len(path) <= 20 for path in report.longest_paths)
    assert report.circular_dependencies == []
    assert report.subgraph_count == 1


def test_max_path_depth_is_configurable() -> None:
    names = [f"N{i}" for i in range(10)]
    graph = _graph(names, [(a, b, "use") for a, b in zip(names, names[1:])])
    validator = GraphValidator(ValidatorConfig(max_path_depth=3, path_limit=2))

    paths = validator.find_longest_paths(graph)

    assert paths == [["N7", "N8", "N9"], ["N8", "N9"]]


def test_connection_rankings_are_stable() -> None:
    graph = _graph(["A", "B", "C", "D"], [("A", "B", "use")])

    report = GraphValidator().validate(graph)

    assert list(report.most_connected) == ["A", "B", "C", "D"]
    assert list(report.least_connected) == ["C", "D", "A", "B"]
    assert report.to_dict()["mostConnected"]["A"] == {"in": 0, "out": 1, "total": 1}
    assert report.to_dict()["mostConnected"]["B"] == {"in": 1, "out": 0, "total": 1}


def test_connection_limit_truncates_rankings() -> None:
    names = [f"N{i}" for i in range(8)]
    graph = _graph(names, [("N0", name, "use") for name in names[1:]])
    validator = GraphValidator(ValidatorConfig(connection_limit=3))

    report = validator.validate(graph)

    assert list(report.most_connected) == ["N0", "N1", "N2"]
    assert report.most_connected["N0"].total == 7
    assert list(report.least_connected) == ["N1", "N2", "N3"]
