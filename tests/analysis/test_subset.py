"""Tests for subset selection and the prototype graph check."""

from depviz.analysis.subset import check_graph, select_most_connected_subset
from depviz.graph import Declaration, DeclarationRecord, Dependency, GraphBuilder


def _record(fqn: str, *targets: str) -> DeclarationRecord:
    return DeclarationRecord(
        declaration=Declaration(name=fqn, fully_qualified_name=fqn),
        dependencies=tuple(
            Dependency(source_fqn=fqn, target_fqn=target, kind="use") for target in targets
        ),
    )


def test_subset_keeps_records_with_most_dependencies() -> None:
    records = [
        _record("A"),
        _record("B", "A"),
        _record("C", "A", "B"),
        _record("D", "A"),
    ]

    subset = select_most_connected_subset(records, 3)

    assert [record.declaration.fqn for record in subset] == ["C", "B", "D"]


def test_subset_larger_than_input_returns_everything() -> None:
    records = [_record("A"), _record("B")]

    assert select_most_connected_subset(records, 10) == records
    assert select_most_connected_subset(records, 0) == []


def test_check_graph_reports_orphans_and_components() -> None:
    graph = GraphBuilder().build(
        [_record("A", "B"), _record("B"), _record("C")]
    ).graph

    check = check_graph(graph)

    assert not check.passed
    assert check.orphaned_nodes == ["C"]
    assert sorted(check.subgraph_sizes) == [1, 2]
    assert check.issues == [
        "Found 1 orphaned nodes (no connections)",
        "Graph contains 2 disconnected subgraphs",
    ]


def test_check_graph_connected() -> None:
    graph = GraphBuilder().build([_record("A", "B"), _record("B", "C"), _record("C")]).graph

    check = check_graph(graph)

    assert check.passed
    assert check.issues == []
    assert check.subgraph_sizes == [3]
