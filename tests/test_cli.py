"""Tests for depviz CLI entrypoints."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest
from rich.console import Console
from rich.logging import RichHandler

import depviz.main as main
from depviz.graph.io import save_json
from depviz.graph.sample import SampleDataGenerator
from depviz.main import setup_logging


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler, (RichHandler, logging.FileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _write_records(path: Path, records) -> Path:
    return save_json([record.to_dict() for record in records], path)


def _multiple_inheritance_records() -> list[dict]:
    def record(fqn: str, *parents: str) -> dict:
        return {
            "declaration": {"name": fqn, "fullyQualifiedName": fqn},
            "dependencies": [
                {"sourceFQN": fqn, "targetFQN": parent, "kind": "extends"} for parent in parents
            ],
        }

    return [record("A", "B", "C"), record("B"), record("C")]


def test_analyze_writes_all_outputs(tmp_path: Path) -> None:
    records = _write_records(
        tmp_path / "records.json",
        SampleDataGenerator().generate_class_hierarchy(depth=2, width=2),
    )
    graph_path = tmp_path / "out" / "graph.json"

    exit_code = main.main(
        [
            "analyze",
            str(records),
            "-o",
            str(graph_path),
            "--stats",
            str(tmp_path / "stats.json"),
            "--report",
            str(tmp_path / "report.json"),
            "--node-link",
            str(tmp_path / "node_link.json"),
        ]
    )

    assert exit_code == 0
    graph = json.loads(graph_path.read_text(encoding="utf-8"))
    assert len(graph["nodes"]) == 7
    assert len(graph["edges"]) == 9
    stats = json.loads((tmp_path / "stats.json").read_text(encoding="utf-8"))
    assert stats["nodeCount"] == 7
    report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert report["isValid"] is True
    assert (tmp_path / "node_link.json").is_file()


def test_analyze_max_nodes_limits_graph(tmp_path: Path) -> None:
    records = _write_records(
        tmp_path / "records.json",
        SampleDataGenerator().generate_class_hierarchy(depth=2, width=2),
    )
    graph_path = tmp_path / "graph.json"

    exit_code = main.main(
        ["analyze", str(records), "-o", str(graph_path), "--max-nodes", "3"]
    )

    assert exit_code == 0
    graph = json.loads(graph_path.read_text(encoding="utf-8"))
    assert len(graph["nodes"]) == 3


def test_analyze_fail_on_invalid(tmp_path: Path) -> None:
    records = save_json(_multiple_inheritance_records(), tmp_path / "records.json")
    graph_path = tmp_path / "graph.json"

    lenient = main.main(["analyze", str(records), "-o", str(graph_path)])
    strict = main.main(
        ["analyze", str(records), "-o", str(graph_path), "--fail-on-invalid"]
    )

    assert lenient == 0
    assert strict == 1


def test_analyze_reports_bad_input(tmp_path: Path) -> None:
    records = tmp_path / "records.json"
    records.write_text("not json", encoding="utf-8")

    exit_code = main.main(["analyze", str(records), "-o", str(tmp_path / "graph.json")])

    assert exit_code == 1
    assert not (tmp_path / "graph.json").exists()


def test_validate_saved_graph(tmp_path: Path) -> None:
    records = save_json(_multiple_inheritance_records(), tmp_path / "records.json")
    graph_path = tmp_path / "graph.json"
    assert main.main(["analyze", str(records), "-o", str(graph_path)]) == 0

    report_path = tmp_path / "report.json"
    exit_code = main.main(["validate", str(graph_path), "--report", str(report_path)])
    strict = main.main(["validate", str(graph_path), "--fail-on-invalid"])

    assert exit_code == 0
    assert strict == 1
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["multipleInheritance"] == {"A": ["B", "C"]}
    assert report["isValid"] is False


def test_validate_missing_graph(tmp_path: Path) -> None:
    assert main.main(["validate", str(tmp_path / "missing.json")]) == 1


def test_validate_with_inline_config(tmp_path: Path) -> None:
    records = _write_records(
        tmp_path / "records.json",
        SampleDataGenerator().generate_class_hierarchy(depth=2, width=1),
    )
    graph_path = tmp_path / "graph.json"
    assert main.main(["analyze", str(records), "-o", str(graph_path)]) == 0

    report_path = tmp_path / "report.json"
    exit_code = main.main(
        [
            "validate",
            str(graph_path),
            "--report",
            str(report_path),
            "-c",
            '{"validator": {"max_path_depth": 2}}',
        ]
    )

    assert exit_code == 0
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert max(len(path) for path in report["longestPaths"]) == 2


def test_prototype_hierarchical(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    output = tmp_path / "prototype.json"

    exit_code = main.main(
        ["prototype", "--hierarchical", "--depth", "2", "--width", "2", "-o", str(output)]
    )

    assert exit_code == 0
    assert "Graph data saved to" in capsys.readouterr().out
    graph = json.loads(output.read_text(encoding="utf-8"))
    assert len(graph["nodes"]) == 7


def test_prototype_network_with_seed(tmp_path: Path) -> None:
    output = tmp_path / "network.json"

    exit_code = main.main(
        ["prototype", "--nodes", "15", "--connectivity", "0.2", "--seed", "3", "-o", str(output)]
    )

    assert exit_code == 0
    graph = json.loads(output.read_text(encoding="utf-8"))
    assert len(graph["nodes"]) == 15


def test_prototype_rejects_bad_connectivity(tmp_path: Path) -> None:
    output = tmp_path / "network.json"

    exit_code = main.main(["prototype", "--connectivity", "1.5", "-o", str(output)])

    assert exit_code == 1
    assert not output.exists()


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main.main([])

    assert exit_code == 1
    assert "Depviz" in capsys.readouterr().out


def test_log_file_gets_info_while_console_stays_quiet(
    tmp_path: Path, root_logger: logging.Logger
) -> None:
    log_file = tmp_path / "depviz.log"
    console = Console(file=io.StringIO(), width=120)

    setup_logging(verbose=False, log_file=str(log_file), console=console)
    logger = logging.getLogger("depviz.graph.builder")
    logger.info("Created 3 nodes")
    logger.debug("Creating nodes for 3 declarations...")
    logger.warning("Duplicate declaration of App\\A")
    for handler in root_logger.handlers:
        handler.flush()

    written = log_file.read_text(encoding="utf-8")
    shown = console.file.getvalue()
    assert "Created 3 nodes" in written
    assert "Duplicate declaration" in written
    assert "Creating nodes for" not in written
    assert "Duplicate declaration" in shown
    assert "Created 3 nodes" not in shown


def test_verbose_logging_reaches_console(root_logger: logging.Logger) -> None:
    console = Console(file=io.StringIO(), width=120)

    setup_logging(verbose=True, console=console)
    logging.getLogger("depviz.graph.mapper").debug("Processing dependencies for App\\A")

    assert root_logger.level == logging.DEBUG
    assert "Processing dependencies for" in console.file.getvalue()
