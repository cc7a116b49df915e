"""Rich console rendering for build statistics and validation reports."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from depviz.analysis.subset import GraphCheck
from depviz.analysis.validator import ConnectionCount, ValidationReport
from depviz.graph.models.stats import BuildStats

logger = logging.getLogger("depviz.runtime.display")

# Number of orphans / cycles listed before the output is truncated.
_SAMPLE_SIZE = 5


def _connections_table(title: str, ranking: dict[str, ConnectionCount]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Node")
    table.add_column("In", justify="right")
    table.add_column("Out", justify="right")
    table.add_column("Total", justify="right", style="bold")
    for node_id, counts in ranking.items():
        table.add_row(node_id, str(counts.in_), str(counts.out), str(counts.total))
    return table


class ReportRenderer:
    """Prints build and validation results to a Rich console."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False) -> None:
        self.console = console or Console()
        self.verbose = verbose

    def build_stats(self, stats: BuildStats) -> None:
        ratio = stats.edge_count / stats.node_count if stats.node_count else 0.0
        self.console.print(
            Panel(
                Text.assemble(
                    ("Nodes: ", "bold"), str(stats.node_count), "   ",
                    ("Edges: ", "bold"), str(stats.edge_count), "   ",
                    ("Edges/node: ", "bold"), f"{ratio:.2f}", "   ",
                    ("Build time: ", "bold"), f"{stats.build_time:.2f}s",
                ),
                title="Graph build",
                expand=False,
            )
        )

        table = Table(title="Dependencies by kind", title_justify="left")
        table.add_column("Kind")
        for column in ("count", "missing", "invalid", "circular"):
            table.add_column(column.capitalize(), justify="right")
        for kind, counters in stats.dependencies.to_dict().items():
            table.add_row(
                kind,
                str(counters["count"]),
                str(counters["missing"]),
                str(counters["invalid"]),
                str(counters["circular"]),
                style="bold" if kind == "total" else None,
            )
        self.console.print(table)

        if stats.duplicate_nodes:
            self.console.print(
                f"[yellow]{len(stats.duplicate_nodes)} FQN(s) declared more than once[/yellow]"
            )

    def report(self, report: ValidationReport) -> None:
        status = "[green]valid[/green]" if report.is_valid else "[red]issues detected[/red]"
        self.console.print(f"Graph validation: {status}")

        summary = Table(show_header=False, box=None)
        summary.add_row("Orphaned nodes", str(len(report.orphaned_nodes)))
        summary.add_row("Multiple inheritance", str(len(report.multiple_inheritance)))
        summary.add_row("Circular dependencies", str(len(report.circular_dependencies)))
        summary.add_row("Subgraphs", str(report.subgraph_count))
        summary.add_row("Largest subgraph", str(report.largest_subgraph))
        summary.add_row("Smallest subgraph", str(report.smallest_subgraph))
        self.console.print(summary)

        for child, parents in report.multiple_inheritance.items():
            self.console.print(f"[red]{child}[/red] extends {', '.join(parents)}")
        for cycle in report.circular_dependencies[:_SAMPLE_SIZE]:
            self.console.print(f"[red]cycle[/red] {' -> '.join(cycle)}")

        if self.verbose:
            for orphan in report.orphaned_nodes[:_SAMPLE_SIZE]:
                self.console.print(f"[dim]orphan[/dim] {orphan}")
            for path in report.longest_paths:
                self.console.print(f"[cyan]path ({len(path)})[/cyan] {' -> '.join(path)}")

        self.console.print(_connections_table("Most connected", report.most_connected))
        self.console.print(_connections_table("Least connected", report.least_connected))

    def check(self, check: GraphCheck) -> None:
        if check.passed and not check.issues:
            self.console.print("[green]Graph check passed with no issues[/green]")
            return

        self.console.print("Graph check completed with observations:")
        for issue in check.issues:
            self.console.print(f"  - {issue}")
        if self.verbose:
            for orphan in check.orphaned_nodes[:_SAMPLE_SIZE]:
                self.console.print(f"    orphan: {orphan}")
            for index, size in enumerate(check.subgraph_sizes, start=1):
                self.console.print(f"    subgraph {index}: {size} nodes")
