"""
Output formatters for the runtime compatibility CLI.

Supports human-readable Rich tables, plain tabulate grids and JSON.
"""

import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from tabulate import tabulate

from runtime_compat.models.compat_types import (
    ComparisonResult,
    ComparisonRow,
    Status,
    TargetInfo,
)

console = Console()

BASELINE_HEADER = "baseline"
API_HEADER = "API"
EXPANDED_MARKER = "▼"
COLLAPSED_MARKER = "▶"


def _to_plain(data: Any) -> Any:
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_to_plain(item) for item in data]
    if isinstance(data, dict):
        return {k: _to_plain(v) for k, v in data.items()}
    return data


def row_label(row: ComparisonRow, indent: str = "  ") -> str:
    """API column text: indentation by depth plus an expand marker."""
    label = f"{indent * row.depth}{row.key}"
    if row.is_namespace:
        marker = EXPANDED_MARKER if row.expanded else COLLAPSED_MARKER
        label = f"{label} {marker}"
    return label


def target_header(target: TargetInfo) -> str:
    if target.version:
        return f"{target.title}\n{target.version}"
    return target.title


class OutputFormatter:
    """Output formatter with multiple format options."""

    def __init__(
        self,
        format_type: str = "human",
        quiet: bool = False,
        out: Optional[Console] = None,
    ):
        self.format_type = format_type
        self.quiet = quiet
        self.console = out or console

    def _write_line(self, text: str = "") -> None:
        sys.stdout.write(f"{text}\n")

    def output(self, data: Any, title: Optional[str] = None) -> None:
        """Output data in the specified format."""
        if self.quiet and self.format_type != "json":
            return

        if self.format_type == "json":
            self._output_json(data)
        elif self.format_type == "table":
            self._output_table(data)
        else:
            self._output_human(data, title)

    def _output_json(self, data: Any) -> None:
        self._write_line(json.dumps(_to_plain(data), indent=2, default=str))

    def _output_table(self, data: Any) -> None:
        """Output as table using tabulate."""
        plain = _to_plain(data)
        if isinstance(plain, list):
            if not plain:
                return
            if isinstance(plain[0], dict):
                headers = list(plain[0].keys())
                rows = [[row.get(h, "") for h in headers] for row in plain]
            else:
                headers = ["value"]
                rows = [[item] for item in plain]
            self._write_line(tabulate(rows, headers=headers, tablefmt="grid"))
            return

        if isinstance(plain, dict):
            rows = [[k, v] for k, v in plain.items()]
            self._write_line(
                tabulate(rows, headers=["Property", "Value"], tablefmt="grid")
            )
            return

        self._write_line(str(plain))

    def _output_human(self, data: Any, title: Optional[str] = None) -> None:
        plain = _to_plain(data)
        if isinstance(plain, list):
            if not plain:
                self.console.print("[dim]No items found[/dim]")
                return
            if isinstance(plain[0], dict):
                table = Table(title=title, show_lines=False)
                headers = list(plain[0].keys())
                for header in headers:
                    table.add_column(header.replace("_", " ").title())
                for item in plain:
                    table.add_row(*(str(item.get(h, "")) for h in headers))
                self.console.print(table)
            else:
                for i, item in enumerate(plain, 1):
                    self.console.print(f"{i}. {item}")
            return

        if isinstance(plain, dict):
            if title:
                self.console.print(f"[bold]{title}[/bold]")
            for key, value in plain.items():
                self.console.print(f"[bold]{key}:[/bold] {value}")
            return

        self.console.print(str(plain))

    # Matrix output

    def output_matrix(
        self,
        result: ComparisonResult,
        targets: Sequence[TargetInfo],
        title: Optional[str] = None,
        legend: bool = True,
    ) -> None:
        """Render a comparison result as a matrix."""
        if self.quiet and self.format_type != "json":
            return

        if self.format_type == "json":
            self._output_json(self._matrix_payload(result, targets))
        elif self.format_type == "table":
            self._output_matrix_table(result, targets)
        else:
            self._output_matrix_human(result, targets, title, legend)

    def _matrix_payload(
        self, result: ComparisonResult, targets: Sequence[TargetInfo]
    ) -> Dict[str, Any]:
        return {
            "targets": [t.model_dump(mode="json") for t in targets],
            "baseline_total": result.baseline_total,
            "target_totals": result.target_totals,
            "rows": [row.model_dump(mode="json") for row in result.rows],
        }

    def _output_matrix_table(
        self, result: ComparisonResult, targets: Sequence[TargetInfo]
    ) -> None:
        headers = [API_HEADER, BASELINE_HEADER] + [target_header(t) for t in targets]
        rows: List[List[str]] = []
        for row in result.rows:
            rows.append(
                [row_label(row), Status.SUPPORTED.symbol]
                + [row.cells[t.id].display for t in targets]
            )
        self._write_line(tabulate(rows, headers=headers, tablefmt="grid"))

    def _output_matrix_human(
        self,
        result: ComparisonResult,
        targets: Sequence[TargetInfo],
        title: Optional[str],
        legend: bool,
    ) -> None:
        if not result.rows:
            self.console.print("[dim]No APIs to compare[/dim]")
            return

        table = Table(title=title, show_lines=False)
        table.add_column(API_HEADER, style="cyan", no_wrap=True)
        table.add_column(BASELINE_HEADER, justify="center")
        for target in targets:
            header = Text(target.title, style="bold")
            if target.version:
                header.append(f"\n{target.version}", style="dim")
            table.add_column(header, justify="center")

        for row in result.rows:
            label = Text(row_label(row), style="bold" if row.is_namespace else "")
            cells = []
            for target in targets:
                cell = row.cells[target.id]
                if row.is_namespace:
                    cells.append(f"{cell.display} [dim]({cell.supported}/{cell.total})[/dim]")
                else:
                    cells.append(cell.display)
            table.add_row(label, Status.SUPPORTED.symbol, *cells)

        self.console.print(table)
        if legend:
            self.print_legend()

    def print_legend(self) -> None:
        legend = Text()
        for status in Status:
            if legend:
                legend.append("   ")
            legend.append(f"{status.symbol} {status.label}")
        self.console.print(legend)
