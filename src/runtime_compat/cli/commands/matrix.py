"""
Compatibility matrix CLI commands.

Commands for rendering the baseline-vs-targets matrix, browsing it
interactively and looking up single APIs.
"""

from typing import Any, Dict, List, Tuple

import click
from rich.prompt import Prompt

from runtime_compat.cli.context import FORMAT_CHOICES, get_dataset, require_path
from runtime_compat.cli.formatters import OutputFormatter
from runtime_compat.core.comparator import (
    compare_node,
    format_percentage,
    lookup,
    resolve_path,
    resolve_status,
)
from runtime_compat.core.expansion import ExpandedState
from runtime_compat.models.compat_types import LeafNode, NamespaceNode

QUIT_COMMANDS = {"q", "quit", "exit"}
EXPAND_ALL_COMMAND = "+"
COLLAPSE_ALL_COMMAND = "-"


@click.group(name="matrix")
def matrix():
    """Commands for viewing the compatibility matrix."""
    pass


@matrix.command("show")
@click.option(
    "--expand",
    "-e",
    "expand_names",
    multiple=True,
    help="Namespace to expand, dotted for nested ones (repeatable)",
)
@click.option("--expand-all", is_flag=True, help="Expand every namespace")
@click.option(
    "--target",
    "-t",
    "target_ids",
    multiple=True,
    help="Target column to include, in order (repeatable, default: all)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default="human",
    help="Output format",
)
@click.option("--legend/--no-legend", default=True, help="Print the status legend")
@click.pass_context
def show_matrix(
    ctx,
    expand_names: Tuple[str, ...],
    expand_all: bool,
    target_ids: Tuple[str, ...],
    output_format: str,
    legend: bool,
):
    """
    Show coverage of the baseline APIs in every target.

    Namespaces show the share of baseline members present in the target;
    expanded namespaces also list their members.

    Examples:
        runtime-compat matrix show
        runtime-compat matrix show -e fs -e fs.promises
        runtime-compat matrix show --expand-all -t node22 -t bun --format json
    """
    config, dataset = get_dataset(ctx, target_ids)

    state = ExpandedState(mode=config.expansion_key)
    if expand_all:
        state = state.expand_all(dataset.baseline)
    for name in expand_names:
        path = require_path(dataset.baseline, name)
        if not isinstance(lookup(dataset.baseline, path), NamespaceNode):
            raise click.ClickException(f"'{name}' is not a namespace")
        state = state.expand(path)

    result = compare_node(
        dataset.baseline,
        dataset.targets,
        expanded=state,
        placeholder=config.placeholder,
        stub_marker=config.stub_marker,
    )
    formatter = OutputFormatter(output_format, ctx.obj.get("quiet", False))
    formatter.output_matrix(
        result, dataset.target_info, title="API Compatibility", legend=legend
    )


@matrix.command("browse")
@click.option(
    "--target",
    "-t",
    "target_ids",
    multiple=True,
    help="Target column to include, in order (repeatable, default: all)",
)
@click.pass_context
def browse_matrix(ctx, target_ids: Tuple[str, ...]):
    """
    Interactively expand and collapse namespaces.

    Enter a namespace name (dotted for nested ones) to toggle it,
    '+' to expand all, '-' to collapse all and 'q' to quit.
    """
    config, dataset = get_dataset(ctx, target_ids)
    formatter = OutputFormatter("human")

    state = ExpandedState(mode=config.expansion_key)
    while True:
        result = compare_node(
            dataset.baseline,
            dataset.targets,
            expanded=state,
            placeholder=config.placeholder,
            stub_marker=config.stub_marker,
        )
        formatter.output_matrix(result, dataset.target_info, title="API Compatibility")

        choice = Prompt.ask(
            "Toggle namespace ([bold]+[/bold] expand all, "
            "[bold]-[/bold] collapse all, [bold]q[/bold] quit)",
            console=formatter.console,
            default="q",
        ).strip()

        if choice.lower() in QUIT_COMMANDS:
            break
        if choice == EXPAND_ALL_COMMAND:
            state = state.expand_all(dataset.baseline)
            continue
        if choice == COLLAPSE_ALL_COMMAND:
            state = state.collapse_all()
            continue

        path = resolve_path(dataset.baseline, choice)
        if not path:
            formatter.console.print(f"[yellow]Unknown API '{choice}'[/yellow]")
        elif not isinstance(lookup(dataset.baseline, path), NamespaceNode):
            formatter.console.print(f"[yellow]'{choice}' is not a namespace[/yellow]")
        else:
            state = state.toggle(path)


@matrix.command("lookup")
@click.argument("api")
@click.option(
    "--target",
    "-t",
    "target_ids",
    multiple=True,
    help="Target to report on (repeatable, default: all)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default="human",
    help="Output format",
)
@click.pass_context
def lookup_api(ctx, api: str, target_ids: Tuple[str, ...], output_format: str):
    """
    Show the status of one API in every target.

    For a member this is its support status; for a namespace it is the
    number of baseline members present.

    Examples:
        runtime-compat matrix lookup fs.readFile
        runtime-compat matrix lookup fs --format json
    """
    config, dataset = get_dataset(ctx, target_ids)
    path = require_path(dataset.baseline, api)
    node = lookup(dataset.baseline, path)

    rows: List[Dict[str, Any]] = []
    if isinstance(node, LeafNode):
        for target in dataset.target_info:
            status = resolve_status(
                dataset.targets[target.id], path, node.value, config.stub_marker
            )
            rows.append(
                {
                    "target": target.id,
                    "version": target.version,
                    "status": status.value,
                    "symbol": status.symbol,
                }
            )
    else:
        result = compare_node(
            node,
            dataset.targets,
            path=path,
            placeholder=config.placeholder,
            stub_marker=config.stub_marker,
        )
        for target in dataset.target_info:
            rows.append(
                {
                    "target": target.id,
                    "version": target.version,
                    "supported": result.target_totals[target.id],
                    "total": result.baseline_total,
                    "percentage": format_percentage(
                        result.target_totals[target.id],
                        result.baseline_total,
                        config.placeholder,
                    ),
                }
            )

    formatter = OutputFormatter(output_format, ctx.obj.get("quiet", False))
    formatter.output(rows, title=".".join(path))

