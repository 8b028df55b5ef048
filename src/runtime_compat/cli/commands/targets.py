"""
Target-related CLI commands.
"""

import click

from runtime_compat.cli.context import FORMAT_CHOICES, get_dataset
from runtime_compat.cli.formatters import OutputFormatter
from runtime_compat.core.comparator import compare_node, format_percentage


@click.group(name="targets")
def targets():
    """Commands for inspecting target runtimes."""
    pass


@targets.command("list")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default="human",
    help="Output format",
)
@click.pass_context
def list_targets(ctx, output_format: str):
    """List target columns with their version labels and overall coverage."""
    config, dataset = get_dataset(ctx)
    result = compare_node(
        dataset.baseline,
        dataset.targets,
        placeholder=config.placeholder,
        stub_marker=config.stub_marker,
    )

    rows = []
    for target in dataset.target_info:
        rows.append(
            {
                "id": target.id,
                "title": target.title,
                "version": target.version,
                "file": target.file,
                "coverage": format_percentage(
                    result.target_totals[target.id],
                    result.baseline_total,
                    config.placeholder,
                ),
            }
        )

    formatter = OutputFormatter(output_format, ctx.obj.get("quiet", False))
    formatter.output(rows, title="Targets")
