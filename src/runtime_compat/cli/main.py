"""
Runtime compatibility CLI.

Renders the baseline-vs-targets API compatibility matrix from static data
files, and manages the report configuration.
"""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from runtime_compat.cli.commands.config import config_cmd
from runtime_compat.cli.commands.matrix import matrix
from runtime_compat.cli.commands.targets import targets
from runtime_compat.config.config import DEFAULT_CONFIG_FILE

console = Console(stderr=True)


def setup_logging(debug: bool = False) -> None:
    """Set up logging with Rich handler."""
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )

    logging.getLogger("runtime_compat").setLevel(level)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=f"Configuration file path (default: {DEFAULT_CONFIG_FILE} if present)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--quiet", is_flag=True, help="Suppress non-error output")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], debug: bool, quiet: bool) -> None:
    """
    Runtime Compatibility Matrix - compare runtime API surfaces against a baseline

    Examples:
        runtime-compat matrix show                    # Top-level coverage
        runtime-compat matrix show --expand fs        # Expand one namespace
        runtime-compat matrix show --expand-all       # Every member
        runtime-compat matrix lookup fs.readFile      # One member, all targets
        runtime-compat matrix browse                  # Interactive expand/collapse
        runtime-compat targets list                   # Target columns and versions
        runtime-compat config init                    # Create default configuration
    """
    setup_logging(debug and not quiet)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config or Path(DEFAULT_CONFIG_FILE)
    ctx.obj["config_explicit"] = config is not None
    ctx.obj["debug"] = debug
    ctx.obj["quiet"] = quiet

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(matrix)
cli.add_command(targets)
cli.add_command(config_cmd, name="config")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
