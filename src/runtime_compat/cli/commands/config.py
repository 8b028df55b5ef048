"""
Configuration management CLI commands.

Commands for creating, showing and validating the report configuration.
"""

import json
from typing import List

import click
import yaml

from runtime_compat.cli.context import get_config
from runtime_compat.config.config import Config, default_config_data
from runtime_compat.exceptions import CompatError


@click.group(name="config")
def config_cmd():
    """Commands for managing configuration."""
    pass


@config_cmd.command("init")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.pass_context
def init_config(ctx, force: bool):
    """Initialize a new configuration file with the default targets."""
    config_path = ctx.obj["config_path"]

    if config_path.exists() and not force:
        if not click.confirm(
            f"Configuration file {config_path} already exists. Overwrite?"
        ):
            click.echo("Configuration initialization cancelled")
            return

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write("# Runtime compatibility matrix configuration\n")
            f.write("# Paths are relative to this file\n\n")
            yaml.dump(
                default_config_data(),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
    except OSError as e:
        raise click.ClickException(f"Error creating configuration: {e}") from e

    click.echo(f"✓ Configuration created at {config_path}")


@config_cmd.command("show")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json", "yaml"]),
    default="human",
    help="Output format",
)
@click.pass_context
def show_config(ctx, output_format: str):
    """Show current configuration."""
    config = get_config(ctx)
    data = config.model_dump(mode="json")

    if output_format == "json":
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    if output_format == "yaml":
        click.echo(
            yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        )
        return

    source = config.source_path or "defaults"
    click.echo(f"Configuration from: {source}")
    click.echo(f"  Data directory: {config.resolve_data_dir()}")
    click.echo(f"  Baseline: {config.baseline}")
    click.echo(f"  Version map: {config.version_map or '(none)'}")
    click.echo(f"  Expansion key: {config.expansion_key.value}")
    click.echo(f"  Sort keys: {config.sort_keys}")
    click.echo(f"  Excluded: {', '.join(config.exclude) or '(none)'}")
    click.echo(f"\nTargets ({len(config.targets)}):")
    for target in config.targets:
        click.echo(f"  {target.id} ({target.title}): {target.filename}")


def _missing_files(config: Config) -> List[str]:
    names = [config.baseline] + [t.filename for t in config.targets]
    return [name for name in names if not config.data_file(name).exists()]


@config_cmd.command("validate")
@click.pass_context
def validate_config(ctx):
    """Validate configuration file and the data files it references."""
    config_path = ctx.obj["config_path"]

    try:
        config = Config.from_file(config_path)
    except CompatError as e:
        raise click.ClickException(f"Configuration validation failed: {e}") from e

    click.echo("✓ Configuration file is valid")

    if not config.targets:
        click.echo("⚠️  Warning: No targets configured")

    missing = _missing_files(config)
    for name in missing:
        click.echo(f"⚠️  Warning: Data file '{name}' not found in {config.resolve_data_dir()}")

    if config.version_map and not config.data_file(config.version_map).exists():
        click.echo(f"⚠️  Warning: Version map '{config.version_map}' not found")

    click.echo(f"Configuration contains {len(config.targets)} target(s)")
    if missing:
        raise click.ClickException(f"{len(missing)} data file(s) missing")
