"""Shared helpers for CLI command modules."""

import logging
from typing import Optional, Sequence, Tuple

import click

from runtime_compat.config.config import Config
from runtime_compat.core.comparator import resolve_path
from runtime_compat.data.loader import Dataset, load_dataset
from runtime_compat.exceptions import CompatError
from runtime_compat.models.compat_types import NamespaceNode

logger = logging.getLogger(__name__)

FORMAT_CHOICES = ["human", "table", "json"]


def get_config(ctx: click.Context) -> Config:
    """Load configuration from the path stored in the click context."""
    obj = ctx.obj or {}
    config_path = obj.get("config_path")

    if config_path is None or (
        not config_path.exists() and not obj.get("config_explicit")
    ):
        logger.debug("No configuration file found, using defaults")
        return Config()

    try:
        return Config.from_file(config_path)
    except CompatError as e:
        raise click.ClickException(f"Error loading configuration: {e}") from e


def get_dataset(
    ctx: click.Context, target_ids: Optional[Sequence[str]] = None
) -> Tuple[Config, Dataset]:
    """Load configuration and data files, optionally narrowing the targets."""
    config = get_config(ctx)
    try:
        dataset = load_dataset(config)
    except CompatError as e:
        raise click.ClickException(f"Error loading data: {e}") from e

    if target_ids:
        try:
            dataset = dataset.select(target_ids)
        except KeyError as e:
            raise click.ClickException(
                f"Unknown target {e.args[0]!r}. "
                f"Available targets: {', '.join(dataset.targets)}"
            ) from e
    return config, dataset


def require_path(tree: NamespaceNode, name: str) -> Tuple[str, ...]:
    """Resolve a dotted API name or fail with a CLI error."""
    path = resolve_path(tree, name)
    if not path:
        raise click.ClickException(f"Unknown API '{name}' in baseline")
    return path
