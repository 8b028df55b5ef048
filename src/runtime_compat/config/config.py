"""
Configuration for runtime compatibility reports.

Load order precedence (highest to lowest):
- Explicit overrides passed to ``Config.with_overrides``
- Environment variables with ``COMPAT_`` prefix
- Values from the YAML configuration file
- Defaults in this module
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from runtime_compat.core.comparator import PLACEHOLDER, STUB_MARKER
from runtime_compat.core.expansion import ExpansionKey
from runtime_compat.exceptions import ConfigError

DEFAULT_CONFIG_FILE = "compat.yaml"

# Node.js modules that only make sense in a full process environment.
DEFAULT_EXCLUDE = [
    "child_process",
    "cluster",
    "constants",
    "domain",
    "inspector",
    "inspector/promises",
    "module",
    "os",
    "path/win32",
    "process",
    "repl",
    "sys",
    "trace_events",
    "tty",
    "vm",
    "worker_threads",
]


class TargetConfig(BaseModel):
    """One target runtime column."""

    id: str
    title: str
    file: Optional[str] = Field(
        default=None, description="Data file name, defaults to '<id>.json'"
    )

    @property
    def filename(self) -> str:
        return self.file or f"{self.id}.json"


DEFAULT_TARGETS = [
    TargetConfig(id="node22", title="node", file="node-22.json"),
    TargetConfig(id="node20", title="node", file="node-20.json"),
    TargetConfig(id="node18", title="node", file="node-18.json"),
    TargetConfig(id="bun", title="bun", file="bun.json"),
    TargetConfig(id="deno", title="deno", file="deno.json"),
    TargetConfig(id="workerd", title="workerd", file="workerd.json"),
    TargetConfig(id="wranglerV3", title="wrangler", file="wrangler-v3-polyfills.json"),
    TargetConfig(
        id="wranglerJspm", title="wrangler", file="wrangler-jspm-polyfills.json"
    ),
    TargetConfig(
        id="wranglerUnenv", title="wrangler", file="wrangler-unenv-polyfills.json"
    ),
]


class Config(BaseSettings):
    """Report configuration."""

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the data files, relative to the config file",
    )
    baseline: str = Field(default="baseline.json", description="Baseline data file")
    version_map: Optional[str] = Field(
        default="versionMap.json", description="Target id -> version label file"
    )
    targets: List[TargetConfig] = Field(
        default_factory=lambda: [t.model_copy() for t in DEFAULT_TARGETS]
    )
    exclude: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE),
        description="Top-level namespaces hidden from the matrix",
    )
    sort_keys: bool = Field(default=False, description="Sort top-level namespaces")
    expansion_key: ExpansionKey = Field(
        default=ExpansionKey.PATH,
        description="Identify expanded namespaces by full path or by bare name",
    )
    placeholder: str = Field(
        default=PLACEHOLDER, description="Shown for namespaces without members"
    )
    stub_marker: str = Field(default=STUB_MARKER)

    model_config = SettingsConfigDict(
        env_prefix="COMPAT_", env_nested_delimiter="__", extra="ignore"
    )

    _source_path: Optional[Path] = PrivateAttr(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # File values arrive as init kwargs; the environment wins over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("targets")
    @classmethod
    def _unique_target_ids(cls, targets: List[TargetConfig]) -> List[TargetConfig]:
        seen = set()
        for target in targets:
            if target.id in seen:
                raise ValueError(f"Duplicate target id '{target.id}'")
            seen.add(target.id)
        return targets

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(file_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError("Configuration file not found", path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", path) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError("Configuration root must be a mapping", path)

        try:
            config = cls(**raw)
        except ValueError as e:
            raise ConfigError(str(e), path) from e
        config._source_path = path
        return config

    @property
    def source_path(self) -> Optional[Path]:
        return self._source_path

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with the given non-None values applied."""
        update: Dict[str, Any] = {k: v for k, v in overrides.items() if v is not None}
        if not update:
            return self
        return self.model_copy(update=update)

    def resolve_data_dir(self) -> Path:
        """Absolute data directory, relative paths anchored at the config file."""
        if self.data_dir.is_absolute():
            return self.data_dir
        base = self._source_path.parent if self._source_path else Path.cwd()
        return (base / self.data_dir).resolve()

    def data_file(self, name: str) -> Path:
        return self.resolve_data_dir() / name

    def target_ids(self) -> List[str]:
        return [target.id for target in self.targets]


def default_config_data() -> Dict[str, Any]:
    """Plain-data default configuration, as written by ``config init``."""
    return Config.model_construct().model_dump(mode="json")
