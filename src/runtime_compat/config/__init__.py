from .config import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_EXCLUDE,
    DEFAULT_TARGETS,
    Config,
    TargetConfig,
    default_config_data,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_EXCLUDE",
    "DEFAULT_TARGETS",
    "Config",
    "TargetConfig",
    "default_config_data",
]
