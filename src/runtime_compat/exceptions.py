"""Custom exceptions for runtime compatibility reports."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class CompatError(Exception):
    """Base exception for compatibility report errors."""


class DatasetError(CompatError):
    """Raised when a baseline or target data file cannot be used."""

    def __init__(self, path: Union[str, Path], message: str) -> None:
        self.path = Path(path)
        super().__init__(f"Dataset {self.path}: {message}")


class ConfigError(CompatError):
    """Raised when the configuration file is missing or invalid."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)
