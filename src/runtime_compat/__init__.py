"""Runtime API compatibility matrix."""

__version__ = "0.1.0"
