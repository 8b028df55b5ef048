from .comparator import (
    PLACEHOLDER,
    STUB_MARKER,
    classify,
    compare_node,
    coverage_fraction,
    format_percentage,
    lookup,
    resolve_path,
    resolve_status,
)
from .expansion import ExpandedState, ExpansionKey, namespace_paths

__all__ = [
    "PLACEHOLDER",
    "STUB_MARKER",
    "ExpandedState",
    "ExpansionKey",
    "classify",
    "compare_node",
    "coverage_fraction",
    "format_percentage",
    "lookup",
    "namespace_paths",
    "resolve_path",
    "resolve_status",
]
