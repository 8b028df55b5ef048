from .compat_types import (
    ComparisonResult,
    ComparisonRow,
    LeafNode,
    NamespaceNode,
    Node,
    Status,
    TargetCell,
    TargetInfo,
)

__all__ = [
    "ComparisonResult",
    "ComparisonRow",
    "LeafNode",
    "NamespaceNode",
    "Node",
    "Status",
    "TargetCell",
    "TargetInfo",
]
