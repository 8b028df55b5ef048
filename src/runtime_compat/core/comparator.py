"""
Compatibility tree comparator.

Walks a baseline API tree and, for every target runtime, classifies each
member and aggregates per-namespace coverage. All functions are pure; the
rows are rebuilt from scratch on every call.
"""

import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from runtime_compat.core.expansion import ExpandedState
from runtime_compat.models.compat_types import (
    ComparisonResult,
    ComparisonRow,
    LeafNode,
    NamespaceNode,
    Node,
    Status,
    TargetCell,
)

STUB_MARKER = "stub"
PLACEHOLDER = "—"

TargetValue = Union[Node, str, None]


def lookup(tree: Optional[Node], path: Sequence[str]) -> Optional[Node]:
    """
    Resolve ``path`` inside ``tree``.

    Args:
        tree: Root of a baseline or target tree
        path: Keys from the root, outermost first

    Returns:
        The node at ``path`` (leaf or namespace), or None as soon as a key is
        missing. An empty path returns ``tree`` itself.
    """
    node = tree
    for key in path:
        if not isinstance(node, NamespaceNode):
            return None
        node = node.children.get(key)
        if node is None:
            return None
    return node


def _target_text(target_value: TargetValue) -> Optional[str]:
    if isinstance(target_value, LeafNode):
        return target_value.value
    return target_value


def classify(
    baseline_value: Optional[str],
    target_value: TargetValue,
    stub_marker: str = STUB_MARKER,
) -> Status:
    """
    Classify a target member against the baseline.

    Rules are evaluated in order and the first match wins:
    stub marker, then any other non-empty value that differs from the
    baseline (mismatch), then any non-empty value (supported). Anything
    else is unsupported.
    """
    if isinstance(target_value, NamespaceNode):
        # A namespace where the baseline expects a member never equals it.
        return Status.MISMATCH

    value = _target_text(target_value)
    if value == stub_marker:
        return Status.STUB
    if value and value != baseline_value:
        return Status.MISMATCH
    if value:
        return Status.SUPPORTED
    return Status.UNSUPPORTED


def resolve_status(
    target_tree: Optional[Node],
    path: Sequence[str],
    baseline_value: Optional[str],
    stub_marker: str = STUB_MARKER,
) -> Status:
    """Look up ``path`` in a target tree and classify the result."""
    return classify(baseline_value, lookup(target_tree, path), stub_marker)


def coverage_fraction(supported: int, total: int) -> Optional[float]:
    if total == 0:
        return None
    return supported / total


def format_percentage(supported: int, total: int, placeholder: str = PLACEHOLDER) -> str:
    """Format ``supported / total`` as a whole percentage, halves rounding up."""
    fraction = coverage_fraction(supported, total)
    if fraction is None:
        return placeholder
    return f"{math.floor(fraction * 100 + 0.5)}%"


def _namespace_cell(supported: int, total: int, placeholder: str) -> TargetCell:
    return TargetCell(
        supported=supported,
        total=total,
        percentage=format_percentage(supported, total, placeholder),
        coverage=coverage_fraction(supported, total),
    )


def compare_node(
    baseline: NamespaceNode,
    targets: Mapping[str, Optional[Node]],
    path: Sequence[str] = (),
    expanded: Optional[ExpandedState] = None,
    placeholder: str = PLACEHOLDER,
    stub_marker: str = STUB_MARKER,
) -> ComparisonResult:
    """
    Compare a baseline namespace against every target.

    Args:
        baseline: Baseline namespace to walk, in its own key order
        targets: Target id -> target tree root, in column order
        path: Path of ``baseline`` from the root of the baseline tree
        expanded: Namespaces whose child rows are emitted
        placeholder: Percentage text for namespaces without leaves
        stub_marker: Target value that marks a stub implementation

    Returns:
        ComparisonResult with display rows, the number of baseline leaves
        under ``baseline`` and the number of present leaves per target.
    """
    if expanded is None:
        expanded = ExpandedState()

    rows: List[ComparisonRow] = []
    baseline_total = 0
    target_totals: Dict[str, int] = {target_id: 0 for target_id in targets}

    for key, node in baseline.children.items():
        key_path: Tuple[str, ...] = (*path, key)

        if isinstance(node, NamespaceNode):
            child = compare_node(
                node, targets, key_path, expanded, placeholder, stub_marker
            )
            baseline_total += child.baseline_total
            for target_id in targets:
                target_totals[target_id] += child.target_totals[target_id]

            is_open = expanded.is_expanded(key_path)
            rows.append(
                ComparisonRow(
                    key=key,
                    path=key_path,
                    is_namespace=True,
                    expanded=is_open,
                    cells={
                        target_id: _namespace_cell(
                            child.target_totals[target_id],
                            child.baseline_total,
                            placeholder,
                        )
                        for target_id in targets
                    },
                )
            )
            if is_open:
                rows.extend(child.rows)
            continue

        baseline_total += 1
        cells: Dict[str, TargetCell] = {}
        for target_id, target_tree in targets.items():
            status = resolve_status(target_tree, key_path, node.value, stub_marker)
            if status.is_present:
                target_totals[target_id] += 1
            cells[target_id] = TargetCell(status=status)

        rows.append(
            ComparisonRow(
                key=key,
                path=key_path,
                is_namespace=False,
                baseline_value=node.value,
                cells=cells,
            )
        )

    return ComparisonResult(
        rows=rows, baseline_total=baseline_total, target_totals=target_totals
    )


def resolve_path(tree: NamespaceNode, name: str) -> Optional[Tuple[str, ...]]:
    """
    Turn a dotted name such as ``"fs.promises.readFile"`` into a tree path.

    Keys may themselves contain dots, so the longest key matching at each
    level wins. Returns None when no entry of ``tree`` matches.
    """
    if not name:
        return ()
    return _resolve_parts(tree, name.split("."))


def _resolve_parts(node: Node, parts: List[str]) -> Optional[Tuple[str, ...]]:
    if not isinstance(node, NamespaceNode):
        return None
    for end in range(len(parts), 0, -1):
        key = ".".join(parts[:end])
        if key not in node.children:
            continue
        rest = parts[end:]
        if not rest:
            return (key,)
        sub_path = _resolve_parts(node.children[key], rest)
        if sub_path is not None:
            return (key, *sub_path)
    return None
