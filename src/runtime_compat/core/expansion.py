"""
Expand/collapse state for namespace rows.

The state is an immutable set of keys; every operation returns a new
``ExpandedState`` so the comparator can treat it as a plain input value.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Hashable, Iterable, List, Sequence, Tuple

from runtime_compat.models.compat_types import NamespaceNode


class ExpansionKey(str, Enum):
    """How namespaces are identified in the expanded set."""

    # Full path: ("fs", "promises") and ("dns", "promises") expand independently.
    PATH = "path"
    # Bare name: every namespace called "promises" expands together.
    NAME = "name"


def namespace_paths(tree: NamespaceNode, path: Sequence[str] = ()) -> List[Tuple[str, ...]]:
    """All namespace paths below ``tree`` in display order."""
    paths: List[Tuple[str, ...]] = []
    for key, node in tree.children.items():
        if isinstance(node, NamespaceNode):
            key_path = (*path, key)
            paths.append(key_path)
            paths.extend(namespace_paths(node, key_path))
    return paths


@dataclass(frozen=True)
class ExpandedState:
    keys: FrozenSet[Hashable] = field(default_factory=frozenset)
    mode: ExpansionKey = ExpansionKey.PATH

    def key_for(self, path: Sequence[str]) -> Hashable:
        if not path:
            raise ValueError("Cannot build an expansion key for an empty path")
        if self.mode is ExpansionKey.NAME:
            return path[-1]
        return tuple(path)

    def is_expanded(self, path: Sequence[str]) -> bool:
        return self.key_for(path) in self.keys

    def expand(self, path: Sequence[str]) -> "ExpandedState":
        return replace(self, keys=self.keys | {self.key_for(path)})

    def collapse(self, path: Sequence[str]) -> "ExpandedState":
        return replace(self, keys=self.keys - {self.key_for(path)})

    def toggle(self, path: Sequence[str]) -> "ExpandedState":
        """Flip the expanded flag of ``path``."""
        if self.is_expanded(path):
            return self.collapse(path)
        return self.expand(path)

    def expand_all(self, baseline: NamespaceNode) -> "ExpandedState":
        """Expand every namespace found in ``baseline``, at any depth."""
        return replace(
            self, keys=frozenset(self.key_for(path) for path in namespace_paths(baseline))
        )

    def collapse_all(self) -> "ExpandedState":
        return replace(self, keys=frozenset())

    @classmethod
    def from_paths(
        cls, paths: Iterable[Sequence[str]], mode: ExpansionKey = ExpansionKey.PATH
    ) -> "ExpandedState":
        state = cls(mode=mode)
        for path in paths:
            state = state.expand(path)
        return state

    def __len__(self) -> int:
        return len(self.keys)
