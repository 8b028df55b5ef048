"""
Loading of baseline and target data files.

Raw JSON mappings are converted to ``LeafNode``/``NamespaceNode`` trees once,
at load time: a mapping with at least one key is a namespace, anything else
is a leaf. Target files keep empty mappings as empty namespaces.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from runtime_compat.config.config import Config
from runtime_compat.exceptions import DatasetError
from runtime_compat.models.compat_types import (
    LeafNode,
    NamespaceNode,
    Node,
    TargetInfo,
)

logger = logging.getLogger(__name__)


class Dataset(BaseModel):
    """Baseline tree plus the target trees in column order."""

    baseline: NamespaceNode
    targets: Dict[str, NamespaceNode]
    target_info: List[TargetInfo]

    model_config = ConfigDict(frozen=True)

    def select(self, target_ids: Iterable[str]) -> "Dataset":
        """Restrict and reorder target columns. Unknown ids raise KeyError."""
        ids = list(target_ids)
        info = {t.id: t for t in self.target_info}
        for target_id in ids:
            if target_id not in self.targets:
                raise KeyError(target_id)
        return Dataset(
            baseline=self.baseline,
            targets={target_id: self.targets[target_id] for target_id in ids},
            target_info=[info[target_id] for target_id in ids],
        )


def load_json(path: Union[str, Path]) -> Any:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DatasetError(path, "file not found") from e
    except json.JSONDecodeError as e:
        raise DatasetError(path, f"invalid JSON ({e})") from e


def build_node(raw: Any, empty_as_namespace: bool = False) -> Node:
    """
    Convert one raw JSON value.

    Falsy scalars (``None``, ``false``, ``0``, ``""``) carry no value. An
    empty mapping is a valueless leaf in a baseline; in a target it is kept as
    an empty namespace, which is present but never equal to a baseline member.
    """
    if isinstance(raw, dict) and (raw or empty_as_namespace):
        return NamespaceNode(
            children={
                str(key): build_node(value, empty_as_namespace)
                for key, value in raw.items()
            }
        )
    if isinstance(raw, dict) or not raw:
        return LeafNode(value=None)
    if isinstance(raw, bool):
        return LeafNode(value="true")
    return LeafNode(value=str(raw))


def build_tree(
    raw: Any,
    source: Union[str, Path] = "<memory>",
    empty_as_namespace: bool = False,
) -> NamespaceNode:
    """Build the root namespace of a baseline or target tree."""
    if not isinstance(raw, dict):
        raise DatasetError(source, f"root must be an object, got {type(raw).__name__}")
    return NamespaceNode(
        children={
            str(key): build_node(value, empty_as_namespace)
            for key, value in raw.items()
        }
    )


def filter_tree(tree: NamespaceNode, exclude: Iterable[str]) -> NamespaceNode:
    """Drop top-level entries named in ``exclude``."""
    excluded = set(exclude)
    if not excluded:
        return tree
    return NamespaceNode(
        children={k: v for k, v in tree.children.items() if k not in excluded}
    )


def sort_tree(tree: NamespaceNode) -> NamespaceNode:
    """Sort top-level entries by name; nested order is kept."""
    return NamespaceNode(children=dict(sorted(tree.children.items())))


def count_leaves(tree: Node) -> int:
    if isinstance(tree, LeafNode):
        return 1
    return sum(count_leaves(child) for child in tree.children.values())


def load_tree(path: Union[str, Path], empty_as_namespace: bool = False) -> NamespaceNode:
    return build_tree(load_json(path), path, empty_as_namespace)


def load_version_map(path: Optional[Path]) -> Dict[str, str]:
    """Load target id -> version label. A missing file yields no labels."""
    if path is None:
        return {}
    if not path.exists():
        logger.warning(f"Version map {path} not found, headers will omit versions")
        return {}

    raw = load_json(path)
    if not isinstance(raw, dict):
        raise DatasetError(path, "version map must be an object")
    return {str(k): "" if v is None else str(v) for k, v in raw.items()}


def load_dataset(config: Config) -> Dataset:
    """Load the baseline and every configured target."""
    data_dir = config.resolve_data_dir()
    logger.debug(f"Loading datasets from {data_dir}")

    baseline = filter_tree(load_tree(data_dir / config.baseline), config.exclude)
    if config.sort_keys:
        baseline = sort_tree(baseline)

    versions = load_version_map(
        data_dir / config.version_map if config.version_map else None
    )

    targets: Dict[str, NamespaceNode] = {}
    target_info: List[TargetInfo] = []
    for target in config.targets:
        targets[target.id] = load_tree(
            data_dir / target.filename, empty_as_namespace=True
        )
        target_info.append(
            TargetInfo(
                id=target.id,
                title=target.title,
                version=versions.get(target.id, ""),
                file=target.filename,
            )
        )
        logger.debug(
            f"Loaded target {target.id}: {count_leaves(targets[target.id])} members"
        )

    logger.debug(
        f"Baseline has {count_leaves(baseline)} members in "
        f"{len(baseline.children)} top-level entries"
    )
    return Dataset(baseline=baseline, targets=targets, target_info=target_info)
