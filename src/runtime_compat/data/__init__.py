from .loader import (
    Dataset,
    build_tree,
    count_leaves,
    filter_tree,
    load_dataset,
    load_json,
    load_tree,
    load_version_map,
    sort_tree,
)

__all__ = [
    "Dataset",
    "build_tree",
    "count_leaves",
    "filter_tree",
    "load_dataset",
    "load_json",
    "load_tree",
    "load_version_map",
    "sort_tree",
]
