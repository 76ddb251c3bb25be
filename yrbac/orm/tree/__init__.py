"""树形结构工具"""

from .tree_utils import (
    ROOT_KEY,
    is_root_parent,
    parent_key,
    index_children,
    find_cycle_members,
    would_create_cycle,
    flatten_tree,
    calculate_tree_depth,
)

__all__ = [
    "ROOT_KEY",
    "is_root_parent",
    "parent_key",
    "index_children",
    "find_cycle_members",
    "would_create_cycle",
    "flatten_tree",
    "calculate_tree_depth",
]
