"""
tree - Selectable hierarchies and id-only traversal

Provides the TreeNode model, pure traversal queries over a forest and
builders turning flat API records into forests.
"""

from .builder import (
    build_category_forest,
    build_family_forest,
    build_forest,
    build_unified_forest,
    load_forest,
)
from .node import TreeNode, as_forest
from .traversal import (
    FlatNode,
    FlattenedTree,
    all_node_ids,
    ancestor_ids,
    descendant_ids,
    find_node,
    flatten,
    path_to_node,
)
from .tree_backend import TreeBackend

__all__ = [
    "TreeNode",
    "as_forest",
    "FlatNode",
    "FlattenedTree",
    "TreeBackend",
    "flatten",
    "descendant_ids",
    "ancestor_ids",
    "path_to_node",
    "all_node_ids",
    "find_node",
    "build_forest",
    "build_category_forest",
    "build_family_forest",
    "build_unified_forest",
    "load_forest",
]
