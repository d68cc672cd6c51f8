"""
cascade_tree - cascade selection over category and family hierarchies
"""

from cascade_tree.component.selection import (
    CascadeSelectionPolicy,
    IdentifierConvention,
    MultipleSelectionPolicy,
    PartitionedSelection,
    SelectionMode,
    SelectionPolicyType,
    SelectionState,
    SingleSelectionPolicy,
    TreeSelector,
    partition_selection,
)
from cascade_tree.component.tree import (
    FlatNode,
    FlattenedTree,
    TreeNode,
    all_node_ids,
    ancestor_ids,
    build_category_forest,
    build_family_forest,
    build_forest,
    build_unified_forest,
    descendant_ids,
    flatten,
    load_forest,
    path_to_node,
)
from cascade_tree.log import log, set_logging_console, set_logging_file, set_logging_level
from cascade_tree.user_config import UserConfig
from cascade_tree.version import __version__

__all__ = [
    "TreeSelector",
    "SelectionState",
    "SelectionMode",
    "SelectionPolicyType",
    "CascadeSelectionPolicy",
    "SingleSelectionPolicy",
    "MultipleSelectionPolicy",
    "IdentifierConvention",
    "PartitionedSelection",
    "partition_selection",
    "TreeNode",
    "FlatNode",
    "FlattenedTree",
    "flatten",
    "descendant_ids",
    "ancestor_ids",
    "path_to_node",
    "all_node_ids",
    "build_forest",
    "build_category_forest",
    "build_family_forest",
    "build_unified_forest",
    "load_forest",
    "log",
    "set_logging_console",
    "set_logging_file",
    "set_logging_level",
    "UserConfig",
    "__version__",
]
