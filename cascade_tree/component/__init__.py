"""cascade_tree Component Module"""

from cascade_tree.component.selection import SelectionMode, SelectionState, TreeSelector
from cascade_tree.component.tree import TreeNode, flatten

__all__ = [
    "SelectionMode",
    "SelectionState",
    "TreeNode",
    "TreeSelector",
    "flatten",
]
