"""
node.py - TreeNode model for selectable hierarchies

A TreeNode is one selectable entity (category, family, permission group ...)
in a caller-supplied forest. Nodes are frozen: the selection engine never
mutates them, it only keeps sets of their ids.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

import pydantic as pd

from cascade_tree.exceptions import CascadeTreeValueError


class TreeNode(pd.BaseModel):
    """
    Represents a node in a selectable hierarchy.

    Only ``id`` and ``children`` are load-bearing for traversal and selection;
    ``label``, ``name`` and ``data`` travel with the node for the view layer.
    """

    model_config = pd.ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    label: str = ""
    name: Optional[str] = None
    children: List[TreeNode] = pd.Field(default_factory=list)
    data: Any = None

    @pd.field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # record ids from the API may arrive as ints
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @pd.field_validator("label", mode="before")
    @classmethod
    def _absent_label(cls, value):
        return "" if value is None else value

    @pd.field_validator("children", mode="before")
    @classmethod
    def _absent_children(cls, value):
        return [] if value is None else value

    @property
    def display_label(self) -> str:
        """Label shown by the view: label, else name, else id."""
        return self.label or self.name or self.id

    @property
    def is_leaf(self) -> bool:
        """True when the node has no children."""
        return len(self.children) == 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TreeNode:
        """Create a TreeNode (and its subtree) from a plain dictionary."""
        return cls.model_validate(data)

    def __repr__(self) -> str:
        return (
            f"TreeNode(id={self.id!r}, label={self.display_label!r}, "
            f"children={len(self.children)})"
        )


TreeNode.model_rebuild()

ForestInput = Union[TreeNode, Dict[str, Any], Iterable[Union[TreeNode, Dict[str, Any]]], None]


def as_forest(tree: ForestInput) -> List[TreeNode]:
    """
    Normalize caller input into a list of root TreeNodes.

    Accepts a single node, a list of nodes, dictionaries in the node layout,
    or ``None`` (empty forest).

    Raises
    ------
    CascadeTreeValueError
        If a dictionary does not describe a valid node.
    """
    if tree is None:
        return []
    if isinstance(tree, (TreeNode, dict)):
        tree = [tree]

    forest = []
    for item in tree:
        if isinstance(item, TreeNode):
            forest.append(item)
            continue
        try:
            forest.append(TreeNode.model_validate(item))
        except pd.ValidationError as error:
            raise CascadeTreeValueError(f"Invalid tree node {item!r}: {error}") from error
    return forest
