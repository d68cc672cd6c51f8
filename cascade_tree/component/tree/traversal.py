"""
traversal.py - Structural queries over a selectable forest

Every query answers in terms of node ids only, never node payloads, so the
selection engine can reason about plain sets of ids. All functions are pure
and total: a stale or unknown id yields an empty result.
"""

from __future__ import annotations

from functools import cached_property
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Set, Union

from .node import ForestInput, TreeNode, as_forest
from .tree_backend import TreeBackend


class FlatNode(NamedTuple):
    """One flattened node: its id and its parent's id (None for roots)."""

    id: str
    parent_id: Optional[str]


class FlattenedTree(Sequence[FlatNode]):
    """
    Pre-order sequence of :class:`FlatNode` entries.

    Behaves like an immutable list; the graph index used by the ancestor and
    descendant queries is built on first use and reused afterwards.
    """

    def __init__(self, entries: Iterable[FlatNode] = ()):
        self._entries = tuple(FlatNode(*entry) for entry in entries)

    @cached_property
    def backend(self) -> TreeBackend:
        """Graph index over the entries."""
        return TreeBackend.from_pairs(self._entries)

    @property
    def ids(self) -> List[str]:
        """All ids in pre-order."""
        return [entry.id for entry in self._entries]

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FlatNode]:
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        if isinstance(other, FlattenedTree):
            return self._entries == other._entries
        if isinstance(other, (list, tuple)):
            return list(self._entries) == list(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"FlattenedTree({len(self._entries)} nodes)"


FlattenedInput = Union[FlattenedTree, Iterable[FlatNode], Iterable[tuple]]


def _as_flattened(flattened: FlattenedInput) -> FlattenedTree:
    if isinstance(flattened, FlattenedTree):
        return flattened
    return FlattenedTree(flattened)


def flatten(tree: ForestInput) -> FlattenedTree:
    """
    Flatten a forest into pre-order ``(id, parent_id)`` entries.

    Parameters
    ----------
    tree : ForestInput
        Root nodes (TreeNode or node dictionaries). An empty forest yields an
        empty sequence.

    Returns
    -------
    FlattenedTree
        Every node once, parents before children, siblings in tree order.
    """
    entries = []
    # iterative pre-order walk, depth is unbounded
    stack = [(node, None) for node in reversed(as_forest(tree))]
    while stack:
        node, parent_id = stack.pop()
        entries.append(FlatNode(node.id, parent_id))
        for child in reversed(node.children):
            stack.append((child, node.id))
    return FlattenedTree(entries)


def descendant_ids(node_id: str, flattened: FlattenedInput) -> Set[str]:
    """
    Ids of every node below ``node_id`` (children, grandchildren, ...).

    The node itself is not included. Unknown ids yield an empty set.
    """
    return set(_as_flattened(flattened).backend.get_descendants(node_id))


def ancestor_ids(node_id: str, flattened: FlattenedInput) -> List[str]:
    """
    Ids of the ancestors of ``node_id``, nearest parent first.

    Roots and unknown ids yield an empty list.
    """
    return _as_flattened(flattened).backend.get_ancestors(node_id)


def path_to_node(tree: ForestInput, target_id: str) -> List[str]:
    """
    Root-to-parent chain of ids leading to ``target_id``, target excluded.

    Used to expand every ancestor when deep-linking to a node. Empty when the
    target is not found or is itself a root.
    """
    stack = [(node, []) for node in reversed(as_forest(tree))]
    while stack:
        node, path = stack.pop()
        if node.id == target_id:
            return path
        for child in reversed(node.children):
            stack.append((child, path + [node.id]))
    return []


def all_node_ids(tree: ForestInput) -> List[str]:
    """Every id of the forest in pre-order."""
    return flatten(tree).ids


def find_node(tree: ForestInput, node_id: str) -> Optional[TreeNode]:
    """Return the node with ``node_id``, or None."""
    stack = list(reversed(as_forest(tree)))
    while stack:
        node = stack.pop()
        if node.id == node_id:
            return node
        stack.extend(reversed(node.children))
    return None
