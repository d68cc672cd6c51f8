"""
Tree selector: selection state machine behind the tree-selector widgets
"""

from typing import Callable, Iterable, List, Optional

from cascade_tree.component.tree.node import ForestInput, TreeNode, as_forest
from cascade_tree.component.tree.traversal import FlattenedTree, flatten, path_to_node
from cascade_tree.log import log
from cascade_tree.user_config import UserConfig

from .partition import (
    IdentifierConvention,
    PartitionedSelection,
    SelectionMode,
    partition_selection,
)
from .policies import SelectionPolicy, get_policy
from .state import SelectionState

SelectionCallback = Callable[[List[str]], None]


# pylint: disable=too-many-instance-attributes
class TreeSelector:
    """
    Owns the :class:`SelectionState` of one tree widget and applies a
    selection policy on every toggle.

    After every selection change ``on_selection_change`` receives the complete
    list of selected ids. In unified mode the list is also split by the
    identifier convention and the raw ids go to
    ``on_category_selection_change`` and ``on_family_selection_change``.

    Unknown ids are never an error: the tree may have been refreshed between a
    click and its handling, and expansion and selection are independent.

    Example
    -------
    >>> selector = TreeSelector(tree, policy="cascade")
    >>> selector.set_selected("A", True)
    ['A', 'A1', 'A2']
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        tree: ForestInput = None,
        mode=None,
        policy=None,
        default_selected_ids: Iterable[str] = (),
        default_expanded_ids: Iterable[str] = (),
        expand_all: bool = False,
        on_selection_change: Optional[SelectionCallback] = None,
        on_category_selection_change: Optional[SelectionCallback] = None,
        on_family_selection_change: Optional[SelectionCallback] = None,
        convention: Optional[IdentifierConvention] = None,
    ):
        self.mode = SelectionMode.parse(mode if mode is not None else UserConfig.default_mode)
        self.policy: SelectionPolicy = get_policy(
            policy if policy is not None else UserConfig.default_policy
        )
        self.convention = convention or IdentifierConvention.from_config()
        self.expand_all = expand_all
        self.on_selection_change = on_selection_change
        self.on_category_selection_change = on_category_selection_change
        self.on_family_selection_change = on_family_selection_change

        self.state = SelectionState.seeded(default_selected_ids, default_expanded_ids)
        self._default_selected_ids = list(default_selected_ids)
        self._tree: List[TreeNode] = []
        self._flattened = FlattenedTree()
        self.set_tree(tree)

    # ================================================================
    # Tree
    # ================================================================

    @property
    def tree(self) -> List[TreeNode]:
        """Current forest."""
        return self._tree

    @property
    def flattened(self) -> FlattenedTree:
        """Current forest, flattened."""
        return self._flattened

    def set_tree(self, tree: ForestInput) -> None:
        """
        Replace the forest, e.g. after an asynchronous refresh.

        Selected and expanded ids are kept even if their nodes disappeared.
        With ``expand_all`` every node of the new forest is expanded.
        """
        self._tree = as_forest(tree)
        self._flattened = flatten(self._tree)
        if self.expand_all:
            self.state.replace_expansion(self._flattened.ids)
        log.debug("Tree set with %d nodes", len(self._flattened))

    # ================================================================
    # Selection
    # ================================================================

    def set_selected(self, node_id: str, is_selected: bool, tree: ForestInput = None) -> List[str]:
        """
        Set the selected state of ``node_id`` under the configured policy.

        Parameters
        ----------
        node_id : str
            Toggled node id, possibly stale.
        is_selected : bool
            Requested state.
        tree : ForestInput, optional
            Current forest; replaces the stored one when given.

        Returns
        -------
        List[str]
            All selected ids after the change.
        """
        if tree is not None:
            self.set_tree(tree)
        if not self._flattened.backend.has_node(node_id):
            log.debug("'%s' is not in the current tree", node_id)
        new_selected = self.policy.apply(
            self.state.selected_ids, node_id, is_selected, self._flattened
        )
        log.debug(
            "%s %s '%s': %d -> %d selected",
            self.policy.policy_type.value,
            "select" if is_selected else "deselect",
            node_id,
            len(self.state.selected_ids),
            len(new_selected),
        )
        self.state.replace_selection(new_selected)
        return self._notify()

    def toggle(self, node_id: str) -> List[str]:
        """Flip the selected state of ``node_id`` (a checkbox click)."""
        return self.set_selected(node_id, not self.is_selected(node_id))

    def clear_all(self) -> List[str]:
        """Deselect everything; expansion is untouched."""
        self.state.replace_selection(())
        log.debug("Selection cleared")
        return self._notify()

    def is_selected(self, node_id: str) -> bool:
        """Check whether ``node_id`` is selected."""
        return node_id in self.state.selected_ids

    @property
    def selected_ids(self) -> List[str]:
        """Selected ids, tree order first, ids missing from the tree last."""
        return self._ordered(self.state.selected_ids)

    @property
    def selected_count(self) -> int:
        """Number of selected ids."""
        return len(self.state.selected_ids)

    def partition(self) -> PartitionedSelection:
        """Raw category and family ids of the current selection."""
        return partition_selection(self.selected_ids, self.convention)

    # ================================================================
    # Expansion
    # ================================================================

    def set_expanded(self, node_id: str, is_expanded: bool) -> None:
        """Expand or collapse ``node_id``; selection is untouched."""
        if is_expanded:
            self.state.expand([node_id])
        else:
            self.state.collapse(node_id)

    def toggle_expanded(self, node_id: str) -> None:
        """Flip the expanded state of ``node_id``."""
        self.set_expanded(node_id, not self.is_expanded(node_id))

    def toggle_expand_all(self) -> None:
        """Collapse everything if anything is expanded, otherwise expand every node."""
        if self.state.expanded_ids:
            self.state.replace_expansion(())
        else:
            self.state.replace_expansion(self._flattened.ids)

    def reveal(self, node_id: str) -> List[str]:
        """
        Expand every ancestor of ``node_id`` so the node is visible.

        Returns the expanded path, root first; empty for roots and unknown ids.
        """
        path = path_to_node(self._tree, node_id)
        self.state.expand(path)
        return path

    def is_expanded(self, node_id: str) -> bool:
        """Check whether ``node_id`` is expanded."""
        return node_id in self.state.expanded_ids

    @property
    def expanded_ids(self) -> List[str]:
        """Expanded ids, tree order first, ids missing from the tree last."""
        return self._ordered(self.state.expanded_ids)

    def scroll_target(self, active_node_id: Optional[str] = None) -> Optional[str]:
        """
        Node the view should scroll to once rendered: the last default-selected
        id, else ``active_node_id``. Timing is left to the view.
        """
        if self._default_selected_ids:
            return self._default_selected_ids[-1]
        return active_node_id

    # ================================================================
    # Internals
    # ================================================================

    def _ordered(self, node_ids) -> List[str]:
        # backend keeps the first occurrence of a duplicated id
        in_tree = [
            node_id for node_id in self._flattened.backend.get_all_nodes() if node_id in node_ids
        ]
        known = set(in_tree)
        return in_tree + sorted(node_id for node_id in node_ids if node_id not in known)

    def _notify(self) -> List[str]:
        selected = self.selected_ids
        if self.on_selection_change is not None:
            self.on_selection_change(list(selected))
        if self.mode == SelectionMode.UNIFIED:
            categories, families = partition_selection(selected, self.convention)
            if self.on_category_selection_change is not None:
                self.on_category_selection_change(categories)
            if self.on_family_selection_change is not None:
                self.on_family_selection_change(families)
        return selected

    def __repr__(self) -> str:
        return (
            f"TreeSelector(mode={self.mode.value}, policy={self.policy.policy_type.value}, "
            f"{self.selected_count} selected, {len(self.state.expanded_ids)} expanded)"
        )
