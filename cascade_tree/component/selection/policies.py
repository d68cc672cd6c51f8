"""
Selection policies

A policy turns one toggle into the next selected-id set. Policies are pure:
they receive the current selection and return a new set without touching
the state they were given.
"""

from abc import ABCMeta, abstractmethod
from enum import Enum
from typing import Dict, Set, Type

from cascade_tree.component.tree.traversal import FlattenedTree, descendant_ids
from cascade_tree.exceptions import CascadeTreeValueError


class SelectionPolicyType(str, Enum):
    """Available selection policies"""

    CASCADE = "cascade"
    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def parse(cls, value) -> "SelectionPolicyType":
        """Accept a SelectionPolicyType or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as error:
            choices = ", ".join(policy.value for policy in cls)
            raise CascadeTreeValueError(
                f"Unknown selection policy {value!r}, expected one of: {choices}"
            ) from error


class SelectionPolicy(metaclass=ABCMeta):
    """Base class of the selection policies"""

    policy_type: SelectionPolicyType

    @abstractmethod
    def apply(
        self, selected: Set[str], node_id: str, is_selected: bool, flattened: FlattenedTree
    ) -> Set[str]:
        """
        Compute the selection after toggling ``node_id``.

        Parameters
        ----------
        selected : Set[str]
            Current selection, left unmodified.
        node_id : str
            Toggled id; it may be missing from the tree.
        is_selected : bool
            Requested state of ``node_id``.
        flattened : FlattenedTree
            Current forest, flattened.

        Returns
        -------
        Set[str]
            The new selection.
        """


class CascadeSelectionPolicy(SelectionPolicy):
    """
    Selecting a node selects its whole subtree; deselecting removes only the
    node itself, so one descendant can be carved out of a selected branch.
    """

    policy_type = SelectionPolicyType.CASCADE

    def apply(self, selected, node_id, is_selected, flattened):
        new_selected = set(selected)
        if is_selected:
            new_selected.add(node_id)
            new_selected.update(descendant_ids(node_id, flattened))
        else:
            new_selected.discard(node_id)
        return new_selected


class SingleSelectionPolicy(SelectionPolicy):
    """
    Radio behaviour: at most one id is selected. Selecting the id that is
    already selected clears the selection.
    """

    policy_type = SelectionPolicyType.SINGLE

    def apply(self, selected, node_id, is_selected, flattened):
        if is_selected and node_id not in selected:
            return {node_id}
        return set()


class MultipleSelectionPolicy(SelectionPolicy):
    """Independent checkboxes: only the toggled id changes."""

    policy_type = SelectionPolicyType.MULTIPLE

    def apply(self, selected, node_id, is_selected, flattened):
        new_selected = set(selected)
        if is_selected:
            new_selected.add(node_id)
        else:
            new_selected.discard(node_id)
        return new_selected


_POLICIES: Dict[SelectionPolicyType, Type[SelectionPolicy]] = {
    SelectionPolicyType.CASCADE: CascadeSelectionPolicy,
    SelectionPolicyType.SINGLE: SingleSelectionPolicy,
    SelectionPolicyType.MULTIPLE: MultipleSelectionPolicy,
}


def get_policy(policy) -> SelectionPolicy:
    """Policy instance for a SelectionPolicy, SelectionPolicyType or its string value."""
    if isinstance(policy, SelectionPolicy):
        return policy
    return _POLICIES[SelectionPolicyType.parse(policy)]()
