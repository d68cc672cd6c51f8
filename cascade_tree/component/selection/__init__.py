"""
selection - Selection state machine for tree-selector widgets
"""

from .engine import TreeSelector
from .partition import (
    IdentifierConvention,
    PartitionedSelection,
    SelectionMode,
    partition_selection,
)
from .policies import (
    CascadeSelectionPolicy,
    MultipleSelectionPolicy,
    SelectionPolicy,
    SelectionPolicyType,
    SingleSelectionPolicy,
    get_policy,
)
from .state import SelectionState

__all__ = [
    "TreeSelector",
    "SelectionState",
    "SelectionMode",
    "IdentifierConvention",
    "PartitionedSelection",
    "partition_selection",
    "SelectionPolicy",
    "SelectionPolicyType",
    "CascadeSelectionPolicy",
    "SingleSelectionPolicy",
    "MultipleSelectionPolicy",
    "get_policy",
]
