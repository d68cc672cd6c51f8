"""Selection state owned by a tree selector"""

from typing import Iterable, Set

import pydantic as pd


class SelectionState(pd.BaseModel):
    """
    Selected and expanded node ids of one mounted tree widget.

    The two sets are independent: expanding a node never selects it and
    selecting a node never expands it.
    """

    model_config = pd.ConfigDict(validate_assignment=True)

    selected_ids: Set[str] = pd.Field(default_factory=set)
    expanded_ids: Set[str] = pd.Field(default_factory=set)

    @classmethod
    def seeded(
        cls, default_selected_ids: Iterable[str] = (), default_expanded_ids: Iterable[str] = ()
    ) -> "SelectionState":
        """State seeded from the caller's default id lists."""
        return cls(selected_ids=set(default_selected_ids), expanded_ids=set(default_expanded_ids))

    def replace_selection(self, node_ids: Iterable[str]) -> None:
        """Swap the whole selection for ``node_ids``."""
        self.selected_ids = set(node_ids)

    def expand(self, node_ids: Iterable[str]) -> None:
        """Add ``node_ids`` to the expanded set."""
        self.expanded_ids.update(node_ids)

    def collapse(self, node_id: str) -> None:
        """Remove one id from the expanded set."""
        self.expanded_ids.discard(node_id)

    def replace_expansion(self, node_ids: Iterable[str]) -> None:
        """Swap the whole expanded set for ``node_ids``."""
        self.expanded_ids = set(node_ids)
