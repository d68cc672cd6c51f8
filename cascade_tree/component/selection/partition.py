"""
Selection modes and the category/family identifier convention
"""

from enum import Enum
from typing import Iterable, List, NamedTuple

import pydantic as pd

from cascade_tree.exceptions import CascadeTreeConfigError, CascadeTreeValueError
from cascade_tree.user_config import (
    DEFAULT_CATEGORY_PREFIX,
    DEFAULT_FAMILY_PREFIX,
    UserConfig,
)


class SelectionMode(str, Enum):
    """What kind of ids a selector holds"""

    UNIFIED = "unified"
    CATEGORY_ONLY = "category-only"
    FAMILY_ONLY = "family-only"

    @classmethod
    def parse(cls, value) -> "SelectionMode":
        """Accept a SelectionMode or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as error:
            choices = ", ".join(mode.value for mode in cls)
            raise CascadeTreeValueError(
                f"Unknown selection mode {value!r}, expected one of: {choices}"
            ) from error


class IdentifierConvention(pd.BaseModel):
    """
    Prefixes marking category and family ids in a unified tree.

    The prefix is an agreement between the caller building the tree and the
    selector consuming it; nothing in the tree enforces it.
    """

    model_config = pd.ConfigDict(frozen=True)

    category_prefix: str = DEFAULT_CATEGORY_PREFIX
    family_prefix: str = DEFAULT_FAMILY_PREFIX

    @pd.model_validator(mode="after")
    def _distinct_prefixes(self):
        if not self.category_prefix or not self.family_prefix:
            raise ValueError("category and family prefixes must not be empty")
        if self.category_prefix == self.family_prefix:
            raise ValueError("category and family prefixes must differ")
        return self

    @classmethod
    def from_config(cls, config=None) -> "IdentifierConvention":
        """Convention from the user config (``[selector]`` section)."""
        config = config or UserConfig
        try:
            return cls(
                category_prefix=config.category_prefix, family_prefix=config.family_prefix
            )
        except pd.ValidationError as error:
            raise CascadeTreeConfigError(
                f"Invalid identifier prefixes in config: {error}"
            ) from error

    def category_id(self, raw_id: str) -> str:
        """Tag a raw category id."""
        return f"{self.category_prefix}{raw_id}"

    def family_id(self, raw_id: str) -> str:
        """Tag a raw family id."""
        return f"{self.family_prefix}{raw_id}"


class PartitionedSelection(NamedTuple):
    """Raw category ids and raw family ids of a unified selection."""

    category_ids: List[str]
    family_ids: List[str]


def partition_selection(
    node_ids: Iterable[str], convention: IdentifierConvention = None
) -> PartitionedSelection:
    """
    Split tagged ids into raw category ids and raw family ids.

    The leading prefix is stripped once; ids with neither prefix belong to
    neither list. Input order is preserved.

    >>> partition_selection(["category_A", "family_B", "category_C"])
    PartitionedSelection(category_ids=['A', 'C'], family_ids=['B'])
    """
    convention = convention or IdentifierConvention()
    category_ids, family_ids = [], []
    for node_id in node_ids:
        if node_id.startswith(convention.category_prefix):
            category_ids.append(node_id[len(convention.category_prefix) :])
        elif node_id.startswith(convention.family_prefix):
            family_ids.append(node_id[len(convention.family_prefix) :])
    return PartitionedSelection(category_ids, family_ids)
