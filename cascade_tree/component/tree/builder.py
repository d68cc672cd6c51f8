"""
builder.py - Build selectable forests from API records and files

Category and family endpoints return flat lists where each record points at
its parent, either by id or by an embedded parent object. This module turns
such lists into TreeNode forests the selector can consume.
"""

import json
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence

from cascade_tree.exceptions import CascadeTreeFileError, CascadeTreeValueError
from cascade_tree.log import log

from .node import TreeNode, as_forest

CATEGORY_PARENT_KEYS = ("parent", "parentCategory")
FAMILY_PARENT_KEYS = ("parentFamily", "parent")


def parent_reference(record: Dict[str, Any], parent_keys: Sequence[str]) -> Optional[str]:
    """
    Resolve the parent id of a record.

    The first non-empty key of ``parent_keys`` wins. A string value is the
    parent id itself; an object value contributes its ``id`` or ``_id``.
    """
    for key in parent_keys:
        value = record.get(key)
        if not value:
            continue
        if isinstance(value, dict):
            value = value.get("id") or value.get("_id")
            if not value:
                continue
        return str(value)
    return None


def build_forest(
    records: Iterable[Dict[str, Any]],
    id_key: str = "_id",
    parent_keys: Sequence[str] = ("parent",),
    label_key: str = "name",
    id_prefix: str = "",
) -> List[TreeNode]:
    """
    Build a forest from flat records.

    Parameters
    ----------
    records : Iterable[Dict[str, Any]]
        Flat records, each carrying its own id and an optional parent reference.
    id_key : str
        Key of the record id.
    parent_keys : Sequence[str]
        Keys tried in order to find the parent reference.
    label_key : str
        Key used as node label. Non-string values (localized objects) are left
        for the view to resolve and the label falls back to the id.
    id_prefix : str
        Prefix added to every node id, e.g. ``"category_"`` for unified trees.

    Returns
    -------
    List[TreeNode]
        Roots in record order. Records whose parent chain never reaches a root
        (missing parents, cycles) are dropped with a warning.
    """
    by_parent: Dict[Optional[str], List[Dict[str, Any]]] = defaultdict(list)
    known_ids = set()
    for record in records:
        if record.get(id_key) is None:
            raise CascadeTreeValueError(f"Record without '{id_key}': {record!r}")
        known_ids.add(str(record[id_key]))
        by_parent[parent_reference(record, parent_keys)].append(record)

    def _node(record: Dict[str, Any], seen: set) -> TreeNode:
        raw_id = str(record[id_key])
        seen.add(raw_id)
        label = record.get(label_key)
        return TreeNode(
            id=f"{id_prefix}{raw_id}",
            label=label if isinstance(label, str) else "",
            children=[
                _node(child, seen)
                for child in by_parent.get(raw_id, [])
                if str(child[id_key]) not in seen
            ],
            data=record,
        )

    reached = set()
    forest = [_node(record, reached) for record in by_parent.get(None, [])]

    dropped = known_ids - reached
    if dropped:
        log.warning(
            "Dropped %d record(s) not reachable from a root: %s",
            len(dropped),
            ", ".join(sorted(dropped)),
        )
    return forest


def build_category_forest(
    categories: Iterable[Dict[str, Any]], id_prefix: str = ""
) -> List[TreeNode]:
    """Category forest; ``parent`` with the legacy ``parentCategory`` fallback."""
    return build_forest(categories, parent_keys=CATEGORY_PARENT_KEYS, id_prefix=id_prefix)


def build_family_forest(families: Iterable[Dict[str, Any]], id_prefix: str = "") -> List[TreeNode]:
    """Family forest; ``parentFamily`` with ``parent`` as fallback."""
    return build_forest(families, parent_keys=FAMILY_PARENT_KEYS, id_prefix=id_prefix)


def build_unified_forest(
    categories: Iterable[Dict[str, Any]],
    families: Iterable[Dict[str, Any]],
    convention=None,
) -> List[TreeNode]:
    """
    Categories and families side by side, ids tagged with the unified prefixes.

    Parameters
    ----------
    categories, families : Iterable[Dict[str, Any]]
        Flat API records.
    convention : IdentifierConvention, optional
        Prefixes to use; defaults to the user configured convention.
    """
    # pylint: disable=import-outside-toplevel
    from cascade_tree.component.selection.partition import IdentifierConvention

    convention = convention or IdentifierConvention.from_config()
    return build_category_forest(
        categories, id_prefix=convention.category_prefix
    ) + build_family_forest(families, id_prefix=convention.family_prefix)


def load_forest(filepath: str) -> List[TreeNode]:
    """
    Load a forest from a JSON file.

    The file holds either a list of root nodes or a single root object, each
    node in the ``{"id", "label", "children"}`` layout.

    Raises
    ------
    CascadeTreeFileError
        If the file cannot be read or does not describe a forest.
    """
    try:
        with open(filepath, "r", encoding="utf-8") as file_handler:
            data = json.load(file_handler)
    except (OSError, json.JSONDecodeError) as error:
        raise CascadeTreeFileError(f"Could not load tree from {filepath}: {error}") from error

    if not isinstance(data, (list, dict)):
        raise CascadeTreeFileError(f"{filepath} must hold a node object or a list of nodes")
    try:
        return as_forest(data)
    except CascadeTreeValueError as error:
        raise CascadeTreeFileError(f"Invalid tree in {filepath}: {error}") from error
