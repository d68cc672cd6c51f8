import pydantic as pd
import pytest

from cascade_tree.component.tree import TreeNode, as_forest
from cascade_tree.exceptions import CascadeTreeValueError


def test_node_defaults():
    node = TreeNode(id="leaf")
    assert node.children == []
    assert node.label == ""
    assert node.data is None
    assert node.is_leaf
    assert node.display_label == "leaf"


def test_node_absent_children_and_label():
    node = TreeNode.from_dict({"id": "x", "label": None, "children": None, "name": "Name"})
    assert node.children == []
    assert node.display_label == "Name"


def test_node_int_id_is_coerced():
    node = TreeNode.from_dict({"id": 42, "children": [{"id": 7}]})
    assert node.id == "42"
    assert node.children[0].id == "7"


def test_node_keeps_opaque_payload():
    payload = {"_id": "1", "code": "phones", "name": {"tr": "Telefon", "en": "Phone"}}
    node = TreeNode(id="category_1", label="Phones", data=payload)
    assert node.data is payload


def test_node_is_frozen():
    node = TreeNode(id="x", label="X")
    with pytest.raises(pd.ValidationError):
        node.label = "Y"


def test_node_ignores_unknown_keys():
    node = TreeNode.from_dict({"id": "x", "parentId": "y", "icon": "folder"})
    assert node.id == "x"


def test_as_forest_variants():
    node = TreeNode(id="x")
    assert as_forest(None) == []
    assert as_forest(node) == [node]
    assert as_forest({"id": "y"})[0].id == "y"
    assert [n.id for n in as_forest([node, {"id": "z"}])] == ["x", "z"]


def test_as_forest_rejects_invalid_nodes():
    with pytest.raises(CascadeTreeValueError):
        as_forest([{"label": "no id"}])
    with pytest.raises(CascadeTreeValueError):
        as_forest(["just-a-string"])
