import pytest

from cascade_tree.component.selection import (
    IdentifierConvention,
    SelectionMode,
    SelectionPolicyType,
    TreeSelector,
)
from cascade_tree.component.tree import all_node_ids, descendant_ids, flatten
from cascade_tree.exceptions import CascadeTreeValueError


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, ids):
        self.calls.append(list(ids))

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def recorders():
    return {
        "on_selection_change": Recorder(),
        "on_category_selection_change": Recorder(),
        "on_family_selection_change": Recorder(),
    }


def _selector(tree, mode="unified", policy="cascade", **kwargs):
    return TreeSelector(tree, mode=mode, policy=policy, convention=IdentifierConvention(), **kwargs)


def test_scenario_cascade(scenario_tree):
    selector = _selector(scenario_tree, mode="category-only")
    assert set(selector.set_selected("A", True)) == {"A", "A1", "A2"}
    assert set(selector.set_selected("A1", False)) == {"A", "A2"}
    assert set(selector.set_selected("B", True)) == {"A", "A2", "B"}
    assert selector.clear_all() == []
    assert selector.state.selected_ids == set()


def test_scenario_radio():
    tree = [{"id": "Root", "children": [{"id": "A"}, {"id": "B"}]}]
    selector = _selector(tree, mode="category-only", policy="single")
    assert selector.set_selected("A", True) == ["A"]
    assert selector.set_selected("B", True) == ["B"]
    assert selector.set_selected("B", True) == []


def test_cascade_selects_exactly_the_subtree(deep_tree):
    flattened = flatten(deep_tree)
    for node_id in flattened.ids:
        selector = _selector(deep_tree, default_selected_ids=["c"])
        selector.set_selected(node_id, True)
        assert selector.state.selected_ids == {node_id, "c"} | descendant_ids(node_id, flattened)


def test_point_deselect_keeps_descendants(deep_tree):
    selector = _selector(deep_tree)
    selector.set_selected("a", True)
    selector.set_selected("a", False)
    assert selector.state.selected_ids == {"a1", "a1x", "a1y", "a2"}


def test_idempotence(deep_tree):
    selector = _selector(deep_tree)
    once = selector.set_selected("a", True)
    assert selector.set_selected("a", True) == once
    once = selector.set_selected("a1", False)
    assert selector.set_selected("a1", False) == once


def test_selected_ids_follow_tree_order(deep_tree):
    selector = _selector(deep_tree, default_selected_ids=["zz-stale", "c"])
    selector.set_selected("a1", True)
    assert selector.selected_ids == ["a1", "a1x", "a1y", "c", "zz-stale"]


def test_unified_callbacks(unified_tree, recorders):
    selector = _selector(unified_tree, **recorders)
    selector.set_selected("category_A", True)
    assert recorders["on_selection_change"].last == ["category_A", "category_C", "family_B"]
    assert recorders["on_category_selection_change"].last == ["A", "C"]
    assert recorders["on_family_selection_change"].last == ["B"]

    selector.set_selected("untagged", True)
    assert "untagged" in recorders["on_selection_change"].last
    assert recorders["on_category_selection_change"].last == ["A", "C"]

    selector.clear_all()
    assert recorders["on_selection_change"].last == []
    assert recorders["on_category_selection_change"].last == []
    assert recorders["on_family_selection_change"].last == []


def test_callbacks_report_complete_sets(unified_tree, recorders):
    selector = _selector(unified_tree, **recorders)
    selector.set_selected("family_D", True)
    selector.set_selected("category_C", True)
    assert recorders["on_family_selection_change"].last == ["B", "D"]
    assert len(recorders["on_selection_change"].calls) == 2


@pytest.mark.parametrize("mode", ["category-only", "family-only"])
def test_typed_callbacks_only_in_unified_mode(unified_tree, recorders, mode):
    selector = _selector(unified_tree, mode=mode, **recorders)
    selector.set_selected("category_A", True)
    selector.clear_all()
    assert len(recorders["on_selection_change"].calls) == 2
    assert recorders["on_category_selection_change"].calls == []
    assert recorders["on_family_selection_change"].calls == []


def test_no_callback_on_construction(scenario_tree, recorders):
    _selector(scenario_tree, default_selected_ids=["A"], **recorders)
    assert recorders["on_selection_change"].calls == []


def test_partition_of_current_selection(unified_tree):
    selector = _selector(unified_tree)
    selector.set_selected("category_C", True)
    assert selector.partition() == (["C"], ["B"])


def test_stale_ids_do_not_raise(scenario_tree):
    selector = _selector(scenario_tree)
    assert selector.set_selected("gone", True) == ["gone"]
    assert selector.set_selected("gone", False) == []
    assert selector.set_selected("gone", False) == []
    selector.set_expanded("gone", True)
    assert selector.reveal("gone") == []


def test_selection_ignores_expansion(scenario_tree):
    selector = _selector(scenario_tree)
    selector.set_selected("A1", True)
    assert selector.is_selected("A1")
    assert selector.state.expanded_ids == set()


def test_toggle(scenario_tree):
    selector = _selector(scenario_tree)
    selector.toggle("A")
    assert selector.selected_count == 3
    selector.toggle("A")
    assert selector.selected_ids == ["A1", "A2"]


def test_set_selected_with_new_tree(scenario_tree):
    selector = _selector([])
    assert set(selector.set_selected("A", True, scenario_tree)) == {"A", "A1", "A2"}
    assert selector.tree == scenario_tree


def test_defaults_seed_state(scenario_tree):
    selector = _selector(
        scenario_tree, default_selected_ids=["A1"], default_expanded_ids=["Root", "A"]
    )
    assert selector.selected_ids == ["A1"]
    assert selector.expanded_ids == ["Root", "A"]


def test_set_expanded(scenario_tree):
    selector = _selector(scenario_tree)
    selector.set_expanded("A", True)
    selector.set_expanded("A", True)
    assert selector.is_expanded("A")
    selector.set_expanded("A", False)
    assert not selector.is_expanded("A")
    selector.toggle_expanded("Root")
    assert selector.expanded_ids == ["Root"]
    assert selector.selected_ids == []


def test_clear_all_keeps_expansion(scenario_tree):
    selector = _selector(scenario_tree, default_expanded_ids=["A"])
    selector.set_selected("Root", True)
    selector.clear_all()
    assert selector.expanded_ids == ["A"]


def test_expand_all_follows_tree_changes(scenario_tree, deep_tree):
    selector = _selector(scenario_tree, expand_all=True)
    assert selector.expanded_ids == all_node_ids(scenario_tree)
    selector.set_tree(deep_tree)
    assert selector.expanded_ids == all_node_ids(deep_tree)


def test_set_tree_keeps_selection(scenario_tree, deep_tree):
    selector = _selector(scenario_tree, default_expanded_ids=["A"])
    selector.set_selected("A", True)
    selector.set_tree(deep_tree)
    assert selector.state.selected_ids == {"A", "A1", "A2"}
    assert selector.state.expanded_ids == {"A"}


def test_toggle_expand_all(scenario_tree):
    selector = _selector(scenario_tree)
    selector.toggle_expand_all()
    assert selector.expanded_ids == ["Root", "A", "A1", "A2", "B"]
    selector.toggle_expand_all()
    assert selector.expanded_ids == []


def test_reveal_expands_ancestors(deep_tree):
    selector = _selector(deep_tree, default_selected_ids=["a1x"])
    assert selector.reveal("a1x") == ["r1", "a", "a1"]
    assert selector.state.expanded_ids == {"r1", "a", "a1"}
    assert not selector.is_expanded("a1x")


def test_scroll_target(scenario_tree):
    assert _selector(scenario_tree, default_selected_ids=["A", "B"]).scroll_target("A1") == "B"
    assert _selector(scenario_tree).scroll_target("A1") == "A1"
    assert _selector(scenario_tree).scroll_target() is None


def test_mode_and_policy_parsing(scenario_tree):
    selector = _selector(scenario_tree, mode=SelectionMode.FAMILY_ONLY, policy="multiple")
    assert selector.mode is SelectionMode.FAMILY_ONLY
    assert selector.policy.policy_type is SelectionPolicyType.MULTIPLE
    with pytest.raises(CascadeTreeValueError):
        _selector(scenario_tree, mode="everything")
    with pytest.raises(CascadeTreeValueError):
        _selector(scenario_tree, policy="radio")


def test_repr(scenario_tree):
    selector = _selector(scenario_tree, default_selected_ids=["A"])
    assert repr(selector) == "TreeSelector(mode=unified, policy=cascade, 1 selected, 0 expanded)"


def test_duplicate_ids_are_emitted_once(recorders):
    tree = [{"id": "R", "children": [{"id": "X"}, {"id": "Y", "children": [{"id": "X"}]}]}]
    selector = _selector(tree, **recorders)
    assert selector.set_selected("R", True) == ["R", "X", "Y"]
    assert recorders["on_selection_change"].last == ["R", "X", "Y"]
    assert selector.selected_ids == ["R", "X", "Y"]
