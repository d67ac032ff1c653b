"""Tests for the differ layer: diff_trees and compare_values."""

import pytest

from fiberlens.core.types import DiffKind, Snapshot
from fiberlens.differ.tree_diff import compare_values, diff_trees, format_value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_snap(component, state=None, props=None, children=None) -> Snapshot:
    return Snapshot(
        component=component,
        state=state if state is not None else {},
        props=props if props is not None else {},
        children=tuple(children or []),
    )


def deep_snap(depth: int, leaf_state=None) -> Snapshot:
    """Single-child chain Level0 -> ... -> Level{depth-1}, built bottom-up."""
    node = make_snap(f"Level{depth - 1}", state=leaf_state)
    for level in reversed(range(depth - 1)):
        node = make_snap(f"Level{level}", children=[node])
    return node


def sample_tree() -> Snapshot:
    return make_snap("App", state={"user": {"name": "kim", "tags": ["a", "b"]}}, children=[
        make_snap("Header", props={"title": "Home"}),
        make_snap("Counter", state={"count": 1}, props={"step": 1}),
    ])


# ---------------------------------------------------------------------------
# compare_values
# ---------------------------------------------------------------------------

class TestCompareValues:
    def test_equal_primitives(self):
        assert compare_values(1, 1, ".state") == []

    def test_changed_primitive(self):
        assert compare_values({"count": 1}, {"count": 2}, ".state") == [".state.count: 1 !== 2"]

    def test_missing_keys_attributed_to_side(self):
        diffs = compare_values({"a": 1}, {"b": 2}, ".props")
        assert diffs == [".props.a: key missing in B", ".props.b: key missing in A"]

    def test_keys_of_a_sorted_first(self):
        diffs = compare_values({"z": 1, "a": 1}, {"m": 1}, "")
        assert diffs == [".a: key missing in B", ".z: key missing in B", ".m: key missing in A"]

    def test_nested_objects(self):
        a = {"user": {"name": "kim", "age": 30}}
        b = {"user": {"name": "lee", "age": 30}}
        assert compare_values(a, b, ".state") == [".state.user.name: kim !== lee"]

    def test_list_indices_as_keys(self):
        diffs = compare_values({"items": [1, 2]}, {"items": [1, 3, 4]}, ".state")
        assert diffs == [".state.items.1: 2 !== 3", ".state.items.2: key missing in A"]

    def test_null_vs_object(self):
        assert compare_values({"v": None}, {"v": {}}, "") == [".v: null !== {}"]

    def test_bool_is_not_number(self):
        assert compare_values({"v": True}, {"v": 1}, "") == [".v: true !== 1"]

    def test_int_equals_float(self):
        assert compare_values({"v": 1}, {"v": 1.0}, "") == []

    def test_cyclic_values_terminate(self):
        a = {"n": 1}
        a["self"] = a
        b = {"n": 2}
        b["self"] = b
        assert compare_values(a, b, "") == [".n: 1 !== 2"]

    def test_symmetric_content(self):
        a = {"x": 1, "only_a": True, "nested": {"k": "v"}}
        b = {"x": 2, "only_b": False, "nested": {"k": "w"}}
        forward = compare_values(a, b, "")
        backward = compare_values(b, a, "")
        assert len(forward) == len(backward)
        assert ".only_a: key missing in B" in forward
        assert ".only_a: key missing in A" in backward
        assert ".only_b: key missing in A" in forward
        assert ".only_b: key missing in B" in backward


class TestFormatValue:
    @pytest.mark.parametrize("value, text", [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        ("abc", "abc"),
        (3, "3"),
        ([1, 2], "[1, 2]"),
    ])
    def test_format(self, value, text):
        assert format_value(value) == text


# ---------------------------------------------------------------------------
# diff_trees
# ---------------------------------------------------------------------------

class TestDiffTrees:
    def test_counter_scenario(self):
        a = make_snap("Counter", state={"count": 1})
        b = make_snap("Counter", state={"count": 2})
        diffs = diff_trees(a, b)
        assert len(diffs) == 1
        assert diffs[0].state_differences == (".state.count: 1 !== 2",)
        assert diffs[0].props_differences == ()
        assert diffs[0].path == "/Counter"
        assert diffs[0].kind is DiffKind.CHANGED

    def test_identical_trees(self):
        assert diff_trees(sample_tree(), sample_tree()) == []

    def test_same_tree_against_itself(self):
        tree = sample_tree()
        assert diff_trees(tree, tree) == []

    def test_child_paths(self):
        a = sample_tree()
        b = make_snap("App", state={"user": {"name": "kim", "tags": ["a", "b"]}}, children=[
            make_snap("Header", props={"title": "Home"}),
            make_snap("Counter", state={"count": 5}, props={"step": 1}),
        ])
        diffs = diff_trees(a, b)
        assert len(diffs) == 1
        assert diffs[0].path == "/App.children[1]/Counter"
        assert diffs[0].state_differences == ("/App.children[1].state.count: 1 !== 5",)
        assert diffs[0].current.state == {"count": 1}
        assert diffs[0].other.state == {"count": 5}

    def test_pre_order_and_descendants_visited(self):
        a = make_snap("App", state={"v": 1}, children=[make_snap("Child", props={"p": 1})])
        b = make_snap("App", state={"v": 2}, children=[make_snap("Child", props={"p": 2})])
        diffs = diff_trees(a, b)
        assert [d.path for d in diffs] == ["/App", "/App.children[0]/Child"]
        assert diffs[1].props_differences == ("/App.children[0].props.p: 1 !== 2",)

    def test_descendants_visited_without_parent_entry(self):
        a = make_snap("App", children=[make_snap("Child", state={"x": 1})])
        b = make_snap("App", children=[make_snap("Child", state={"x": 2})])
        diffs = diff_trees(a, b)
        assert [d.path for d in diffs] == ["/App.children[0]/Child"]

    def test_component_mismatch_stops_descent(self):
        a = make_snap("App", children=[make_snap("Login", children=[make_snap("Form", state={"a": 1})])])
        b = make_snap("App", children=[make_snap("Profile", children=[make_snap("Form", state={"a": 2})])])
        diffs = diff_trees(a, b)
        assert len(diffs) == 1
        assert diffs[0].kind is DiffKind.COMPONENT_MISMATCH
        assert diffs[0].note == "/App.children[0]: Login !== Profile"
        assert diffs[0].path == "/App.children[0]/Login"

    def test_missing_child_skipped(self):
        a = make_snap("App", children=[make_snap("A"), make_snap("B", state={"x": 1})])
        b = make_snap("App", children=[make_snap("A")])
        assert diff_trees(a, b) == []

    def test_missing_child_on_left_skipped(self):
        a = make_snap("App")
        b = make_snap("App", children=[make_snap("Extra")])
        assert diff_trees(a, b) == []

    def test_symmetric_labels(self):
        a = make_snap("Form", props={"label": "x"})
        b = make_snap("Form", props={"hint": "y"})
        forward = diff_trees(a, b)[0].props_differences
        backward = diff_trees(b, a)[0].props_differences
        assert set(forward) == {".props.label: key missing in B", ".props.hint: key missing in A"}
        assert set(backward) == {".props.label: key missing in A", ".props.hint: key missing in B"}

    def test_none_tree(self):
        assert diff_trees(None, sample_tree()) == []

    def test_deep_trees(self):
        a = deep_snap(2000, leaf_state={"count": 1})
        assert diff_trees(a, a) == []

        diffs = diff_trees(a, deep_snap(2000, leaf_state={"count": 2}))
        assert len(diffs) == 1
        assert diffs[0].path.endswith(".children[0]/Level1999")
        assert diffs[0].state_differences[0].endswith(".state.count: 1 !== 2")
