"""Positional diff of two Snapshot trees plus a structural value differ."""

from __future__ import annotations

from typing import Any

from fiberlens.core.types import DiffEntry, DiffKind, NodeData, Snapshot
from fiberlens.formatter.serializer import encode


def diff_trees(tree_a: Snapshot | None, tree_b: Snapshot | None) -> list[DiffEntry]:
    """
    Diff two Snapshot trees, returning entries in pre-order.

    Nodes are aligned purely by position (same path, same child index).
    Once components diverge at a position, that branch is not descended.
    A position where one side has no child is skipped silently.
    """
    differences: list[DiffEntry] = []
    # Explicit stack; children are pushed in reverse to keep pre-order
    stack: list[tuple[Snapshot | None, Snapshot | None, str]] = [(tree_a, tree_b, "")]
    while stack:
        node_a, node_b, path = stack.pop()
        if node_a is None or node_b is None:
            continue
        entry = _compare_node(node_a, node_b, path)
        if entry is not None:
            differences.append(entry)
        if node_a.component != node_b.component:
            continue

        node_path = f"{path}/{node_a.component}"
        for i in reversed(range(max(len(node_a.children), len(node_b.children)))):
            stack.append((
                _child_at(node_a, i),
                _child_at(node_b, i),
                f"{node_path}.children[{i}]",
            ))
    return differences


def _compare_node(node_a: Snapshot, node_b: Snapshot, path: str) -> DiffEntry | None:
    node_path = f"{path}/{node_a.component}"
    current = NodeData(state=node_a.state, props=node_a.props)
    other = NodeData(state=node_b.state, props=node_b.props)

    if node_a.component != node_b.component:
        return DiffEntry(
            path=node_path,
            current=current,
            other=other,
            kind=DiffKind.COMPONENT_MISMATCH,
            note=f"{path}: {node_a.component} !== {node_b.component}",
        )

    state_differences = compare_values(node_a.state, node_b.state, f"{path}.state")
    props_differences = compare_values(node_a.props, node_b.props, f"{path}.props")

    if not state_differences and not props_differences:
        return None
    return DiffEntry(
        path=node_path,
        current=current,
        other=other,
        state_differences=tuple(state_differences),
        props_differences=tuple(props_differences),
    )


def _child_at(node: Snapshot, index: int) -> Snapshot | None:
    return node.children[index] if index < len(node.children) else None


def compare_values(value_a: Any, value_b: Any, path: str = "") -> list[str]:
    """
    Structurally compare two sanitized values.

    Returns lines like ``".state.count: 1 !== 2"`` or
    ``".props.label: key missing in B"``.
    """
    differences: list[str] = []
    _compare_values(value_a, value_b, path, set(), differences)
    return differences


def _compare_values(
    value_a: Any,
    value_b: Any,
    path: str,
    active: set[tuple[int, int]],
    differences: list[str],
) -> None:
    if not _is_container(value_a) or not _is_container(value_b):
        if not _values_equal(value_a, value_b):
            differences.append(f"{path}: {format_value(value_a)} !== {format_value(value_b)}")
        return

    # Sanitized values may still hold cyclic references
    pair = (id(value_a), id(value_b))
    if pair in active:
        return
    active.add(pair)

    entries_a = _entries(value_a)
    entries_b = _entries(value_b)
    keys_a = sorted(entries_a, key=str)
    keys_b = sorted(entries_b, key=str)
    all_keys = keys_a + [k for k in keys_b if k not in entries_a]

    for key in all_keys:
        key_path = f"{path}.{key}"
        if key not in entries_a:
            differences.append(f"{key_path}: key missing in A")
        elif key not in entries_b:
            differences.append(f"{key_path}: key missing in B")
        else:
            _compare_values(entries_a[key], entries_b[key], key_path, active, differences)

    active.discard(pair)


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _entries(value: dict | list | tuple) -> dict[Any, Any]:
    if isinstance(value, dict):
        return value
    return {str(i): item for i, item in enumerate(value)}


def _values_equal(value_a: Any, value_b: Any) -> bool:
    if isinstance(value_a, bool) or isinstance(value_b, bool):
        return type(value_a) is type(value_b) and value_a == value_b
    return value_a is value_b or value_a == value_b


def format_value(value: Any) -> str:
    """Render a value the way it reads in a difference line."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if _is_container(value):
        return encode(value)
    return str(value)
