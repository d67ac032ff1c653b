"""In-memory LiveNode handles, built by hand or from an adapter's node table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(eq=False)
class FiberNode:
    """
    Minimal mutable LiveNode.

    Compared by identity so that the extractor's cycle guard sees the same
    handle when a link points back into the tree.
    """

    name: str | None
    state: Any = None
    props: Any = None
    child: FiberNode | None = None
    sibling: FiberNode | None = None
    host: Any = None  # descriptor of the nearest host element

    @classmethod
    def with_children(
        cls,
        name: str | None,
        children: Iterable[FiberNode] = (),
        *,
        state: Any = None,
        props: Any = None,
        host: Any = None,
    ) -> FiberNode:
        """Build a node whose child/sibling links follow the given child order."""
        node = cls(name=name, state=state, props=props, host=host)
        link_children(node, list(children))
        return node


def link_children(parent: FiberNode, children: list[FiberNode]) -> None:
    """Point parent.child at the first child and chain the rest through sibling."""
    parent.child = children[0] if children else None
    for prev, nxt in zip(children, children[1:]):
        prev.sibling = nxt


def nodes_from_table(table: dict[str, Any] | None) -> FiberNode | None:
    """
    Turn a flat node table into linked FiberNode handles.

    Table shape: ``{"root": id, "nodes": {id: {"name", "state", "props",
    "host", "child", "sibling"}}}`` where child/sibling hold ids or None. Every id
    maps to one FiberNode, so repeated ids yield the same handle. Links to
    unknown ids are dropped.
    """
    if not table:
        return None
    raw_nodes: dict[str, dict[str, Any]] = table.get("nodes") or {}
    root_id = table.get("root")
    if root_id is None or str(root_id) not in raw_nodes:
        return None

    handles: dict[str, FiberNode] = {
        str(node_id): FiberNode(
            name=raw.get("name"),
            state=raw.get("state"),
            props=raw.get("props"),
            host=raw.get("host"),
        )
        for node_id, raw in raw_nodes.items()
    }
    for node_id, raw in raw_nodes.items():
        node = handles[str(node_id)]
        node.child = _resolve(handles, raw.get("child"))
        node.sibling = _resolve(handles, raw.get("sibling"))

    return handles[str(root_id)]


def _resolve(handles: dict[str, FiberNode], node_id: Any) -> FiberNode | None:
    if node_id is None:
        return None
    return handles.get(str(node_id))
