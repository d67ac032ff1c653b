"""Shared types and dataclasses for fiberlens."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

# Name given to components that exist in the tree but carry no user-visible name
ANONYMOUS = "Anonymous"


def is_anonymous(component: str | None) -> bool:
    return not component or component == ANONYMOUS


class LiveNode(Protocol):
    """
    Read-only handle into a host's live component tree.

    `name` is None for host/wrapper nodes. Children are reached through
    `child` and then that child's `sibling` chain.
    """

    @property
    def name(self) -> str | None: ...

    @property
    def state(self) -> Any: ...

    @property
    def props(self) -> Any: ...

    @property
    def child(self) -> LiveNode | None: ...

    @property
    def sibling(self) -> LiveNode | None: ...


@dataclass(frozen=True)
class Snapshot:
    """Immutable extracted view of one component and its subtree."""

    component: str
    state: Any = field(default_factory=dict)
    props: Any = field(default_factory=dict)
    children: tuple[Snapshot, ...] = ()
    host: Any = None  # nearest host element descriptor, when the adapter provides one

    def walk(self) -> list[Snapshot]:
        """Return all nodes as a flat list (depth-first, pre-order)."""
        result: list[Snapshot] = []
        stack = [self]
        while stack:
            node = stack.pop()
            result.append(node)
            stack.extend(reversed(node.children))
        return result

    @property
    def node_count(self) -> int:
        return len(self.walk())

    def to_dict(self) -> dict[str, Any]:
        # Children come after their parent in walk(), so build in reverse
        built: dict[int, dict[str, Any]] = {}
        for node in reversed(self.walk()):
            built[id(node)] = {
                "component": node.component,
                "state": node.state,
                "props": node.props,
                "children": [built[id(c)] for c in node.children],
                "host": node.host,
            }
        return built[id(self)]


@dataclass(frozen=True)
class NodeData:
    """Sanitized state/props of one side of a comparison."""

    state: Any
    props: Any

    def to_dict(self) -> dict[str, Any]:
        return {"state": self.state, "props": self.props}


class DiffKind(str, Enum):
    CHANGED = "changed"
    COMPONENT_MISMATCH = "component_mismatch"


@dataclass(frozen=True)
class DiffEntry:
    """Divergence found at one aligned position of two Snapshot trees."""

    path: str  # e.g. "/App.children[0]/Counter"
    current: NodeData
    other: NodeData
    state_differences: tuple[str, ...] = ()
    props_differences: tuple[str, ...] = ()
    kind: DiffKind = DiffKind.CHANGED
    note: str = ""  # "<path>: A !== B" for component mismatches


@dataclass(frozen=True)
class RenderedLine:
    """One line of rendered output plus optional style hint and structured payload."""

    text: str
    style: str | None = None  # "component", "diff", "notice"
    payload: Any = None
