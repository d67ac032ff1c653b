"""TreeRenderer — draws a Snapshot tree as connector-drawn text lines."""

from __future__ import annotations

from typing import Any

from fiberlens.core.types import DiffEntry, DiffKind, RenderedLine, Snapshot, is_anonymous
from fiberlens.formatter.serializer import CircularSafeSerializer

_LAST = "└─ "
_TEE = "├─ "
_SPACE = "  "
_BAR = "| "
_ANNOTATION_INDENT = "    "
_NONE = "none"

# Router containers own no DOM of their own
_NO_HOST_COMPONENTS = frozenset({"Routes", "RenderedRoute"})


class TreeRenderer:
    """
    Renders a Snapshot as an indented tree, one RenderedLine per component.

    Anonymous nodes draw nothing; their children take the anonymous node's
    place (same depth, same prefix). When a DiffEntry path ends with
    ``/<component>``, annotation lines follow the component's line.

    Example:
        App
        ├─ Header
        | └─ Logo
        └─ Counter
            [current] state: {"count": 1} props: {}
            ...
    """

    def __init__(
        self,
        *,
        left_label: str = "current",
        right_label: str = "other",
        serializer: CircularSafeSerializer | None = None,
    ) -> None:
        self.left_label = left_label
        self.right_label = right_label
        self._serializer = serializer or CircularSafeSerializer()

    def render(
        self,
        root: Snapshot | None,
        diffs: list[DiffEntry] | None = None,
        *,
        show_hosts: bool = False,
    ) -> list[RenderedLine]:
        """
        Render `root` annotated with `diffs`. With show_hosts, a component
        line without a diff carries the component's host element descriptor
        as payload (router containers excepted).
        """
        lines: list[RenderedLine] = []
        if root is None:
            return lines
        diffs = diffs or []

        # (node, depth, is_last, prefix, path); children pushed in reverse
        stack: list[tuple[Snapshot, int, bool, str, str]] = [(root, 0, True, "", "")]
        while stack:
            node, depth, is_last, prefix, path = stack.pop()
            node_path = f"{path}/{node.component}"

            if is_anonymous(node.component):
                child_depth = depth
                child_prefix = prefix
            else:
                child_depth = depth + 1
                child_prefix = prefix
                connector = ""
                if depth > 0:
                    connector = _LAST if is_last else _TEE
                    child_prefix = prefix + (_SPACE if is_last else _BAR)

                entry = _find_entry(diffs, node.component, node_path)
                if entry:
                    payload = self._payload(entry)
                elif show_hosts and node.component not in _NO_HOST_COMPONENTS:
                    payload = node.host
                else:
                    payload = None
                lines.append(RenderedLine(
                    text=f"{prefix}{connector}{node.component}",
                    style="component",
                    payload=payload,
                ))
                if entry:
                    lines.extend(self._annotate(entry, child_prefix + _ANNOTATION_INDENT))

            last_index = len(node.children) - 1
            for i in reversed(range(len(node.children))):
                stack.append((
                    node.children[i],
                    child_depth,
                    i == last_index,
                    child_prefix,
                    f"{node_path}.children[{i}]",
                ))
        return lines

    # ------------------------------------------------------------------
    # Diff annotations
    # ------------------------------------------------------------------

    def _annotate(self, entry: DiffEntry, indent: str) -> list[RenderedLine]:
        encode = self._serializer.encode
        lines = [
            f"{indent}[{self.left_label}] state: {encode(entry.current.state)} props: {encode(entry.current.props)}",
            f"{indent}[{self.right_label}] state: {encode(entry.other.state)} props: {encode(entry.other.props)}",
        ]
        if entry.kind is DiffKind.COMPONENT_MISMATCH:
            lines.append(f"{indent}component mismatch: {entry.note}")
        else:
            lines += _difference_block(indent, "state differences", entry.state_differences)
            lines += _difference_block(indent, "props differences", entry.props_differences)
        return [RenderedLine(text=text, style="diff") for text in lines]

    def _payload(self, entry: DiffEntry) -> dict[str, Any]:
        payload: dict[str, Any] = {
            self.left_label: entry.current.to_dict(),
            self.right_label: entry.other.to_dict(),
        }
        if entry.kind is DiffKind.COMPONENT_MISMATCH:
            payload["component mismatch"] = entry.note
        else:
            payload["state differences"] = list(entry.state_differences) or [_NONE]
            payload["props differences"] = list(entry.props_differences) or [_NONE]
        return payload


def _find_entry(diffs: list[DiffEntry], component: str, node_path: str) -> DiffEntry | None:
    """First entry whose path ends with /<component>, preferring an exact path match."""
    candidates = [d for d in diffs if d.path.endswith(f"/{component}")]
    for entry in candidates:
        if entry.path == node_path:
            return entry
    return candidates[0] if candidates else None


def _difference_block(indent: str, title: str, differences: tuple[str, ...]) -> list[str]:
    if not differences:
        return [f"{indent}{title}: {_NONE}"]
    return [f"{indent}{title}:"] + [f"{indent}  - {d}" for d in differences]


def render_tree(
    root: Snapshot | None,
    diffs: list[DiffEntry] | None = None,
    left_label: str = "current",
    right_label: str = "other",
    show_hosts: bool = False,
) -> list[RenderedLine]:
    renderer = TreeRenderer(left_label=left_label, right_label=right_label)
    return renderer.render(root, diffs, show_hosts=show_hosts)
