"""TreeExtractor — walks a live component tree into an immutable Snapshot tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from fiberlens.core.types import ANONYMOUS, LiveNode, Snapshot, is_anonymous
from fiberlens.extractors.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

FRAGMENT_LABEL = "<React.Fragment />"


@dataclass
class _Pending:
    """A materialized node whose children are still being collected."""

    component: str
    state: Any
    props: Any
    host: Any
    children: list[_Pending] = field(default_factory=list)


class TreeExtractor:
    """
    Depth-first, pre-order walk over child/sibling links.

    Host wrapper nodes (``name is None``) are invisible: their children are
    spliced into the parent's children at the wrapper's position. Every
    handle is visited at most once per extract() call. The walk keeps its own
    stack, so tree depth is not bounded by the interpreter's recursion limit.
    """

    def __init__(self, sanitizer: Sanitizer | None = None) -> None:
        self._sanitizer = sanitizer or Sanitizer()

    def extract(self, root: LiveNode | None) -> Snapshot | None:
        if root is None:
            return None

        top: list[_Pending] = []
        created = self._collect(root, top)
        nodes = _freeze(created, top)
        if not nodes:
            return None

        # A wrapper root with several children still needs a single root
        tree = nodes[0] if len(nodes) == 1 else Snapshot(component=ANONYMOUS, children=tuple(nodes))

        if is_anonymous(tree.component) and len(tree.children) == 1:
            return tree.children[0]
        return tree

    def _collect(self, root: LiveNode, top: list[_Pending]) -> list[_Pending]:
        """Visit every reachable handle once; return pending nodes in creation order."""
        seen: set[int] = set()
        created: list[_Pending] = []
        # (node, list its snapshot joins, whether to continue along node.sibling)
        stack: list[tuple[LiveNode, list[_Pending], bool]] = [(root, top, False)]

        while stack:
            node, target, follow_sibling = stack.pop()
            if id(node) in seen:
                # The rest of this sibling chain has been walked already
                logger.debug("Live node %r visited twice, skipping branch", node.name)
                continue
            seen.add(id(node))

            if node.name is None:
                child_target = target
            else:
                pending = _Pending(
                    component=node.name,
                    state=self._sanitizer.sanitize_state(_or_empty(node.state)),
                    props=self._sanitizer.sanitize_props(_or_empty(node.props)),
                    host=getattr(node, "host", None),
                )
                target.append(pending)
                created.append(pending)
                child_target = pending.children

            # Sibling goes under the child so the whole child subtree comes first
            if follow_sibling and node.sibling is not None:
                stack.append((node.sibling, target, True))
            if node.child is not None:
                stack.append((node.child, child_target, True))

        return created


def _freeze(created: list[_Pending], top: list[_Pending]) -> list[Snapshot]:
    # Children are always created after their parent, so build in reverse
    built: dict[int, Snapshot] = {}
    for pending in reversed(created):
        built[id(pending)] = Snapshot(
            component=pending.component,
            state=pending.state,
            props=pending.props,
            children=tuple(built[id(c)] for c in pending.children),
            host=pending.host,
        )
    return [built[id(p)] for p in top]


def _or_empty(value):
    return {} if value is None else value


def extract_tree(root: LiveNode | None) -> Snapshot | None:
    """Extract a Snapshot tree with the default sanitizer."""
    return TreeExtractor().extract(root)


def find_component(root: LiveNode | None, name: str) -> LiveNode | None:
    """
    Follow first-child links from `root` to the first node called `name`.
    Falls back to `root` when no such node is on the chain.
    """
    seen: set[int] = set()
    node = root
    while node is not None and id(node) not in seen:
        if node.name == name:
            return node
        seen.add(id(node))
        node = node.child
    return root


def fragment_members(first: LiveNode | None) -> list[Any]:
    """
    List a fragment's members: FRAGMENT_LABEL, then every node on the
    sibling chain starting at `first`. Components contribute their name,
    host nodes their host element descriptor.
    """
    members: list[Any] = [FRAGMENT_LABEL]
    seen: set[int] = set()
    node = first
    while node is not None and id(node) not in seen:
        seen.add(id(node))
        members.append(node.name if node.name is not None else getattr(node, "host", None))
        node = node.sibling
    return members
