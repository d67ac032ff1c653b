"""FiberLens — main orchestrator class."""

from __future__ import annotations

import logging

from playwright.async_api import Page

from fiberlens.core.types import DiffEntry, LiveNode, RenderedLine, Snapshot
from fiberlens.differ.tree_diff import diff_trees
from fiberlens.extractors.react import ReactFiberReader
from fiberlens.extractors.sanitizer import Sanitizer
from fiberlens.extractors.tree import TreeExtractor, find_component
from fiberlens.formatter.renderer import TreeRenderer
from fiberlens.formatter.sink import ConsoleSink, Sink, emit_lines

logger = logging.getLogger(__name__)

NOT_FOUND_NOTICE = "component tree not found"


class FiberLens:
    """
    Captures component trees, compares them and reports the result.

    Usage:
        lens = FiberLens(left_label="alice", right_label="bob")
        mine = await lens.capture(page_a)
        theirs = await lens.capture(page_b)
        diffs = lens.report(mine, theirs)   # annotated tree → sink
    """

    def __init__(
        self,
        *,
        left_label: str = "current",
        right_label: str = "other",
        strict_cycles: bool = False,
        sink: Sink | None = None,
        reader: ReactFiberReader | None = None,
    ) -> None:
        self.left_label = left_label
        self.right_label = right_label

        self._sink = sink or ConsoleSink()
        self._reader = reader or ReactFiberReader()
        self._extractor = TreeExtractor(Sanitizer(strict=strict_cycles))
        self._renderer = TreeRenderer(left_label=left_label, right_label=right_label)

    def snapshot(self, root: LiveNode | None) -> Snapshot | None:
        """Extract a Snapshot from a live tree handle (None when there is no root)."""
        return self._extractor.extract(root)

    async def capture(self, page: Page, *, root_component: str | None = None) -> Snapshot | None:
        """
        Read the React fiber tree of a Playwright page and extract it.
        With root_component (e.g. "App"), extraction starts at the first
        component of that name on the child chain instead of the host root.
        """
        root = await self._reader.read(page)
        if root is not None and root_component:
            root = find_component(root, root_component)
        tree = self.snapshot(root)
        if tree is not None:
            logger.debug("Captured %d components from %s", tree.node_count, page.url)
        return tree

    def compare(self, current: Snapshot | None, other: Snapshot | None) -> list[DiffEntry]:
        if current is None or other is None:
            return []
        return diff_trees(current, other)

    def draw(self, tree: Snapshot | None, *, show_hosts: bool = True) -> list[RenderedLine]:
        """
        Render a tree without annotations and emit it to the sink. Each
        component line carries its host element descriptor as payload.
        """
        if tree is None:
            self._not_found()
            return []
        lines = self._renderer.render(tree, show_hosts=show_hosts)
        emit_lines(lines, self._sink)
        return lines

    def report(self, current: Snapshot | None, other: Snapshot | None) -> list[DiffEntry]:
        """
        Diff `current` against `other`, emit `current` annotated with the
        differences and return them.
        """
        if current is None:
            self._not_found()
            return []

        diffs = self.compare(current, other)
        logger.info(
            "%d of %d components differ between %s and %s",
            len(diffs), current.node_count, self.left_label, self.right_label,
        )
        emit_lines(self._renderer.render(current, diffs), self._sink)
        return diffs

    def _not_found(self) -> None:
        logger.info(NOT_FOUND_NOTICE)
        self._sink.emit(NOT_FOUND_NOTICE, "notice")
