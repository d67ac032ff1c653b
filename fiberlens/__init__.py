from fiberlens.core.lens import FiberLens
from fiberlens.core.types import (
    ANONYMOUS,
    DiffEntry,
    DiffKind,
    LiveNode,
    NodeData,
    RenderedLine,
    Snapshot,
)
from fiberlens.differ.tree_diff import compare_values, diff_trees
from fiberlens.extractors.live import FiberNode
from fiberlens.extractors.react import ReactFiberReader
from fiberlens.extractors.sanitizer import Sanitizer
from fiberlens.extractors.tree import TreeExtractor, extract_tree, find_component, fragment_members
from fiberlens.formatter.renderer import TreeRenderer, render_tree
from fiberlens.formatter.serializer import CircularSafeSerializer
from fiberlens.formatter.sink import BufferSink, ConsoleSink, Sink

__all__ = [
    "FiberLens",
    "ANONYMOUS",
    "DiffEntry",
    "DiffKind",
    "LiveNode",
    "NodeData",
    "RenderedLine",
    "Snapshot",
    # Extraction
    "FiberNode",
    "ReactFiberReader",
    "Sanitizer",
    "TreeExtractor",
    "extract_tree",
    "find_component",
    "fragment_members",
    # Diff / output
    "compare_values",
    "diff_trees",
    "TreeRenderer",
    "render_tree",
    "CircularSafeSerializer",
    "BufferSink",
    "ConsoleSink",
    "Sink",
]
