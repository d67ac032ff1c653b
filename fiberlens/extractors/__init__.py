from fiberlens.extractors.live import FiberNode, link_children, nodes_from_table
from fiberlens.extractors.react import ReactFiberReader
from fiberlens.extractors.sanitizer import Sanitizer, sanitize_props, sanitize_state
from fiberlens.extractors.tree import TreeExtractor, extract_tree, find_component, fragment_members

__all__ = [
    "FiberNode",
    "ReactFiberReader",
    "Sanitizer",
    "TreeExtractor",
    "extract_tree",
    "find_component",
    "fragment_members",
    "link_children",
    "nodes_from_table",
    "sanitize_props",
    "sanitize_state",
]
