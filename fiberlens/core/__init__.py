from fiberlens.core.types import (
    ANONYMOUS,
    DiffEntry,
    DiffKind,
    LiveNode,
    NodeData,
    RenderedLine,
    Snapshot,
)

__all__ = [
    "ANONYMOUS",
    "DiffEntry",
    "DiffKind",
    "LiveNode",
    "NodeData",
    "RenderedLine",
    "Snapshot",
]
