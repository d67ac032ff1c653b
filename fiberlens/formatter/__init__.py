from fiberlens.formatter.renderer import TreeRenderer, render_tree
from fiberlens.formatter.serializer import CircularSafeSerializer, encode
from fiberlens.formatter.sink import BufferSink, ConsoleSink, Sink, emit_lines

__all__ = [
    "BufferSink",
    "CircularSafeSerializer",
    "ConsoleSink",
    "Sink",
    "TreeRenderer",
    "emit_lines",
    "encode",
    "render_tree",
]
