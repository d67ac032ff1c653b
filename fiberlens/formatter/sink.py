"""Sinks — destinations for rendered lines."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Iterable, TextIO

from fiberlens.core.types import RenderedLine
from fiberlens.formatter.serializer import CircularSafeSerializer


class Sink(ABC):
    """Accepts one line at a time with an optional style hint and payload."""

    @abstractmethod
    def emit(self, line: str, style: str | None = None, payload: Any = None) -> None: ...


class ConsoleSink(Sink):
    """
    Writes plain lines to a text stream (stdout by default).
    Style hints are ignored. Payloads are printed as JSON below the line
    when show_payloads is set.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        show_payloads: bool = False,
        serializer: CircularSafeSerializer | None = None,
    ) -> None:
        self._stream = stream
        self.show_payloads = show_payloads
        self._serializer = serializer or CircularSafeSerializer(indent=2)

    def emit(self, line: str, style: str | None = None, payload: Any = None) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        if self.show_payloads and payload is not None:
            stream.write(self._serializer.encode(payload) + "\n")


class BufferSink(Sink):
    """Keeps every emitted line in memory, e.g. for test assertions."""

    def __init__(self) -> None:
        self.lines: list[RenderedLine] = []

    def emit(self, line: str, style: str | None = None, payload: Any = None) -> None:
        self.lines.append(RenderedLine(text=line, style=style, payload=payload))

    @property
    def texts(self) -> list[str]:
        return [line.text for line in self.lines]

    def clear(self) -> None:
        self.lines.clear()


def emit_lines(lines: Iterable[RenderedLine], sink: Sink) -> None:
    for line in lines:
        sink.emit(line.text, line.style, line.payload)
