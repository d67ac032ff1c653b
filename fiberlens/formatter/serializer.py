"""Cycle-safe JSON encoding for arbitrary payloads."""

from __future__ import annotations

import json
from typing import Any

_OMITTED = object()


class CircularSafeSerializer:
    """
    Encodes any value as JSON text, always terminating.

    A container met a second time within one encode() call is omitted: the
    key is dropped from a dict, or written as null inside a list. Callables
    are omitted the same way. Other values json can't handle use str().
    """

    def __init__(self, *, indent: int | None = None, sort_keys: bool = False) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def encode(self, value: Any) -> str:
        pruned = self._prune(value, set())
        if pruned is _OMITTED:
            pruned = None
        return json.dumps(
            pruned,
            indent=self.indent,
            sort_keys=self.sort_keys,
            ensure_ascii=False,
            default=str,
        )

    def _prune(self, value: Any, seen: set[int]) -> Any:
        if callable(value):
            return _OMITTED
        if not isinstance(value, (dict, list, tuple, set, frozenset)):
            return value
        if id(value) in seen:
            return _OMITTED
        seen.add(id(value))

        if isinstance(value, dict):
            result: dict[str, Any] = {}
            for key, item in value.items():
                pruned = self._prune(item, seen)
                if pruned is not _OMITTED:
                    result[str(key)] = pruned
            return result

        items = [self._prune(item, seen) for item in value]
        return [None if item is _OMITTED else item for item in items]


_default = CircularSafeSerializer()


def encode(value: Any) -> str:
    """Compact cycle-safe JSON encoding with the default settings."""
    return _default.encode(value)
