"""Sanitizer — strips internal bookkeeping and callables from state/props."""

from __future__ import annotations

from typing import Any, Iterable

# Prefixes of framework-private keys
_PRIVATE_PREFIXES: tuple[str, ...] = ("_", "$$")

# Hook/effect bookkeeping on memoizedState (hook linked list + effect records)
STATE_BLOCKLIST = frozenset({
    "baseState", "baseQueue", "deps", "destroy", "create", "next",
    "_owner", "_store", "_source",
})

# Element metadata that leaks into memoizedProps
PROPS_BLOCKLIST = frozenset({
    "key", "type", "ref", "_owner", "_store", "_source",
})

# Substituted for repeat visits when Sanitizer(strict=True)
CYCLE_MARKER = "[Circular]"


class Sanitizer:
    """
    Deep-copies a state or props value, dropping noise.

    A dict entry is dropped when its key is private (``_``/``$$`` prefix) or
    blocklisted, or when its value is callable.

    Cycle guard: a container visited twice within one call is returned as the
    original object, unsanitized. That includes shared, non-cyclic references,
    so the default mode is only idempotent on tree-shaped input. Pass
    ``strict=True`` to track just the current path instead: shared references
    are cleaned every time and a real cycle becomes CYCLE_MARKER.
    """

    def __init__(
        self,
        *,
        strict: bool = False,
        state_blocklist: Iterable[str] = STATE_BLOCKLIST,
        props_blocklist: Iterable[str] = PROPS_BLOCKLIST,
    ) -> None:
        self.strict = strict
        self._state_blocklist = frozenset(state_blocklist)
        self._props_blocklist = frozenset(props_blocklist)

    def sanitize_state(self, value: Any) -> Any:
        return self._sanitize(value, set(), self._state_blocklist, follow_next=True)

    def sanitize_props(self, value: Any) -> Any:
        return self._sanitize(value, set(), self._props_blocklist, follow_next=False)

    def _sanitize(
        self,
        value: Any,
        seen: set[int],
        blocklist: frozenset[str],
        follow_next: bool,
    ) -> Any:
        if not isinstance(value, (dict, list, tuple)):
            return value
        if id(value) in seen:
            return CYCLE_MARKER if self.strict else value
        seen.add(id(value))

        if isinstance(value, dict):
            cleaned: Any = self._sanitize_dict(value, seen, blocklist, follow_next)
        else:
            cleaned = [
                self._sanitize(item, seen, blocklist, follow_next)
                for item in value
                if not callable(item)
            ]

        if self.strict:
            # Only ancestors count as cycles; shared references are cleaned each time
            seen.discard(id(value))
        return cleaned

    def _sanitize_dict(
        self,
        value: dict,
        seen: set[int],
        blocklist: frozenset[str],
        follow_next: bool,
    ) -> dict:
        cleaned: dict[Any, Any] = {}
        for key, item in value.items():
            if self._is_valid(key, item, blocklist):
                cleaned[key] = self._sanitize(item, seen, blocklist, follow_next)

        # `next` is blocklisted as bookkeeping but the chain it points to holds
        # the component's remaining hooks
        if follow_next and value.get("next"):
            cleaned["next"] = self._sanitize(value["next"], seen, blocklist, follow_next)

        return cleaned

    @staticmethod
    def _is_valid(key: Any, value: Any, blocklist: frozenset[str]) -> bool:
        if callable(value):
            return False
        if isinstance(key, str):
            return not key.startswith(_PRIVATE_PREFIXES) and key not in blocklist
        return True


_default = Sanitizer()


def sanitize_state(value: Any) -> Any:
    """Sanitize a component state value with the default rules."""
    return _default.sanitize_state(value)


def sanitize_props(value: Any) -> Any:
    """Sanitize a component props value with the default rules."""
    return _default.sanitize_props(value)
