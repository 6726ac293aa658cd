"""Shared fixtures: sample documents and an event-recording visitor."""

from __future__ import annotations

from typing import Any

import pytest

from mongotype.context import ContextView, ScopeEntry


class RecordingVisitor:
    """Visitor that records every event with a snapshot of the context top.

    Each record is ``(event, depth, top)`` where ``top`` is the ScopeEntry on
    top of the stack at the time of the event (None for traverse events).
    ``depth_at_end`` is the stack depth observed when the traversal ended.
    """

    def __init__(self) -> None:
        self.events: list[tuple[str, int, ScopeEntry | None]] = []
        self.parents: list[ScopeEntry | None] = []
        self.depth_at_end: int | None = None
        self._view: ContextView | None = None

    def _record(self, event: str, ctx: ContextView | None) -> None:
        if ctx is None:
            self.events.append((event, -1, None))
            self.parents.append(None)
        else:
            self._view = ctx
            self.events.append((event, ctx.depth, ctx.top()))
            self.parents.append(ctx.parent())

    def on_traverse_start(self) -> None:
        self._record("traverse_start", None)

    def on_traverse_end(self) -> None:
        if self._view is not None:
            self.depth_at_end = self._view.depth
        self._record("traverse_end", None)

    def on_object_start(self, ctx: ContextView) -> None:
        self._record("object_start", ctx)

    def on_object_end(self, ctx: ContextView) -> None:
        self._record("object_end", ctx)

    def on_array_start(self, ctx: ContextView) -> None:
        self._record("array_start", ctx)

    def on_array_end(self, ctx: ContextView) -> None:
        self._record("array_end", ctx)

    def on_element(self, ctx: ContextView) -> None:
        self._record("element", ctx)

    @property
    def names(self) -> list[str]:
        return [event for event, _, _ in self.events]

    def tops(self, event: str) -> list[ScopeEntry]:
        return [
            top for name, _, top in self.events if name == event and top is not None
        ]


@pytest.fixture
def recorder() -> RecordingVisitor:
    """A fresh RecordingVisitor for each test."""
    return RecordingVisitor()


@pytest.fixture
def nested_doc() -> dict[str, Any]:
    """A document exercising every structural combination."""
    return {
        "name": "Ada",
        "age": 36,
        "address": {"city": "London", "zip": "N1"},
        "tags": ["math", "engines"],
        "matrix": [[1, 2], [3]],
        "people": [{"first": "Charles"}, {"first": "Mary", "kids": []}],
        "empty": {},
        "active": True,
        "spouse": None,
    }
