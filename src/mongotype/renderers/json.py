"""JsonRenderer: JSON documents, pretty-printed or packed.

Comma and key emission is the delicate part.  At the start of every event
except the bracket-only ends:

- ``parent_is_array`` is whether ``ctx.item(-2)`` (the enclosing collection)
  is an ARRAY; a stack too shallow for that lookup counts as not-array.
- A comma precedes the node iff ``sibling_index > 0`` and (not
  ``parent_is_array`` or ``array_index > 0``): exactly the first child of
  each collection goes without one.
- Object children are prefixed with their quoted key; array elements never.

Pretty and packed output share this logic; pretty mode adds a line break
and indentation before each token, and ``": "`` instead of ``":"`` after
keys.  Framed by the driver, the documents form one JSON array, and the
pretty form matches ``json.dumps(docs, indent=2)`` for JSON-native values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mongotype.config import RenderConfig, RenderStyle
from mongotype.formatting import json_key, json_text
from mongotype.renderers.base import Renderer
from mongotype.tree.nodes import NodeKind

if TYPE_CHECKING:
    from mongotype.context import ContextView
    from mongotype.sink import OutputSink

__all__ = ["JsonRenderer"]


class JsonRenderer(Renderer):
    """JSON renderer; ``packed`` selects the compact variant."""

    style = RenderStyle.JSON

    def __init__(
        self, config: RenderConfig | None = None, packed: bool | None = None
    ) -> None:
        """Create a JSON renderer.

        Args:
            config: Rendering options.
            packed: Compact output.  Defaults to ``config.style is JSONPACKED``.
        """
        super().__init__(config)
        if packed is None:
            packed = self._config.style is RenderStyle.JSONPACKED
        self._packed = packed
        self._framed = False

    @property
    def packed(self) -> bool:
        return self._packed

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def begin(self, sink: OutputSink) -> None:
        self._framed = True
        super().begin(sink)

    def end(self, sink: OutputSink, doc_count: int = 1) -> None:
        try:
            super().end(sink, doc_count)
        finally:
            self._framed = False

    def begin_text(self) -> str:
        return "["

    def separator_text(self) -> str:
        return ","

    def end_text(self, doc_count: int) -> str:
        if self._packed or doc_count == 0:
            return "]\n"
        return "\n]\n"

    # ------------------------------------------------------------------
    # Visitor events
    # ------------------------------------------------------------------

    def on_traverse_start(self) -> None:
        super().on_traverse_start()
        if self._framed:
            # documents sit one level inside the enclosing array, each on a new line
            self._level = 1
            self._lines = 1

    def on_traverse_end(self) -> None:
        if not self._framed:
            self._write("\n")

    def on_object_start(self, ctx: ContextView) -> None:
        self._prefix(ctx)
        self._write("{")
        self._level += 1

    def on_object_end(self, ctx: ContextView) -> None:
        self._close(ctx, "}")

    def on_array_start(self, ctx: ContextView) -> None:
        self._prefix(ctx)
        self._write("[")
        self._level += 1

    def on_array_end(self, ctx: ContextView) -> None:
        self._close(ctx, "]")

    def on_element(self, ctx: ContextView) -> None:
        self._prefix(ctx)
        self._write(json_text(ctx.top().node.value))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _prefix(self, ctx: ContextView) -> None:
        """Emit the comma, line break, and key that precede a value."""
        top = ctx.top()
        parent = ctx.parent()
        parent_is_array = parent is not None and parent.kind is NodeKind.ARRAY
        if top.sibling_index > 0 and (not parent_is_array or top.array_index > 0):
            self._write(",")
        self._break()
        if parent is not None and parent.kind is NodeKind.OBJECT:
            self._write(json_key(top.key) + (":" if self._packed else ": "))

    def _close(self, ctx: ContextView, bracket: str) -> None:
        self._level -= 1
        if ctx.top().length:
            self._break()
        self._write(bracket)

    def _break(self) -> None:
        if not self._packed:
            self._newline()
