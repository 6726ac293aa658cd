"""TreeRenderer: indented brace structure with array counts.

Example (indent of two spaces)::

    {"a": 1, "x": [1, 2, 3], "o": {"b": "s"}}

    {
      a: 1 (NumberInt/int32/16)
      x: {ARRAY[3]}
        [0]: 1 (NumberInt/int32/16)
        [1]: 2 (NumberInt/int32/16)
        [2]: 3 (NumberInt/int32/16)
      o: {
        b: "s" (String/UTF8/2)
      }
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mongotype.config import RenderStyle
from mongotype.formatting import display_text
from mongotype.renderers.base import Renderer
from mongotype.types import format_annotation

if TYPE_CHECKING:
    from mongotype.context import ContextView

__all__ = ["TreeRenderer"]


class TreeRenderer(Renderer):
    """Indented-tree renderer."""

    style = RenderStyle.TREE

    def on_traverse_end(self) -> None:
        self._write("\n")

    def on_object_start(self, ctx: ContextView) -> None:
        self._newline()
        label = self._label_of(ctx)
        self._write(f"{label}: {{" if label else "{")
        self._level += 1

    def on_object_end(self, ctx: ContextView) -> None:
        self._level -= 1
        self._newline()
        self._write("}")

    def on_array_start(self, ctx: ContextView) -> None:
        self._newline()
        self._write(f"{self._label_of(ctx)}: {{ARRAY[{ctx.top().length}]}}")
        self._level += 1

    def on_array_end(self, ctx: ContextView) -> None:
        self._level -= 1

    def on_element(self, ctx: ContextView) -> None:
        node = ctx.top().node
        self._newline()
        text = f"{self._label_of(ctx)}: {display_text(node.value)}"
        annotation = format_annotation(node.type_code, self._config.type_mask)
        if annotation:
            text += " " + annotation
        self._write(text)

    @staticmethod
    def _label_of(ctx: ContextView) -> str:
        """``[<index>]`` inside arrays, the field name otherwise, "" for the root."""
        top = ctx.top()
        if ctx.parent_is_array():
            return f"[{top.array_index}]"
        return top.key
