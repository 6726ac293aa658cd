"""DottedRenderer: one ``path.key value (type)`` line per scalar.

The renderer keeps a stack of path segments seeded with the document's root
token.  Entering a named object or array pushes ``.<key>``; entering an
object or array that sits directly inside an array pushes ``[<index>]``;
the matching end event pops.  Nesting depth is visible only through the
accumulated path text.

Example (root token ``db.coll{0}``)::

    {"a": {"b": 5}, "tags": ["x", {"y": true}]}

    db.coll{0}.a.b 5 (NumberInt/int32/16)
    db.coll{0}.tags[0] "x" (String/UTF8/2)
    db.coll{0}.tags[1].y true (Bool/Boolean/8)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mongotype.config import RenderConfig, RenderStyle
from mongotype.formatting import display_text
from mongotype.renderers.base import Renderer
from mongotype.types import format_annotation

if TYPE_CHECKING:
    from mongotype.context import ContextView

__all__ = ["DottedRenderer"]


class DottedRenderer(Renderer):
    """Flattened dotted-path renderer."""

    style = RenderStyle.DOTTED

    def __init__(
        self, config: RenderConfig | None = None, root_token: str = ""
    ) -> None:
        """Create a dotted renderer.

        Args:
            config:     Rendering options.
            root_token: Default first path segment, used when ``render`` is
                called without a per-document ``label``.
        """
        super().__init__(config)
        self._root_token = root_token
        self._segments: list[str] = []

    def separator_text(self) -> str:
        return ""

    def on_traverse_start(self) -> None:
        super().on_traverse_start()
        root = self._label if self._label is not None else self._root_token
        self._segments = [root]

    def on_object_start(self, ctx: ContextView) -> None:
        if ctx.depth > 1:
            self._segments.append(self._segment(ctx))

    def on_object_end(self, ctx: ContextView) -> None:
        if ctx.depth > 1:
            self._segments.pop()

    def on_array_start(self, ctx: ContextView) -> None:
        self._segments.append(self._segment(ctx))

    def on_array_end(self, ctx: ContextView) -> None:
        self._segments.pop()

    def on_element(self, ctx: ContextView) -> None:
        node = ctx.top().node
        path = "".join(self._segments) + self._segment(ctx)
        line = f"{path} {display_text(node.value)}"
        annotation = format_annotation(node.type_code, self._config.type_mask)
        if annotation:
            line += " " + annotation
        self._write(line + "\n")

    @staticmethod
    def _segment(ctx: ContextView) -> str:
        top = ctx.top()
        if ctx.parent_is_array():
            return f"[{top.array_index}]"
        return f".{top.key}"
