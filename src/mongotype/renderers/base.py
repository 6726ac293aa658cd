"""Renderer base class: a Visitor that writes one text encoding to a sink.

Each concrete renderer implements the traversal events for one output
style.  The base class supplies the parts every style shares:

- a ``DocumentTraverser`` bound to the renderer, configured from
  ``RenderConfig`` (field order, scalar-first, tracing);
- the document lifecycle used by the multi-document driver:
  ``begin`` -> ``render`` (per document, ``separator`` between) -> ``end``;
- the sink, held only for the duration of a ``begin``/``render``/``end`` call;
- line helpers that keep indentation uniform across styles.

Renderer state (indent level, path segments) is private, reset in
``on_traverse_start``, and never shared between renderers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from mongotype.config import RenderConfig, RenderStyle
from mongotype.traverser import DocumentTraverser

if TYPE_CHECKING:
    from mongotype.context import ContextView
    from mongotype.sink import OutputSink
    from mongotype.tree.nodes import DocumentNode

__all__ = ["Renderer"]


class Renderer(ABC):
    """Abstract base for all output styles.

    Subclasses implement the seven ``on_*`` events and may override the
    framing hooks ``begin_text``, ``separator_text`` and ``end_text``.
    """

    style: ClassVar[RenderStyle]

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config: RenderConfig = config if config is not None else RenderConfig()
        self._traverser = DocumentTraverser(
            self,
            field_order=self._config.field_order,
            scalar_first=self._config.scalar_first,
            trace=self._config.trace,
        )
        self._sink: OutputSink | None = None
        self._label: str | None = None
        self._doc_index = 0
        self._doc_count = 1
        self._level = 0
        self._lines = 0

    @property
    def config(self) -> RenderConfig:
        return self._config

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def begin(self, sink: OutputSink) -> None:
        """Write the text preceding the first document."""
        self._write_to(sink, self.begin_text())

    def separator(self, sink: OutputSink) -> None:
        """Write the text between two consecutive documents."""
        self._write_to(sink, self.separator_text())

    def end(self, sink: OutputSink, doc_count: int = 1) -> None:
        """Write the text following the last document."""
        self._write_to(sink, self.end_text(doc_count))

    def render(
        self,
        document: DocumentNode | Any,
        sink: OutputSink,
        doc_index: int = 0,
        doc_count: int = 1,
        label: str | None = None,
    ) -> None:
        """Traverse ``document`` and write its rendering to ``sink``.

        Args:
            document:  Root DocumentNode, or a mapping to convert.
            sink:      Destination for the text.
            doc_index: Zero-based position of the document in its source.
            doc_count: Number of documents in the source, when known.
            label:     Per-document label (the dotted style's root token).

        Raises:
            MalformedNode: If the document is malformed.  Text written before
                the failure stays in the sink.
        """
        self._sink = sink
        self._label = label
        self._doc_index = doc_index
        self._doc_count = doc_count
        try:
            self._traverser.parse(document)
        finally:
            self._sink = None

    def begin_text(self) -> str:
        return ""

    def separator_text(self) -> str:
        return "\n"

    def end_text(self, doc_count: int) -> str:
        return ""

    # ------------------------------------------------------------------
    # Visitor events
    # ------------------------------------------------------------------

    def on_traverse_start(self) -> None:
        self._level = 0
        self._lines = 0

    def on_traverse_end(self) -> None:
        return None

    @abstractmethod
    def on_object_start(self, ctx: ContextView) -> None: ...

    @abstractmethod
    def on_object_end(self, ctx: ContextView) -> None: ...

    @abstractmethod
    def on_array_start(self, ctx: ContextView) -> None: ...

    @abstractmethod
    def on_array_end(self, ctx: ContextView) -> None: ...

    @abstractmethod
    def on_element(self, ctx: ContextView) -> None: ...

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        if self._sink is None:
            msg = f"{type(self).__name__} has no sink outside of render()"
            raise RuntimeError(msg)
        self._sink.write(text)

    @staticmethod
    def _write_to(sink: OutputSink, text: str) -> None:
        if text:
            sink.write(text)

    def _indentation(self) -> str:
        return self._config.indent * self._level

    def _newline(self) -> None:
        """Start a new indented line; the first line of a document has no break."""
        if self._lines:
            self._write("\n")
        self._lines += 1
        self._write(self._indentation())
