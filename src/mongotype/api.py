"""Public API functions for mongotype.

This module provides the user-facing rendering functions: render (one
document to a string), dumps (many documents to a string), and
render_documents (many documents to a sink).  Each call creates a fresh
renderer to guarantee zero shared state between calls.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from typing import Any

from mongotype.config import RenderConfig
from mongotype.renderers import create_renderer
from mongotype.sink import OutputSink

__all__ = ["document_label", "dumps", "render", "render_documents"]

logger = logging.getLogger(__name__)


def document_label(name: str, index: int) -> str:
    """Root token of the ``index``-th document of source ``name``: ``name{index}``."""
    return f"{name}{{{index}}}"


def render(
    document: Any,
    config: RenderConfig | None = None,
    label: str | None = None,
) -> str:
    """Render a single document and return the text.

    No multi-document framing is applied: the JSON styles return a bare
    object rather than a one-element array.

    Args:
        document: A mapping or a root DocumentNode.
        config:   Rendering options.  Defaults to ``RenderConfig()``.
        label:    Root token for the dotted style.  Defaults to "".

    Returns:
        The rendered text.
    """
    sink = io.StringIO()
    create_renderer(config).render(document, sink, label=label)
    return sink.getvalue()


def render_documents(
    documents: Iterable[Any],
    sink: OutputSink,
    config: RenderConfig | None = None,
    name: str = "",
) -> int:
    """Render documents one at a time, in order, to ``sink``.

    Writes the style's begin text, each document (with the separator between
    consecutive documents), then the end text.  The JSON styles thereby
    produce one JSON array.  Dotted-style root tokens are ``name{index}``.

    If a document fails to render, the exception propagates after the partial
    output has been written; the end text is not written.

    Args:
        documents: Mappings or root DocumentNodes.
        sink:      Destination for the text.
        config:    Rendering options.  Defaults to ``RenderConfig()``.
        name:      Source name used in dotted root tokens.

    Returns:
        The number of documents rendered.
    """
    docs = list(documents)
    count = len(docs)
    renderer = create_renderer(config)
    renderer.begin(sink)
    for index, document in enumerate(docs):
        if index:
            renderer.separator(sink)
        renderer.render(
            document,
            sink,
            doc_index=index,
            doc_count=count,
            label=document_label(name, index),
        )
    renderer.end(sink, count)
    logger.debug("Rendered %d documents as %s", count, renderer.config.style)
    return count


def dumps(
    documents: Iterable[Any],
    config: RenderConfig | None = None,
    name: str = "",
) -> str:
    """Render documents as ``render_documents`` does and return the text."""
    sink = io.StringIO()
    render_documents(documents, sink, config=config, name=name)
    return sink.getvalue()
