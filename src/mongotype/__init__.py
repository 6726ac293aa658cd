"""mongotype - render schema-less documents as dotted paths, trees, or JSON."""

from __future__ import annotations

__version__: str = "2.3.0"

from mongotype.api import dumps, render, render_documents  # noqa: E402
from mongotype.config import FieldOrder, RenderConfig, RenderStyle  # noqa: E402
from mongotype.context import ContextView, ScopeEntry, TraversalContext  # noqa: E402
from mongotype.errors import (  # noqa: E402
    MalformedNode,
    MongoTypeError,
    StackUnderflow,
    UnknownScalarType,
)
from mongotype.protocols import Visitor  # noqa: E402
from mongotype.traverser import DocumentTraverser  # noqa: E402
from mongotype.tree import DocumentBuilder, DocumentNode, NodeKind  # noqa: E402
from mongotype.types import TypeMask  # noqa: E402

__all__: list[str] = [
    "ContextView",
    "DocumentBuilder",
    "DocumentNode",
    "DocumentTraverser",
    "FieldOrder",
    "MalformedNode",
    "MongoTypeError",
    "NodeKind",
    "RenderConfig",
    "RenderStyle",
    "ScopeEntry",
    "StackUnderflow",
    "TraversalContext",
    "TypeMask",
    "UnknownScalarType",
    "Visitor",
    "dumps",
    "render",
    "render_documents",
]
