"""DocumentTraverser: depth-first walker that drives a Visitor over a document.

The traverser owns no output logic.  It recurses over a DocumentNode tree,
maintains the TraversalContext scope stack, and emits the fixed event
protocol to its visitor:

    on_traverse_start
      on_object_start                      (root)
        on_element | on_object_start ... on_object_end
                   | on_array_start  ... on_array_end
      on_object_end                        (root)
    on_traverse_end

Positional bookkeeping:
- Object fields: ``sibling_index`` counts fields in visiting order,
  ``sibling_count`` is the field count; ``array_index``/``array_count`` are
  inherited from the object's own entry (nearest enclosing array).
- Array elements: ``sibling_index == array_index == position`` and
  ``sibling_count == array_count == len(array)``.

Field order is the only reordering the traverser performs, and it applies
identically whatever the visitor: insertion order (default), lexical order,
and optionally scalars before embedded objects/arrays.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mongotype.config import FieldOrder
from mongotype.context import ContextView, ScopeEntry, TraversalContext
from mongotype.errors import MalformedNode
from mongotype.tree.builder import DocumentBuilder
from mongotype.tree.nodes import DocumentNode, NodeKind

if TYPE_CHECKING:
    from mongotype.protocols import Visitor

__all__ = ["DocumentTraverser"]

logger = logging.getLogger(__name__)


class DocumentTraverser:
    """Recursive depth-first traverser bound to one visitor.

    A traverser is reusable: each ``parse`` call creates a fresh
    ``TraversalContext`` that lives exactly as long as the call.

    Example::

        from mongotype.traverser import DocumentTraverser

        traverser = DocumentTraverser(visitor)
        traverser.parse({"a": {"b": 5}})
    """

    def __init__(
        self,
        visitor: Visitor,
        field_order: FieldOrder = FieldOrder.INSERTION,
        scalar_first: bool = False,
        trace: bool = False,
    ) -> None:
        """Bind the traverser to a visitor.

        Args:
            visitor:      Receives the traversal events.
            field_order:  Object field visiting order.
            scalar_first: Visit scalar fields before objects and arrays.
            trace:        Log every event with its context path at DEBUG.
        """
        self._visitor = visitor
        self._field_order = field_order
        self._scalar_first = scalar_first
        self._trace = trace
        self._builder = DocumentBuilder()
        self._context: TraversalContext | None = None
        self._view: ContextView | None = None

    @property
    def visitor(self) -> Visitor:
        return self._visitor

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, root: DocumentNode | Any) -> None:
        """Traverse one document and emit its events to the visitor.

        Args:
            root: A DocumentNode of kind OBJECT, or a mapping that is first
                converted with ``DocumentBuilder``.

        Raises:
            MalformedNode: If the root is not an object, or any node's kind
                disagrees with its shape.  Events already emitted stay emitted.
        """
        node = root if isinstance(root, DocumentNode) else self._builder.build(root)
        if node.kind is not NodeKind.OBJECT:
            msg = f"document root must be an object, got {node.kind}"
            raise MalformedNode(msg)

        self._context = TraversalContext()
        self._view = self._context.view()
        try:
            self._visitor.on_traverse_start()
            self._visit(node, key="", sibling_index=0, sibling_count=1)
            self._visitor.on_traverse_end()
        finally:
            self._context = None
            self._view = None

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------

    def _visit(
        self,
        node: DocumentNode,
        key: str,
        sibling_index: int,
        sibling_count: int,
        array_index: int = -1,
        array_count: int = 0,
    ) -> None:
        node.check_shape()
        entry = ScopeEntry(
            kind=node.kind,
            key=key,
            node=node,
            sibling_index=sibling_index,
            sibling_count=sibling_count,
            array_index=array_index,
            array_count=array_count,
        )
        if node.kind is NodeKind.OBJECT:
            self._visit_object(entry)
        elif node.kind is NodeKind.ARRAY:
            self._visit_array(entry)
        else:
            self._visit_scalar(entry)

    def _visit_object(self, entry: ScopeEntry) -> None:
        context, view = self._scope()
        context.push(entry)
        self._log("object_start")
        self._visitor.on_object_start(view)

        children = self._ordered_fields(entry.node)
        count = len(children)
        for index, child in enumerate(children):
            self._visit(
                child,
                key=child.key,
                sibling_index=index,
                sibling_count=count,
                array_index=entry.array_index,
                array_count=entry.array_count,
            )

        self._log("object_end")
        self._visitor.on_object_end(view)
        context.pop()

    def _visit_array(self, entry: ScopeEntry) -> None:
        context, view = self._scope()
        context.push(entry)
        self._log("array_start")
        self._visitor.on_array_start(view)

        elements = list(entry.node.elements())
        count = len(elements)
        for index, child in enumerate(elements):
            self._visit(
                child,
                key=child.key,
                sibling_index=index,
                sibling_count=count,
                array_index=index,
                array_count=count,
            )

        self._log("array_end")
        self._visitor.on_array_end(view)
        context.pop()

    def _visit_scalar(self, entry: ScopeEntry) -> None:
        context, view = self._scope()
        # accessing .scalar re-checks the shape through the safe accessor
        entry.node.scalar  # noqa: B018
        context.push(entry)
        self._log("element")
        self._visitor.on_element(view)
        context.pop()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ordered_fields(self, node: DocumentNode) -> list[DocumentNode]:
        children = [child for _, child in node.fields()]
        if self._field_order is FieldOrder.LEXICAL:
            children.sort(key=lambda child: child.key)
        if self._scalar_first:
            children.sort(key=lambda child: child.kind is not NodeKind.SCALAR)
        return children

    def _scope(self) -> tuple[TraversalContext, ContextView]:
        if self._context is None or self._view is None:
            msg = "traversal events emitted outside of parse()"
            raise RuntimeError(msg)
        return self._context, self._view

    def _log(self, event: str) -> None:
        if self._trace and self._context is not None:
            top = self._context.top()
            logger.debug(
                "%-12s depth=%d path=%r sibling=%d/%d array=%d/%d",
                event,
                self._context.depth,
                self._context.path() or "/",
                top.sibling_index,
                top.sibling_count,
                top.array_index,
                top.array_count,
            )
