"""Visitor Protocol for the document traversal extension point.

Defines the structural interface every traversal event consumer must
satisfy.  Renderers are the main implementers, but any class with the seven
conformant ``on_*`` methods passes ``isinstance`` checks; no inheritance
required.

Example::

    from mongotype.protocols import Visitor

    class ScalarCounter:
        def __init__(self) -> None:
            self.count = 0

        def on_traverse_start(self) -> None: ...
        def on_traverse_end(self) -> None: ...
        def on_object_start(self, ctx): ...
        def on_object_end(self, ctx): ...
        def on_array_start(self, ctx): ...
        def on_array_end(self, ctx): ...

        def on_element(self, ctx) -> None:
            self.count += 1

    assert isinstance(ScalarCounter(), Visitor)  # True: structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mongotype.context import ContextView

__all__ = ["Visitor"]


@runtime_checkable
class Visitor(Protocol):
    """Structural protocol for traversal event consumers.

    Events are invoked synchronously, exactly once per structural occurrence,
    in strict LIFO nesting with the context stack:

    - ``on_traverse_start`` / ``on_traverse_end`` bracket one ``parse`` call.
    - ``on_object_start`` / ``on_object_end`` bracket each object's fields.
    - ``on_array_start`` / ``on_array_end`` bracket each array's elements.
    - ``on_element`` fires once per terminal scalar.

    ``ctx.top()`` is always the node just entered (start events, elements) or
    about to be left (end events).  Visitors must treat ``ctx`` as read-only.
    """

    def on_traverse_start(self) -> None: ...

    def on_traverse_end(self) -> None: ...

    def on_object_start(self, ctx: ContextView) -> None: ...

    def on_object_end(self, ctx: ContextView) -> None: ...

    def on_array_start(self, ctx: ContextView) -> None: ...

    def on_array_end(self, ctx: ContextView) -> None: ...

    def on_element(self, ctx: ContextView) -> None: ...
