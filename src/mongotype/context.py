"""TraversalContext: the scope stack a traversal maintains from root to cursor.

Each Object, Array, or terminal Scalar being visited has exactly one
``ScopeEntry`` on the stack.  Renderers use the stack to answer positional
questions ("is my immediate parent an Array?", "what is my array position?")
without the traverser threading that information through every event.

Indexing follows Python sequence conventions: ``item(0)`` is the root entry,
``item(-1)`` is the top, ``item(-2)`` the entry just below it.  Unlike a list,
out-of-range lookups never clamp or wrap; they raise ``StackUnderflow``.

Renderers receive a ``ContextView`` rather than the stack itself: only the
traverser may push or pop.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from mongotype.errors import StackUnderflow
from mongotype.tree.nodes import DocumentNode, NodeKind

__all__ = ["ContextView", "ScopeEntry", "TraversalContext"]


@dataclass(frozen=True, slots=True)
class ScopeEntry:
    """Immutable descriptor of one node on the traversal path.

    Attributes:
        kind:          OBJECT, ARRAY, or SCALAR.
        key:           Field name under which the parent reaches this node;
                       "" for the root, the decimal position inside arrays.
        node:          The visited node (referenced, not copied).
        sibling_index: Zero-based position among the parent's children.
        sibling_count: Number of children of the parent.
        array_index:   Position within the nearest enclosing array, or -1.
        array_count:   Length of the nearest enclosing array, or 0.
    """

    kind: NodeKind
    key: str
    node: DocumentNode
    sibling_index: int = 0
    sibling_count: int = 1
    array_index: int = -1
    array_count: int = 0

    @property
    def length(self) -> int:
        """Number of children of the node itself (0 for scalars)."""
        return len(self.node.children)

    @property
    def in_array(self) -> bool:
        """True when some ancestor of this node is an array."""
        return self.array_index >= 0


class TraversalContext:
    """Growable LIFO stack of ``ScopeEntry`` objects for one ``parse`` call."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[ScopeEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScopeEntry]:
        """Iterate from the root entry to the top entry."""
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"TraversalContext(depth={self.depth}, path={self.path()!r})"

    @property
    def depth(self) -> int:
        return len(self._entries)

    def push(self, entry: ScopeEntry) -> None:
        self._entries.append(entry)

    def pop(self) -> ScopeEntry:
        """Remove and return the top entry.

        Raises:
            StackUnderflow: If the stack is empty.
        """
        if not self._entries:
            raise StackUnderflow(-1, 0)
        return self._entries.pop()

    def top(self) -> ScopeEntry:
        """Return the top entry (the node just entered or about to be left).

        Raises:
            StackUnderflow: If the stack is empty.
        """
        return self.item(-1)

    def item(self, index: int) -> ScopeEntry:
        """Return the entry at ``index``.

        Non-negative indexes count from the bottom (0 = root); negative indexes
        count from the top (-1 = top).

        Raises:
            StackUnderflow: If no entry exists at ``index``.
        """
        depth = len(self._entries)
        if index >= depth or index < -depth:
            raise StackUnderflow(index, depth)
        return self._entries[index]

    def parent(self) -> ScopeEntry | None:
        """Return the entry below the top, or None when the stack is too shallow."""
        if len(self._entries) < 2:
            return None
        return self._entries[-2]

    def parent_is_array(self) -> bool:
        """True when the top entry's enclosing collection is an array."""
        parent = self.parent()
        return parent is not None and parent.kind is NodeKind.ARRAY

    def path(self) -> str:
        """Slash-separated keys from the root to the top entry, e.g. ``/a/0/b``."""
        return "".join(f"/{entry.key}" for entry in self._entries[1:])

    def view(self) -> ContextView:
        return ContextView(self)


class ContextView:
    """Read-only facade over a ``TraversalContext`` handed to visitors."""

    __slots__ = ("_context",)

    def __init__(self, context: TraversalContext) -> None:
        self._context = context

    def __len__(self) -> int:
        return len(self._context)

    def __iter__(self) -> Iterator[ScopeEntry]:
        return iter(self._context)

    def __repr__(self) -> str:
        return f"ContextView(depth={self.depth}, path={self.path()!r})"

    @property
    def depth(self) -> int:
        return self._context.depth

    def top(self) -> ScopeEntry:
        return self._context.top()

    def item(self, index: int) -> ScopeEntry:
        return self._context.item(index)

    def parent(self) -> ScopeEntry | None:
        return self._context.parent()

    def parent_is_array(self) -> bool:
        return self._context.parent_is_array()

    def path(self) -> str:
        return self._context.path()
