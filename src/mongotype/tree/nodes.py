"""DocumentNode dataclass and NodeKind StrEnum for in-memory document trees.

A document tree is a closed tagged variant: every node is exactly one of
OBJECT, ARRAY, or SCALAR.  Accessors check the tag and the actual shape and
raise ``MalformedNode`` on any disagreement instead of reinterpreting data.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from mongotype.errors import MalformedNode
from mongotype.types import BSONType

__all__ = ["DocumentNode", "NodeKind"]


class NodeKind(StrEnum):
    """The three structural node kinds of a document tree.

    - OBJECT -> "object" : mapping from unique field name to child node
    - ARRAY  -> "array"  : ordered sequence of child nodes
    - SCALAR -> "scalar" : terminal value with a BSON type code
    """

    OBJECT = auto()
    ARRAY = auto()
    SCALAR = auto()


@dataclass(slots=True)
class DocumentNode:
    """A node in a document tree.

    Attributes:
        kind:       Which variant this node is (see NodeKind).
        key:        Field name under which the parent reaches this node.  Empty
                    for the root; the decimal position for array elements.
        value:      The decoded Python value for SCALAR nodes; None for structural.
        type_code:  BSON type code for SCALAR nodes.  None when the value's type
                    is not in the catalog.
        children:   Child nodes in storage order.  Empty for SCALAR nodes.
    """

    kind: NodeKind
    key: str = ""
    value: Any = None
    type_code: int | None = None
    children: list[DocumentNode] = field(default_factory=list)

    @property
    def is_object(self) -> bool:
        return self.kind is NodeKind.OBJECT

    @property
    def is_array(self) -> bool:
        return self.kind is NodeKind.ARRAY

    @property
    def is_scalar(self) -> bool:
        return self.kind is NodeKind.SCALAR

    def fields(self) -> Iterator[tuple[str, DocumentNode]]:
        """Yield ``(field name, child)`` pairs of an OBJECT node.

        Raises:
            MalformedNode: If this node is not an OBJECT.
        """
        if self.kind is not NodeKind.OBJECT:
            msg = f"expected an object node, got {self.kind.value}"
            raise MalformedNode(msg, self.key)
        for child in self.children:
            yield child.key, child

    def elements(self) -> Iterator[DocumentNode]:
        """Yield the children of an ARRAY node in order.

        Raises:
            MalformedNode: If this node is not an ARRAY.
        """
        if self.kind is not NodeKind.ARRAY:
            msg = f"expected an array node, got {self.kind.value}"
            raise MalformedNode(msg, self.key)
        yield from self.children

    @property
    def scalar(self) -> Any:
        """The value of a SCALAR node.

        Raises:
            MalformedNode: If this node is not a SCALAR, or is a SCALAR that
                exposes children or holds a nested document or array.
        """
        if self.kind is not NodeKind.SCALAR:
            msg = f"expected a scalar node, got {self.kind.value}"
            raise MalformedNode(msg, self.key)
        self._check_scalar()
        return self.value

    def _check_scalar(self) -> None:
        if self.children:
            msg = f"scalar node exposes {len(self.children)} children"
            raise MalformedNode(msg, self.key)
        if isinstance(self.value, (Mapping, list, tuple)):
            msg = f"scalar node holds a {type(self.value).__name__} value"
            raise MalformedNode(msg, self.key)
        if self.type_code in (BSONType.OBJECT, BSONType.ARRAY):
            msg = f"scalar node claims structural type code {self.type_code}"
            raise MalformedNode(msg, self.key)

    def check_shape(self) -> None:
        """Verify this node's own shape against its kind (not its descendants).

        Raises:
            MalformedNode: On a scalar with children, a nested value, or an
                Object/Array type code; on a structural node carrying a value
                or a child that is not a DocumentNode; on duplicate field
                names in an object.
        """
        if not isinstance(self.kind, NodeKind):
            msg = f"unknown node kind {self.kind!r}"
            raise MalformedNode(msg, self.key)
        if self.kind is NodeKind.SCALAR:
            self._check_scalar()
            return
        if self.value is not None:
            msg = f"{self.kind.value} node carries a scalar value"
            raise MalformedNode(msg, self.key)
        for child in self.children:
            if not isinstance(child, DocumentNode):
                msg = f"expected a DocumentNode child, got {type(child).__name__}"
                raise MalformedNode(msg, self.key)
        if self.kind is NodeKind.OBJECT:
            seen: set[str] = set()
            for child in self.children:
                if child.key in seen:
                    msg = f"duplicate field name {child.key!r}"
                    raise MalformedNode(msg, self.key)
                seen.add(child.key)
