"""DocumentBuilder: converts decoded Python values into a DocumentNode tree.

Uses recursive dispatch: mappings become OBJECT nodes, lists and tuples
become ARRAY nodes, everything else becomes a SCALAR node tagged with its
BSON type code.  Field order is preserved exactly as the mapping yields it;
ordering policy belongs to the traverser.

Values whose type has no BSON counterpart do not abort the build: they are
logged and kept as SCALAR nodes with ``type_code=None``, which the type
catalog renders as ``UNKNOWN``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mongotype.errors import MalformedNode, UnknownScalarType
from mongotype.tree.nodes import DocumentNode, NodeKind
from mongotype.types import scalar_type_code

__all__ = ["DocumentBuilder"]

logger = logging.getLogger(__name__)


@dataclass
class DocumentBuilder:
    """Converts a decoded document (dict of dicts/lists/scalars) to a tree.

    Example::

        builder = DocumentBuilder()
        tree = builder.build({"a": {"b": 5}})
        # tree: OBJECT -> OBJECT(key="a") -> SCALAR(key="b", value=5, type_code=16)
    """

    def build(self, value: Any, key: str = "") -> DocumentNode:
        """Convert a Python value to a DocumentNode tree.

        Args:
            value: A mapping, list/tuple, or scalar.
            key:   Field name (or array position) of this value.  Defaults to
                   "" (root).

        Returns:
            The DocumentNode for ``value``.

        Raises:
            MalformedNode: If a mapping has a non-string key.
        """
        if isinstance(value, DocumentNode):
            return value
        if isinstance(value, Mapping):
            return self._build_object(value, key)
        if isinstance(value, (list, tuple)):
            return self._build_array(value, key)
        return self._build_scalar(value, key)

    def _build_object(self, obj: Mapping[Any, Any], key: str) -> DocumentNode:
        node = DocumentNode(kind=NodeKind.OBJECT, key=key)
        for field_name, field_value in obj.items():
            if not isinstance(field_name, str):
                msg = f"field names must be strings, got {type(field_name).__name__}"
                raise MalformedNode(msg, key)
            node.children.append(self.build(field_value, key=field_name))
        return node

    def _build_array(self, arr: list[Any] | tuple[Any, ...], key: str) -> DocumentNode:
        node = DocumentNode(kind=NodeKind.ARRAY, key=key)
        for idx, item in enumerate(arr):
            node.children.append(self.build(item, key=str(idx)))
        return node

    def _build_scalar(self, value: Any, key: str) -> DocumentNode:
        try:
            type_code: int | None = int(scalar_type_code(value))
        except UnknownScalarType as exc:
            logger.warning("Field %r: %s; rendering as UNKNOWN", key, exc)
            type_code = None
        return DocumentNode(
            kind=NodeKind.SCALAR, key=key, value=value, type_code=type_code
        )
