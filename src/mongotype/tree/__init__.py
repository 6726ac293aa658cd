"""Tree subpackage for document tree primitives.

Re-exports the public API for the tree module:
- DocumentNode: dataclass representing a node in a document tree
- NodeKind: StrEnum of the three node kinds (OBJECT, ARRAY, SCALAR)
- DocumentBuilder: converts decoded Python values into a DocumentNode tree
"""

from mongotype.tree.builder import DocumentBuilder
from mongotype.tree.nodes import DocumentNode, NodeKind

__all__ = ["DocumentBuilder", "DocumentNode", "NodeKind"]
