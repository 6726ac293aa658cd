"""Error taxonomy for mongotype.

Every exception raised by the package derives from ``MongoTypeError`` and
also from the closest builtin, so callers can catch either:

- ``StackUnderflow``     (``IndexError``)  -- a context entry that does not exist
  was requested.  Fatal: aborts the current ``parse`` call.
- ``MalformedNode``      (``TypeError``)   -- a node's declared kind disagrees
  with its shape.  Fatal.
- ``UnknownScalarType``  (``LookupError``) -- a type code or Python value has no
  catalog entry.  Non-fatal: callers degrade to the ``UNKNOWN`` label.
- ``ConfigError``        (``ValueError``)  -- invalid option or config file.
- ``SourceError``                          -- a document source could not be read.
"""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "MalformedNode",
    "MongoTypeError",
    "SourceError",
    "StackUnderflow",
    "UnknownScalarType",
]


class MongoTypeError(Exception):
    """Base class for all mongotype errors."""


class StackUnderflow(MongoTypeError, IndexError):
    """Raised when a traversal context lookup has no matching entry."""

    def __init__(self, index: int, depth: int) -> None:
        self.index = index
        self.depth = depth
        super().__init__(
            f"traversal context has no entry at index {index} (depth={depth})"
        )


class MalformedNode(MongoTypeError, TypeError):
    """Raised when a document node's declared kind disagrees with its shape."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        if path:
            message = f"{message} at {path!r}"
        super().__init__(message)


class UnknownScalarType(MongoTypeError, LookupError):
    """Raised by strict type lookups when no catalog entry matches."""

    def __init__(self, type_code: object) -> None:
        self.type_code = type_code
        super().__init__(f"unknown scalar type: {type_code!r}")


class ConfigError(MongoTypeError, ValueError):
    """Raised for invalid render options or configuration files."""


class SourceError(MongoTypeError):
    """Raised when documents cannot be read from a source."""
