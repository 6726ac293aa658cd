"""Document sources: decoded documents read from JSON text.

Stands in for a database cursor.  A source is a file path or an open text
stream holding either

- one JSON object (one document),
- a JSON array of objects (one document per element), or
- JSON Lines: one object per non-blank line.

MongoDB Extended JSON wrappers (``{"$oid": ...}``, ``{"$date": ...}``,
``{"$numberDecimal": ...}`` and the rest) are decoded by ``bson.json_util``
into the matching ``bson`` and Python types, so type annotations reflect the
original BSON types.
"""

from __future__ import annotations

import datetime
import json
import logging
from pathlib import Path
from typing import IO, Any

from bson import json_util
from bson.binary import UuidRepresentation
from bson.errors import BSONError
from bson.json_util import JSONMode, JSONOptions

from mongotype.errors import SourceError

__all__ = ["load_documents", "parse_documents"]

logger = logging.getLogger(__name__)

# Dates decode as aware UTC datetimes; $uuid and subtype 4 binaries as uuid.UUID.
_JSON_OPTIONS = JSONOptions(
    json_mode=JSONMode.RELAXED,
    tz_aware=True,
    tzinfo=datetime.UTC,
    uuid_representation=UuidRepresentation.STANDARD,
)


def _loads(text: str, where: str) -> Any:
    try:
        return json_util.loads(text, json_options=_JSON_OPTIONS)
    except json.JSONDecodeError:
        raise
    except (BSONError, TypeError, ValueError, ArithmeticError) as exc:
        msg = f"{where}: invalid Extended JSON value: {exc}"
        raise SourceError(msg) from exc


def parse_documents(text: str, name: str = "<input>") -> list[dict[str, Any]]:
    """Decode documents from JSON or JSON Lines text.

    Args:
        text: The source text.
        name: Source name used in error messages.

    Returns:
        The documents in source order.

    Raises:
        SourceError: If the text is neither JSON nor JSON Lines, or holds a
            top-level value that is not an object, or an Extended JSON
            wrapper cannot be decoded.
    """
    if not text.strip():
        return []
    try:
        data = _loads(text, name)
    except json.JSONDecodeError:
        data = _parse_lines(text, name)
    else:
        if not isinstance(data, list):
            data = [data]

    for index, doc in enumerate(data):
        if not isinstance(doc, dict):
            msg = f"{name}: document {index} is a {type(doc).__name__}, not an object"
            raise SourceError(msg)
    logger.debug("Decoded %d documents from %s", len(data), name)
    return data


def _parse_lines(text: str, name: str) -> list[Any]:
    docs: list[Any] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            docs.append(_loads(line, f"{name}:{lineno}"))
        except json.JSONDecodeError as exc:
            msg = f"{name}:{lineno}: invalid JSON: {exc.msg}"
            raise SourceError(msg) from exc
    return docs


def load_documents(source: str | Path | IO[str]) -> list[dict[str, Any]]:
    """Read and decode all documents from a path or an open text stream.

    Raises:
        SourceError: If the source cannot be read or decoded.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"cannot read {path}: {exc.strerror or exc}"
            raise SourceError(msg) from exc
        except UnicodeDecodeError as exc:
            msg = f"{path} is not UTF-8 text: {exc.reason}"
            raise SourceError(msg) from exc
        return parse_documents(text, str(path))
    name = getattr(source, "name", "<stream>")
    return parse_documents(source.read(), str(name))
