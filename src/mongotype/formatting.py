"""Scalar text rendering for the display styles and for JSON.

Two renditions of a scalar value:

- ``display_text`` -- the mongo-shell-like literal used by the dotted and
  tree styles: strings quoted, dates as ``ISODate("...")``, binary as
  ``BinData(0, "...")``.
- ``json_text``    -- a valid JSON token.  Strings are escaped with the
  standard encoder; values JSON cannot express natively (dates, binary,
  regexes, decimals, non-finite floats, ObjectIds) become JSON strings, so the
  output always parses.
"""

from __future__ import annotations

import base64
import datetime
import decimal
import json
import math
import re
import uuid
from typing import Any

import numpy as np
from bson import Code, Decimal128, ObjectId, Regex

__all__ = ["display_text", "json_key", "json_text"]

_REGEX_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def _as_number(value: Any) -> int | float | None:
    """Return a plain int/float for numeric scalars, None otherwise."""
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    return None


def _regex_text(value: Any) -> str:
    pattern = value.pattern
    if isinstance(pattern, bytes):
        pattern = pattern.decode("utf-8", errors="replace")
    # re.Pattern and bson.Regex both carry int flags
    flags = "".join(letter for flag, letter in _REGEX_FLAGS if value.flags & flag)
    return f"/{pattern}/{flags}"


def _plain_text(value: Any) -> str | None:
    """Unquoted text of non-JSON scalars shared by both renditions."""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, np.datetime64):
        return str(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (re.Pattern, Regex)):
        return _regex_text(value)
    if isinstance(value, (decimal.Decimal, Decimal128)):
        return str(value)
    return None


def display_text(value: Any) -> str:
    """Render a scalar the way the dotted and tree styles show it."""
    if value is None:
        return "null"
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    number = _as_number(value)
    if number is not None:
        return repr(number)
    if isinstance(value, str) and not isinstance(value, Code):
        return json.dumps(str(value), ensure_ascii=False)

    plain = _plain_text(value)
    if isinstance(value, (datetime.datetime, datetime.date, np.datetime64)):
        return f'ISODate("{plain}")'
    if isinstance(value, uuid.UUID):
        return f'UUID("{plain}")'
    if isinstance(value, (bytes, bytearray, memoryview)):
        subtype = getattr(value, "subtype", 0)
        return f'BinData({subtype}, "{plain}")'
    if isinstance(value, (decimal.Decimal, Decimal128)):
        return f'NumberDecimal("{plain}")'
    if plain is not None:
        return plain
    if isinstance(value, ObjectId):
        return f'ObjectId("{value}")'
    return str(value)


def json_text(value: Any) -> str:
    """Render a scalar as a JSON token."""
    if value is None:
        return "null"
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    number = _as_number(value)
    if number is not None:
        if isinstance(number, float) and not math.isfinite(number):
            return json.dumps(repr(number))
        return json.dumps(number)
    if isinstance(value, str):
        return json.dumps(str(value))
    plain = _plain_text(value)
    return json.dumps(plain if plain is not None else str(value))


def json_key(key: str) -> str:
    """Render a field name as a quoted, escaped JSON string."""
    return json.dumps(key)
