"""TypeCatalog: BSON scalar type codes, their descriptions, and annotations.

The catalog is a fixed table from BSON type code to ``TypeInfo(name,
description)``.  It is pure data: lookups never mutate anything.

Three entry points:

- ``describe(code)``          -- always returns a ``TypeInfo``; unmatched codes
  degrade to ``("UNKNOWN", "UNKNOWN")``.
- ``scalar_type_code(value)`` -- maps a Python (or numpy, or bson-package)
  scalar to its BSON type code.
- ``format_annotation(code, mask)`` -- renders ``(name/description/code)`` with
  any subset of the three parts selected by a ``TypeMask``.

Example::

    from mongotype.types import TypeMask, describe, format_annotation

    describe(16)                                  # TypeInfo('NumberInt', 'int32')
    format_annotation(16, TypeMask.ALL)           # '(NumberInt/int32/16)'
    format_annotation(16, TypeMask.NAME | TypeMask.CODE)   # '(NumberInt/16)'
"""

from __future__ import annotations

import datetime
import decimal
import logging
import re
import uuid
from enum import IntEnum, IntFlag
from typing import Any, NamedTuple

import numpy as np
from bson import (
    Code,
    DBRef,
    Decimal128,
    Int64,
    MaxKey,
    MinKey,
    ObjectId,
    Regex,
    Timestamp,
)
from bson.datetime_ms import DatetimeMS

from mongotype.errors import ConfigError, UnknownScalarType

__all__ = [
    "UNKNOWN",
    "BSONType",
    "TypeInfo",
    "TypeMask",
    "describe",
    "format_annotation",
    "lookup",
    "scalar_type_code",
]

logger = logging.getLogger(__name__)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class BSONType(IntEnum):
    """BSON element type codes (http://bsonspec.org)."""

    MIN_KEY = -1
    EOO = 0
    NUMBER_DOUBLE = 1
    STRING = 2
    OBJECT = 3
    ARRAY = 4
    BIN_DATA = 5
    UNDEFINED = 6
    OBJECT_ID = 7
    BOOL = 8
    DATE = 9
    NULL = 10
    REGEX = 11
    DB_REF = 12
    CODE = 13
    SYMBOL = 14
    CODE_W_SCOPE = 15
    NUMBER_INT = 16
    TIMESTAMP = 17
    NUMBER_LONG = 18
    NUMBER_DECIMAL = 19
    MAX_KEY = 127


class TypeInfo(NamedTuple):
    """Name and description of a single BSON type."""

    name: str
    description: str


UNKNOWN = TypeInfo("UNKNOWN", "UNKNOWN")

_CATALOG: dict[int, TypeInfo] = {
    BSONType.MIN_KEY: TypeInfo("MinKey", "MinKey"),
    BSONType.EOO: TypeInfo("EOO", "EOO"),
    BSONType.NUMBER_DOUBLE: TypeInfo("NumberDouble", "Double"),
    BSONType.STRING: TypeInfo("String", "UTF8"),
    BSONType.OBJECT: TypeInfo("Object", "BSON"),
    BSONType.ARRAY: TypeInfo("Array", "BSON Array"),
    BSONType.BIN_DATA: TypeInfo("BinData", "Binary"),
    BSONType.UNDEFINED: TypeInfo("Undefined", "Undefined"),
    BSONType.OBJECT_ID: TypeInfo("jstOID", "ObjectId"),
    BSONType.BOOL: TypeInfo("Bool", "Boolean"),
    BSONType.DATE: TypeInfo("Date", "Date"),
    BSONType.NULL: TypeInfo("jstNULL", "NULL"),
    BSONType.REGEX: TypeInfo("RegEx", "Regex"),
    BSONType.DB_REF: TypeInfo("DBRef", "deprecated"),
    BSONType.CODE: TypeInfo("Code", "deprecated"),
    BSONType.SYMBOL: TypeInfo("Symbol", "Symbol"),
    BSONType.CODE_W_SCOPE: TypeInfo("CodeWScope", "Javascript"),
    BSONType.NUMBER_INT: TypeInfo("NumberInt", "int32"),
    BSONType.TIMESTAMP: TypeInfo("Timestamp", "Timestamp"),
    BSONType.NUMBER_LONG: TypeInfo("NumberLong", "int64"),
    BSONType.NUMBER_DECIMAL: TypeInfo("NumberDecimal", "Decimal128"),
    BSONType.MAX_KEY: TypeInfo("MaxKey", "MaxKey"),
}

# Scalar classes of the ``bson`` package (pymongo).  Int64 subclasses int, so
# these are checked before the builtin numbers.
_BSON_CLASS_CODES: tuple[tuple[type, BSONType], ...] = (
    (ObjectId, BSONType.OBJECT_ID),
    (Timestamp, BSONType.TIMESTAMP),
    (Int64, BSONType.NUMBER_LONG),
    (Decimal128, BSONType.NUMBER_DECIMAL),
    (Regex, BSONType.REGEX),
    (DBRef, BSONType.DB_REF),
    (MinKey, BSONType.MIN_KEY),
    (MaxKey, BSONType.MAX_KEY),
    (DatetimeMS, BSONType.DATE),
)


def lookup(code: int | None) -> TypeInfo:
    """Strict catalog lookup.

    Raises:
        UnknownScalarType: If ``code`` has no catalog entry.
    """
    try:
        return _CATALOG[code]  # type: ignore[index]
    except KeyError:
        raise UnknownScalarType(code) from None


def describe(code: int | None) -> TypeInfo:
    """Return the ``TypeInfo`` for ``code``, or ``UNKNOWN`` when unmatched."""
    try:
        return lookup(code)
    except UnknownScalarType as exc:
        logger.debug("Degrading to UNKNOWN: %s", exc)
        return UNKNOWN


def scalar_type_code(value: Any) -> int:
    """Map a scalar Python value to its BSON type code.

    bool is checked before int: ``isinstance(True, int)`` is True.

    Raises:
        UnknownScalarType: If the value's type has no BSON counterpart.
    """
    if value is None:
        return BSONType.NULL
    if isinstance(value, (bool, np.bool_)):
        return BSONType.BOOL

    for bson_class, bson_code in _BSON_CLASS_CODES:
        if isinstance(value, bson_class):
            return bson_code
    if isinstance(value, Code):
        if value.scope:
            return BSONType.CODE_W_SCOPE
        return BSONType.CODE

    if isinstance(value, (int, np.integer)):
        if _INT32_MIN <= int(value) <= _INT32_MAX:
            return BSONType.NUMBER_INT
        return BSONType.NUMBER_LONG
    if isinstance(value, (float, np.floating)):
        return BSONType.NUMBER_DOUBLE
    if isinstance(value, decimal.Decimal):
        return BSONType.NUMBER_DECIMAL
    if isinstance(value, str):
        return BSONType.STRING
    if isinstance(value, (bytes, bytearray, memoryview, uuid.UUID)):
        return BSONType.BIN_DATA
    if isinstance(value, (datetime.datetime, datetime.date, np.datetime64)):
        return BSONType.DATE
    if isinstance(value, re.Pattern):
        return BSONType.REGEX

    raise UnknownScalarType(type(value).__name__)


class TypeMask(IntFlag):
    """Which parts of a type annotation to render."""

    NONE = 0
    NAME = 1
    DESC = 2
    CODE = 4
    ALL = 7

    @classmethod
    def parse(cls, text: str) -> TypeMask:
        """Parse ``none|name|desc|code|all`` or a ``+``/``,`` joined combination.

        Raises:
            ConfigError: If any part is not a recognized mask name.
        """
        mask = cls.NONE
        for part in re.split(r"[+,]", text.strip().lower()):
            if not part:
                continue
            try:
                mask |= cls[part.upper()]
            except KeyError:
                msg = (
                    f"invalid type mask {part!r}; "
                    "expected one of none, name, desc, code, all"
                )
                raise ConfigError(msg) from None
        return mask


def format_annotation(code: int | None, mask: TypeMask) -> str:
    """Render ``(name/description/code)`` restricted to the parts in ``mask``.

    Returns an empty string when ``mask`` is ``TypeMask.NONE``.  Unrecognized
    codes render as ``UNKNOWN``; a missing code renders as ``?``.
    """
    if not mask:
        return ""
    info = describe(code)
    parts: list[str] = []
    if mask & TypeMask.NAME:
        parts.append(info.name)
    if mask & TypeMask.DESC:
        parts.append(info.description)
    if mask & TypeMask.CODE:
        parts.append("?" if code is None else str(int(code)))
    return "(" + "/".join(parts) + ")"
