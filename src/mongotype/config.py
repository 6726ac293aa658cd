"""RenderConfig, RenderStyle and FieldOrder for output configuration.

RenderConfig is a frozen (immutable) dataclass holding every option that
shapes rendered output.  Values are resolved in increasing precedence:

1. Defaults (this file)
2. Config file (TOML, ``--config``) if given
3. Command-line flags

Config file example::

    style = "tree"
    type = "name+code"
    indent = "    "
    scalar_first = true
    sort_keys = false
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields, replace
from enum import StrEnum, auto
from pathlib import Path
from typing import Any

from mongotype.errors import ConfigError
from mongotype.types import TypeMask

__all__ = ["FieldOrder", "RenderConfig", "RenderStyle", "load_config"]

logger = logging.getLogger(__name__)


class RenderStyle(StrEnum):
    """Output encodings.

    - DOTTED:     one ``path.key value (type)`` line per scalar.
    - TREE:       indented braces with ``{ARRAY[n]}`` counts.
    - JSON:       pretty-printed JSON array of documents.
    - JSONPACKED: the same JSON without whitespace.
    """

    DOTTED = auto()
    TREE = auto()
    JSON = auto()
    JSONPACKED = auto()


class FieldOrder(StrEnum):
    """Order in which object fields are visited.

    - INSERTION: the order the mapping stores them.
    - LEXICAL:   sorted by field name.
    """

    INSERTION = auto()
    LEXICAL = auto()


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable rendering configuration.

    Attributes:
        style: Output encoding.
        type_mask: Parts of the ``(name/description/code)`` annotation to emit
            on scalar lines.  Ignored by the JSON styles.
        indent: Token repeated once per nesting level (tree and pretty JSON).
        field_order: Object field visiting order.
        scalar_first: When True, scalar fields are visited before embedded
            objects and arrays (stable within each group).
        trace: When True, the traverser logs every event at DEBUG level.
    """

    style: RenderStyle = RenderStyle.DOTTED
    type_mask: TypeMask = TypeMask.ALL
    indent: str = "  "
    field_order: FieldOrder = FieldOrder.INSERTION
    scalar_first: bool = False
    trace: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.style, RenderStyle):
            msg = f"style must be a RenderStyle, got {self.style!r}"
            raise ConfigError(msg)
        if not isinstance(self.type_mask, TypeMask):
            msg = f"type_mask must be a TypeMask, got {self.type_mask!r}"
            raise ConfigError(msg)
        if not isinstance(self.field_order, FieldOrder):
            msg = f"field_order must be a FieldOrder, got {self.field_order!r}"
            raise ConfigError(msg)
        if self.indent.strip():
            msg = f"indent must be whitespace only, got {self.indent!r}"
            raise ConfigError(msg)

    @classmethod
    def from_mapping(
        cls, data: dict[str, Any], base: RenderConfig | None = None
    ) -> RenderConfig:
        """Build a config from loosely typed values (config file or CLI).

        Recognized keys: ``style``, ``type`` (or ``type_mask``), ``indent``,
        ``scalar_first``, ``sort_keys``, ``field_order``, ``trace``.  Unknown
        keys are rejected.  Keys absent from ``data`` keep ``base``'s values.
        An ``indent`` given as a count (``4`` or ``"4"``) means that many spaces.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        base = base if base is not None else cls()
        known = {f.name for f in fields(cls)} | {"type", "sort_keys"}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"unknown configuration keys: {', '.join(unknown)}"
            raise ConfigError(msg)

        changes: dict[str, Any] = {}
        if "style" in data:
            changes["style"] = _parse_enum(RenderStyle, data["style"], "style")
        mask = data.get("type_mask", data.get("type"))
        if isinstance(mask, TypeMask):
            changes["type_mask"] = mask
        elif isinstance(mask, str):
            changes["type_mask"] = TypeMask.parse(mask)
        elif mask is not None:
            msg = f"type must be a string such as 'name+code', got {mask!r}"
            raise ConfigError(msg)
        if "indent" in data:
            indent = data["indent"]
            if isinstance(indent, str) and indent.isdigit():
                indent = int(indent)
            changes["indent"] = " " * indent if isinstance(indent, int) else str(indent)
        if "field_order" in data:
            changes["field_order"] = _parse_enum(
                FieldOrder, data["field_order"], "field_order"
            )
        if data.get("sort_keys") is not None:
            changes["field_order"] = (
                FieldOrder.LEXICAL if data["sort_keys"] else FieldOrder.INSERTION
            )
        for flag in ("scalar_first", "trace"):
            if data.get(flag) is not None:
                changes[flag] = bool(data[flag])
        return replace(base, **changes)


def _parse_enum(enum_cls: type[StrEnum], value: Any, option: str) -> Any:
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        msg = f"invalid {option} {value!r}; expected one of {choices}"
        raise ConfigError(msg) from None


def load_config(path: str | Path, base: RenderConfig | None = None) -> RenderConfig:
    """Load a TOML config file on top of ``base`` (defaults when None).

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or holds
            invalid options.
    """
    path = Path(path)
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        msg = f"cannot read config file {path}: {exc.strerror or exc}"
        raise ConfigError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"invalid TOML in config file {path}: {exc}"
        raise ConfigError(msg) from exc
    logger.debug("Loaded config file %s: %s", path, data)
    return RenderConfig.from_mapping(data, base)
