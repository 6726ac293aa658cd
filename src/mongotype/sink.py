"""Output sinks: where renderers write their text.

A sink is anything with ``write(str)`` and ``flush()``: ``sys.stdout``, an
open text file, or ``io.StringIO`` for in-memory capture.  Renderers receive
the sink as an explicit argument at render time and never keep it between
calls.

``open_sink`` scopes a sink to a ``with`` block and guarantees it is flushed
on every exit path, including errors, so partial output is never lost.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

__all__ = ["OutputSink", "open_sink"]

logger = logging.getLogger(__name__)


@runtime_checkable
class OutputSink(Protocol):
    """Structural protocol for appendable text destinations."""

    def write(self, text: str, /) -> Any: ...

    def flush(self) -> None: ...


@contextmanager
def open_sink(target: str | Path | OutputSink | None = None) -> Iterator[OutputSink]:
    """Yield a sink for ``target`` and flush it when the block exits.

    Args:
        target: A file path, ``"-"`` or None for stdout, or an existing sink
            (used as-is and left open).

    Yields:
        The sink.  Files opened here are closed on exit; stdout and caller
        supplied sinks are only flushed.
    """
    if target is None or target == "-":
        sink: OutputSink = sys.stdout
        owned = False
    elif isinstance(target, (str, Path)):
        sink = Path(target).open("w", encoding="utf-8")  # noqa: SIM115
        owned = True
        logger.debug("Writing output to %s", target)
    else:
        sink = target
        owned = False
    try:
        yield sink
    finally:
        sink.flush()
        if owned:
            sink.close()  # type: ignore[attr-defined]
