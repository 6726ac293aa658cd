"""Renderers subpackage: one Renderer per output style.

All renderers derive from ``Renderer`` and satisfy the ``Visitor`` Protocol.
``create_renderer`` selects the implementation for a ``RenderConfig``:

    dotted     -> DottedRenderer
    tree       -> TreeRenderer
    json       -> JsonRenderer (pretty)
    jsonpacked -> JsonRenderer (packed)
"""

from __future__ import annotations

from mongotype.config import RenderConfig, RenderStyle
from mongotype.renderers.base import Renderer
from mongotype.renderers.dotted import DottedRenderer
from mongotype.renderers.json import JsonRenderer
from mongotype.renderers.tree import TreeRenderer

__all__ = [
    "DottedRenderer",
    "JsonRenderer",
    "Renderer",
    "TreeRenderer",
    "create_renderer",
]

_RENDERERS: dict[RenderStyle, type[Renderer]] = {
    RenderStyle.DOTTED: DottedRenderer,
    RenderStyle.TREE: TreeRenderer,
    RenderStyle.JSON: JsonRenderer,
    RenderStyle.JSONPACKED: JsonRenderer,
}


def create_renderer(config: RenderConfig | None = None) -> Renderer:
    """Return a fresh renderer for ``config.style`` (defaults when None)."""
    config = config if config is not None else RenderConfig()
    return _RENDERERS[config.style](config)
