"""pytest plugin for mongotype.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import difflib
from typing import Any

import pytest

from mongotype import RenderConfig, RenderStyle, render


@pytest.fixture(scope="session")
def assert_renders_as() -> Any:
    """Fixture that returns a callable rendering asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to render() which creates a fresh renderer per call).

    Usage in tests::

        def test_dotted(assert_renders_as):
            assert_renders_as({"a": {"b": 5}}, "db{0}.a.b 5\\n", type_mask="none",
                              label="db{0}")

        def test_tree(assert_renders_as):
            assert_renders_as({"a": 1}, "{\\n  a: 1\\n}\\n", style="tree",
                              type_mask="none")

    Returns:
        A callable ``_assert(document, expected, style="dotted", label=None,
        config=None, **options) -> None`` that raises ``AssertionError`` with a
        unified diff when the rendering differs from ``expected``.  ``options``
        are ``RenderConfig.from_mapping`` keys (``type_mask``, ``indent``,
        ``scalar_first``, ``sort_keys``).
    """

    def _assert(
        document: Any,
        expected: str,
        style: str | RenderStyle = RenderStyle.DOTTED,
        label: str | None = None,
        config: RenderConfig | None = None,
        **options: Any,
    ) -> None:
        config = RenderConfig.from_mapping({"style": style, **options}, config)
        actual = render(document, config=config, label=label)
        if actual != expected:
            diff = "\n".join(
                difflib.unified_diff(
                    expected.splitlines(),
                    actual.splitlines(),
                    fromfile="expected",
                    tofile="actual",
                    lineterm="",
                )
            )
            raise AssertionError(
                f"rendering differs ({config.style}):\n{diff}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert
