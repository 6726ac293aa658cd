"""Integrations subpackage for mongotype.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point) providing the
  ``assert_renders_as`` fixture
"""
