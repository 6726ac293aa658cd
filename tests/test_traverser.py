"""Tests for DocumentTraverser: event order, positions, ordering, errors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

from mongotype import render
from mongotype.config import FieldOrder, RenderConfig, RenderStyle
from mongotype.errors import MalformedNode
from mongotype.traverser import DocumentTraverser
from mongotype.tree.nodes import DocumentNode, NodeKind

if TYPE_CHECKING:
    from conftest import RecordingVisitor

# ---------------------------------------------------------------------------
# Event sequence
# ---------------------------------------------------------------------------


class TestEventSequence:
    def test_nested_object(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"a": {"b": 5}})
        assert [(name, depth) for name, depth, _ in recorder.events] == [
            ("traverse_start", -1),
            ("object_start", 1),
            ("object_start", 2),
            ("element", 3),
            ("object_end", 2),
            ("object_end", 1),
            ("traverse_end", -1),
        ]

    def test_array_events(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"x": [1, [2]]})
        assert recorder.names == [
            "traverse_start",
            "object_start",
            "array_start",
            "element",
            "array_start",
            "element",
            "array_end",
            "array_end",
            "object_end",
            "traverse_end",
        ]

    def test_empty_document(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({})
        assert recorder.names == [
            "traverse_start",
            "object_start",
            "object_end",
            "traverse_end",
        ]

    def test_one_element_event_per_scalar(
        self, recorder: RecordingVisitor, nested_doc: dict[str, Any]
    ) -> None:
        DocumentTraverser(recorder).parse(nested_doc)
        keys = [top.key for top in recorder.tops("element")]
        assert keys == [
            "name",
            "age",
            "city",
            "zip",
            "0",
            "1",
            "0",
            "1",
            "0",
            "first",
            "first",
            "active",
            "spouse",
        ]

    def test_start_and_end_see_same_entry(
        self, recorder: RecordingVisitor, nested_doc: dict[str, Any]
    ) -> None:
        DocumentTraverser(recorder).parse(nested_doc)
        assert recorder.tops("object_start") != []
        assert sorted(map(id, recorder.tops("object_start"))) == sorted(
            map(id, recorder.tops("object_end"))
        )
        assert sorted(map(id, recorder.tops("array_start"))) == sorted(
            map(id, recorder.tops("array_end"))
        )

    def test_accepts_document_node(self, recorder: RecordingVisitor) -> None:
        root = DocumentNode(
            NodeKind.OBJECT,
            children=[DocumentNode(NodeKind.SCALAR, key="a", value=1, type_code=16)],
        )
        DocumentTraverser(recorder).parse(root)
        (element,) = recorder.tops("element")
        assert element.node is root.children[0]


# ---------------------------------------------------------------------------
# Positional bookkeeping
# ---------------------------------------------------------------------------


class TestPositions:
    def test_object_fields(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"a": 1, "b": 2, "c": 3})
        tops = recorder.tops("element")
        assert [(t.sibling_index, t.sibling_count) for t in tops] == [
            (0, 3),
            (1, 3),
            (2, 3),
        ]
        assert all(t.array_index == -1 and t.array_count == 0 for t in tops)

    def test_array_elements(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"x": ["p", "q"]})
        tops = recorder.tops("element")
        assert [(t.sibling_index, t.array_index) for t in tops] == [(0, 0), (1, 1)]
        assert all(t.sibling_count == t.array_count == 2 for t in tops)

    def test_fields_inherit_enclosing_array_position(
        self, recorder: RecordingVisitor
    ) -> None:
        DocumentTraverser(recorder).parse({"p": [{"a": 1}, {"a": 2, "b": 3}]})
        tops = recorder.tops("element")
        positions = [(t.key, t.sibling_index, t.array_index, t.array_count) for t in tops]
        assert positions == [
            ("a", 0, 0, 2),
            ("a", 0, 1, 2),
            ("b", 1, 1, 2),
        ]

    def test_root_entry(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"a": 1})
        root = recorder.tops("object_start")[0]
        assert (root.key, root.sibling_index, root.sibling_count) == ("", 0, 1)
        assert recorder.parents[1] is None

    def test_parent_of_array_element(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"x": [1]})
        index = recorder.names.index("element")
        parent = recorder.parents[index]
        assert parent is not None
        assert (parent.kind, parent.key) == (NodeKind.ARRAY, "x")

    def test_length_of_structural_entries(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse({"x": [1, 2, 3], "o": {}})
        assert recorder.tops("array_start")[0].length == 3
        assert [t.length for t in recorder.tops("object_start")] == [2, 0]


# ---------------------------------------------------------------------------
# Context lifecycle
# ---------------------------------------------------------------------------


class TestContextLifecycle:
    def test_depth_zero_at_traverse_end(
        self, recorder: RecordingVisitor, nested_doc: dict[str, Any]
    ) -> None:
        DocumentTraverser(recorder).parse(nested_doc)
        assert recorder.depth_at_end == 0

    def test_fresh_context_per_parse(self, recorder: RecordingVisitor) -> None:
        traverser = DocumentTraverser(recorder)
        traverser.parse({"a": 1})
        first = [depth for _, depth, _ in recorder.events]
        recorder.events.clear()
        traverser.parse({"a": 1})
        assert [depth for _, depth, _ in recorder.events] == first

    def test_context_released_after_failure(self, recorder: RecordingVisitor) -> None:
        traverser = DocumentTraverser(recorder)
        orphan = DocumentNode(NodeKind.SCALAR, key="x")
        scalar = DocumentNode(NodeKind.SCALAR, key="s", value=5, children=[orphan])
        bad = DocumentNode(NodeKind.OBJECT, children=[scalar])
        with pytest.raises(MalformedNode):
            traverser.parse(bad)
        recorder.events.clear()
        traverser.parse({"ok": True})
        assert recorder.events[1][1] == 1


# ---------------------------------------------------------------------------
# Field ordering
# ---------------------------------------------------------------------------


class TestFieldOrder:
    DOC: dict[str, Any] = {"z": {"k": 1}, "b": 2, "a": [3], "c": 4}

    _OPENING = ("object_start", "array_start", "element")

    def _visited(self, recorder: RecordingVisitor, depth: int) -> list[str]:
        return [
            top.key
            for name, level, top in recorder.events
            if top is not None and level == depth and name in self._OPENING
        ]

    def test_insertion_order_default(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder).parse(self.DOC)
        assert self._visited(recorder, 2) == ["z", "b", "a", "c"]

    def test_lexical_order(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder, field_order=FieldOrder.LEXICAL).parse(self.DOC)
        assert self._visited(recorder, 2) == ["a", "b", "c", "z"]

    def test_scalar_first_is_stable(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(recorder, scalar_first=True).parse(self.DOC)
        assert self._visited(recorder, 2) == ["b", "c", "z", "a"]

    def test_lexical_and_scalar_first(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(
            recorder, field_order=FieldOrder.LEXICAL, scalar_first=True
        ).parse(self.DOC)
        assert self._visited(recorder, 2) == ["b", "c", "a", "z"]

    def test_sibling_index_follows_visiting_order(
        self, recorder: RecordingVisitor
    ) -> None:
        DocumentTraverser(recorder, field_order=FieldOrder.LEXICAL).parse(
            {"b": 1, "a": 2}
        )
        tops = recorder.tops("element")
        assert [(t.key, t.sibling_index) for t in tops] == [("a", 0), ("b", 1)]

    def test_array_order_never_changes(self, recorder: RecordingVisitor) -> None:
        DocumentTraverser(
            recorder, field_order=FieldOrder.LEXICAL, scalar_first=True
        ).parse({"x": [{"o": 1}, 3, [2]]})
        assert self._visited(recorder, 3) == ["0", "1", "2"]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.parametrize("root", [[1, 2], 5, "text"])
    def test_root_must_be_object(self, recorder: RecordingVisitor, root: Any) -> None:
        with pytest.raises(MalformedNode, match="document root must be an object"):
            DocumentTraverser(recorder).parse(root)
        assert recorder.events == []

    def test_malformed_descendant_keeps_prior_events(
        self, recorder: RecordingVisitor
    ) -> None:
        root = DocumentNode(
            NodeKind.OBJECT,
            children=[
                DocumentNode(NodeKind.SCALAR, key="ok", value=1, type_code=16),
                DocumentNode(NodeKind.ARRAY, key="bad", value="oops"),
            ],
        )
        with pytest.raises(MalformedNode, match="carries a scalar value"):
            DocumentTraverser(recorder).parse(root)
        assert recorder.names == ["traverse_start", "object_start", "element"]

    def test_duplicate_fields_rejected(self, recorder: RecordingVisitor) -> None:
        root = DocumentNode(
            NodeKind.OBJECT,
            children=[
                DocumentNode(NodeKind.SCALAR, key="a", value=1),
                DocumentNode(NodeKind.SCALAR, key="a", value=2),
            ],
        )
        with pytest.raises(MalformedNode, match="duplicate field name"):
            DocumentTraverser(recorder).parse(root)

    @pytest.mark.parametrize(
        "bad",
        [
            DocumentNode(NodeKind.SCALAR, key="a", value={"b": 1}, type_code=16),
            DocumentNode(NodeKind.SCALAR, key="a", value="x", type_code=3),
        ],
    )
    def test_scalar_posing_as_document_rejected(self, bad: DocumentNode) -> None:
        root = DocumentNode(NodeKind.OBJECT, children=[bad])
        config = RenderConfig(style=RenderStyle.JSONPACKED)
        with pytest.raises(MalformedNode, match="scalar node"):
            render(root, config)

    def test_non_node_child_rejected(self, recorder: RecordingVisitor) -> None:
        root = DocumentNode(NodeKind.OBJECT, children=["not a node"])  # type: ignore[list-item]
        with pytest.raises(MalformedNode, match="DocumentNode child, got str"):
            DocumentTraverser(recorder).parse(root)


# ---------------------------------------------------------------------------
# Tracing
# ---------------------------------------------------------------------------


class TestTrace:
    def test_trace_logs_each_event(
        self, recorder: RecordingVisitor, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="mongotype.traverser"):
            DocumentTraverser(recorder, trace=True).parse({"a": [1]})
        messages = [record.getMessage() for record in caplog.records]
        assert len(messages) == 5
        assert messages[0].startswith("object_start")
        assert "path='/a/0'" in messages[2]

    def test_no_trace_by_default(
        self, recorder: RecordingVisitor, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="mongotype.traverser"):
            DocumentTraverser(recorder).parse({"a": [1]})
        assert caplog.records == []
