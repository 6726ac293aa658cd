"""Tests for scalar text rendering (display and JSON renditions)."""

from __future__ import annotations

import datetime
import decimal
import json
import re
import uuid

import numpy as np
import pytest
from bson import Code, Decimal128, MinKey, ObjectId, Regex, Timestamp
from bson.binary import Binary

from mongotype.formatting import display_text, json_key, json_text


class TestDisplayText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (5, "5"),
            (-2.5, "-2.5"),
            ("plain", '"plain"'),
            ('say "hi"', '"say \\"hi\\""'),
            ("été", '"été"'),
            (decimal.Decimal("1.10"), 'NumberDecimal("1.10")'),
            (b"\x00\x01", 'BinData(0, "AAE=")'),
            (uuid.UUID(int=1), 'UUID("00000000-0000-0000-0000-000000000001")'),
            (datetime.date(2014, 1, 23), 'ISODate("2014-01-23")'),
            (
                datetime.datetime(2014, 1, 23, 10, 0, tzinfo=datetime.UTC),
                'ISODate("2014-01-23T10:00:00+00:00")',
            ),
            (re.compile("^a.*", re.IGNORECASE | re.MULTILINE), "/^a.*/im"),
        ],
    )
    def test_values(self, value: object, expected: str) -> None:
        assert display_text(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (np.int64(7), "7"),
            (np.float64(0.25), "0.25"),
            (np.bool_(False), "false"),
            (np.datetime64("2014-01-23"), 'ISODate("2014-01-23")'),
        ],
    )
    def test_numpy_values(self, value: object, expected: str) -> None:
        assert display_text(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (
                ObjectId("52e0d1a1f1b0a1c2d3e4f5a6"),
                'ObjectId("52e0d1a1f1b0a1c2d3e4f5a6")',
            ),
            (Decimal128("1.10"), 'NumberDecimal("1.10")'),
            (Regex("^a", "i"), "/^a/i"),
            (Binary(b"\x00\x01", 5), 'BinData(5, "AAE=")'),
            (Timestamp(1400000000, 1), "Timestamp(1400000000, 1)"),
            (Code("function() {}"), "function() {}"),
            (MinKey(), "MinKey()"),
        ],
    )
    def test_bson_values(self, value: object, expected: str) -> None:
        assert display_text(value) == expected

    def test_unrecognized_falls_back_to_str(self) -> None:
        assert display_text(frozenset()) == "frozenset()"


class TestJsonText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (3, "3"),
            (0.5, "0.5"),
            ("a\nb", '"a\\nb"'),
            (np.int32(4), "4"),
            (np.bool_(True), "true"),
            (float("inf"), '"inf"'),
            (decimal.Decimal("2.50"), '"2.50"'),
            (datetime.date(2014, 1, 23), '"2014-01-23"'),
            (b"\xff", '"/w=="'),
            (re.compile("x", re.DOTALL), '"/x/s"'),
            (Decimal128("1.10"), '"1.10"'),
        ],
    )
    def test_values(self, value: object, expected: str) -> None:
        assert json_text(value) == expected

    @pytest.mark.parametrize(
        "value",
        [float("nan"), {1}, ObjectId(), uuid.uuid4(), "ctrl \x01 char"],
    )
    def test_always_valid_json(self, value: object) -> None:
        json.loads(json_text(value))

    def test_json_key_escapes(self) -> None:
        assert json_key('a"b') == '"a\\"b"'
        assert json.loads(json_key("é\t")) == "é\t"
