"""Tests for dollarsmith.serialization."""

import json

import pytest

from dollarsmith import analyze
from dollarsmith.errors import SerializationError
from dollarsmith.nodes import (
    MathDelimiter,
    ProtectedSpan,
    SpanKind,
    TextRegion,
    ValidationIssue,
    ValidationResult,
)
from dollarsmith.serialization import from_dict, from_json, spans_from_json, to_dict, to_json


class TestToDict:
    def test_protected_span(self) -> None:
        span = ProtectedSpan(SpanKind.FENCED_CODE, 3, 9)
        assert to_dict(span) == {"_type": "ProtectedSpan", "kind": "fenced-code", "start": 3, "end": 9}

    def test_result_shape(self) -> None:
        result = analyze(r"Bad \({math\) \(ok\)", strict_mode=True)
        data = to_dict(result)
        assert data["_type"] == "NormalizationResult"
        assert data["stats"] == {
            "_type": "NormalizationStats",
            "total_found": 2,
            "converted": 1,
            "skipped": 1,
        }
        assert data["edits"][0]["insert"] == "$ok$"
        assert data["issues"] == [
            {
                "_type": "ValidationIssue",
                "kind": "unbalanced-braces",
                "message": "Unbalanced braces {}",
                "position": 0,
            }
        ]

    def test_rejects_foreign_objects(self) -> None:
        with pytest.raises(SerializationError):
            to_dict({"not": "a record"})


class TestRoundTrip:
    @pytest.mark.parametrize(
        "record",
        [
            ProtectedSpan(SpanKind.IMAGE, 0, 4),
            TextRegion(2, 8),
            MathDelimiter("display", 0, 6, "\\[", "\\]", "xy", 2, 4),
            ValidationIssue("empty-content", "Math content is empty"),
            ValidationResult(False, (ValidationIssue("unbalanced-brackets", "m", 1),)),
        ],
    )
    def test_records(self, record: object) -> None:
        assert from_dict(to_dict(record)) == record

    def test_result_through_json(self) -> None:
        result = analyze(r"\(a\) \[b\] \({c\)", strict_mode=True)
        assert from_json(to_json(result)) == result

    def test_json_sorted_keys(self) -> None:
        text = to_json(TextRegion(0, 1))
        assert list(json.loads(text)) == sorted(json.loads(text))


class TestFromDictErrors:
    def test_unknown_type(self) -> None:
        with pytest.raises(SerializationError, match="Unknown record type"):
            from_dict({"_type": "Nope"})

    def test_missing_type(self) -> None:
        with pytest.raises(SerializationError):
            from_dict({"start": 0, "end": 1})

    def test_bad_fields(self) -> None:
        with pytest.raises(SerializationError, match="Invalid fields"):
            from_dict({"_type": "TextRegion", "start": 0, "bogus": 1})

    def test_invalid_json(self) -> None:
        with pytest.raises(SerializationError, match="Invalid JSON"):
            from_json("{not json")


class TestSpansFromJson:
    def test_reads_spans(self) -> None:
        payload = '[{"kind": "inline-code", "start": 5, "end": 11}, {"_type": "ProtectedSpan", "kind": "image", "start": 0, "end": 2}]'
        assert spans_from_json(payload) == [
            ProtectedSpan(SpanKind.INLINE_CODE, 5, 11),
            ProtectedSpan(SpanKind.IMAGE, 0, 2),
        ]

    def test_empty_array(self) -> None:
        assert spans_from_json("[]") == []

    def test_unknown_kind(self) -> None:
        with pytest.raises(SerializationError):
            spans_from_json('[{"kind": "table", "start": 0, "end": 1}]')

    def test_missing_offset(self) -> None:
        with pytest.raises(SerializationError, match="missing 'end'"):
            spans_from_json('[{"kind": "image", "start": 0}]')

    def test_not_an_array(self) -> None:
        with pytest.raises(SerializationError, match="JSON array"):
            spans_from_json('{"kind": "image"}')
