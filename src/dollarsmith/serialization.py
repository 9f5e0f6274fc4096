"""Serialization of dollarsmith records to and from JSON.

Every record in dollarsmith.nodes converts to a JSON-compatible dict with a
``_type`` discriminator. Useful for:
- Receiving protected spans from a parser written in another language
- Handing NormalizationResults to an editor integration
- Debugging and inspection

All JSON output is deterministic (sorted keys).

Example:
    from dollarsmith import analyze
    from dollarsmith.serialization import to_json, from_json

    result = analyze("\\\\(x\\\\)")
    restored = from_json(to_json(result))
    assert restored == result

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

import json
from dataclasses import fields, is_dataclass
from typing import Any

from dollarsmith.errors import SerializationError
from dollarsmith.nodes import (
    MathDelimiter,
    NormalizationEdit,
    NormalizationResult,
    NormalizationStats,
    ProtectedSpan,
    SpanKind,
    TextRegion,
    ValidationIssue,
    ValidationResult,
)

# Registry of record type names to classes for deserialization
_RECORD_TYPES: dict[str, type] = {
    "ProtectedSpan": ProtectedSpan,
    "TextRegion": TextRegion,
    "MathDelimiter": MathDelimiter,
    "ValidationIssue": ValidationIssue,
    "ValidationResult": ValidationResult,
    "NormalizationEdit": NormalizationEdit,
    "NormalizationStats": NormalizationStats,
    "NormalizationResult": NormalizationResult,
}

# Fields holding tuples of records
_TUPLE_FIELDS = {"edits", "issues"}


def to_dict(record: Any) -> dict[str, Any]:
    """Convert a record to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Raises:
        SerializationError: If ``record`` is not a dollarsmith record.

    """
    name = type(record).__name__
    if not is_dataclass(record) or _RECORD_TYPES.get(name) is not type(record):
        raise SerializationError(f"Cannot serialize {name}")

    result: dict[str, Any] = {"_type": name}
    for f in fields(record):
        result[f.name] = _serialize_value(getattr(record, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, SpanKind):
        return value.value
    if isinstance(value, tuple):
        return [_serialize_value(v) for v in value]
    if is_dataclass(value):
        return to_dict(value)
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Convert a dict produced by to_dict() back into a record.

    Raises:
        SerializationError: On a missing or unknown ``_type`` or bad fields.

    """
    if not isinstance(data, dict):
        raise SerializationError(f"Expected an object, got {type(data).__name__}")

    type_name = data.get("_type")
    cls = _RECORD_TYPES.get(type_name) if isinstance(type_name, str) else None
    if cls is None:
        raise SerializationError(f"Unknown record type: {type_name!r}")

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "_type":
            continue
        kwargs[key] = _deserialize_value(key, value)

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise SerializationError(f"Invalid fields for {type_name}: {e}") from e


def _deserialize_value(key: str, value: Any) -> Any:
    if key == "kind" and isinstance(value, str):
        try:
            return SpanKind(value)
        except ValueError:
            # Delimiter and issue kinds are plain strings
            return value
    if key in _TUPLE_FIELDS and isinstance(value, list):
        return tuple(from_dict(v) for v in value)
    if key == "stats" and isinstance(value, dict):
        return from_dict(value)
    return value


def to_json(record: Any, *, indent: int | None = None) -> str:
    """Serialize a record to a JSON string (sorted keys)."""
    return json.dumps(to_dict(record), indent=indent, sort_keys=True)


def from_json(text: str) -> Any:
    """Deserialize a record from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    return from_dict(data)


def spans_from_json(text: str) -> list[ProtectedSpan]:
    """Read protected spans produced by an external parser.

    Expects a JSON array of ``{"kind": ..., "start": ..., "end": ...}``
    objects; ``_type`` is optional.

    Raises:
        SerializationError: On malformed JSON, unknown kinds or missing offsets.

    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise SerializationError("Protected spans must be a JSON array")

    spans: list[ProtectedSpan] = []
    for item in data:
        if not isinstance(item, dict):
            raise SerializationError(f"Protected span must be an object, got {item!r}")
        try:
            kind = SpanKind(item["kind"])
            start = int(item["start"])
            end = int(item["end"])
        except KeyError as e:
            raise SerializationError(f"Protected span missing {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Invalid protected span {item!r}: {e}") from e
        spans.append(ProtectedSpan(kind=kind, start=start, end=end))
    return spans


__all__ = ["from_dict", "from_json", "spans_from_json", "to_dict", "to_json"]
