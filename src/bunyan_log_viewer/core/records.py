"""Bunyan JSON record decoding."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from .errors import DecodeError, FieldCoercionError
from .models import LogRecord, parse_level
from .values import ValueKind, classify, kind_of

TIME_KEYS = ("time", "timestamp")
STRING_KEYS = {"hostname": "hostname", "name": "name", "topic": "topic", "scope": "scope", "msg": "message"}
IGNORED_KEYS = frozenset({"severity", "v"})


def parse_iso_timestamp(value: str) -> datetime | None:
    """Parse an RFC3339/ISO8601 timestamp; naive values are taken as UTC."""
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if ts.tzinfo is None:
            return ts.replace(tzinfo=UTC)
        return ts.astimezone(UTC)
    except (OverflowError, ValueError):
        # Unparseable, or outside the datetime range once shifted to UTC.
        return None


def _parse_time(key: str, value: Any) -> datetime:
    kind = kind_of(value)
    if kind is ValueKind.NUMBER:
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise FieldCoercionError(key, value, "epoch milliseconds out of range") from e
    if kind is ValueKind.STRING:
        ts = parse_iso_timestamp(value)
        if ts is None:
            raise FieldCoercionError(key, value, "not an RFC3339 timestamp")
        return ts
    raise FieldCoercionError(key, value)


def _parse_severity(value: Any) -> int:
    kind = kind_of(value)
    if kind is ValueKind.NUMBER:
        return _parse_integer("level", value)
    if kind is ValueKind.STRING:
        level = parse_level(value)
        if level is None:
            raise FieldCoercionError("level", value, "unknown level name")
        return int(level)
    raise FieldCoercionError("level", value)


def _parse_integer(key: str, value: Any) -> int:
    if kind_of(value) is not ValueKind.NUMBER:
        raise FieldCoercionError(key, value)
    try:
        return int(value)
    except (OverflowError, ValueError) as e:
        raise FieldCoercionError(key, value) from e


def decode_record(obj: dict[str, Any], *, raw: str | None = None) -> tuple[LogRecord, list[FieldCoercionError]]:
    """Decode a JSON object into a LogRecord.

    Type mismatches on well-known keys are collected and returned alongside the
    record; the offending attributes keep their defaults.
    """
    errors: list[FieldCoercionError] = []
    attrs: dict[str, Any] = {}
    fields: dict[str, Any] = {}
    blobs: dict[str, Any] = {}

    time_key = next((k for k in TIME_KEYS if k in obj), None)

    for key, value in obj.items():
        try:
            if key == time_key:
                attrs["time"] = _parse_time(key, value)
            elif key in STRING_KEYS:
                if kind_of(value) is not ValueKind.STRING:
                    raise FieldCoercionError(key, value)
                attrs[STRING_KEYS[key]] = value
            elif key == "level":
                attrs["level"] = _parse_severity(value)
            elif key in ("pid", "tid"):
                attrs[key] = _parse_integer(key, value)
            elif key in IGNORED_KEYS:
                continue
            elif classify(value) == "fields":
                fields[key] = value
            else:
                blobs[key] = value
        except FieldCoercionError as e:
            errors.append(e)

    record = LogRecord(
        **attrs,
        fields=dict(sorted(fields.items())),
        blobs=dict(sorted(blobs.items())),
        source=obj,
        raw=raw,
    )
    return record, errors


def parse_line(line: str) -> tuple[LogRecord, list[FieldCoercionError]]:
    """Decode one raw input line.

    Raises DecodeError when the line is not a JSON object, including JSON the
    decoder refuses (oversized integers, nesting beyond the recursion limit).
    """
    try:
        obj = json.loads(line)
    except (ValueError, RecursionError) as e:
        raise DecodeError(line, str(e)) from e
    if not isinstance(obj, dict):
        raise DecodeError(line, "not a JSON object")
    return decode_record(obj, raw=line)
