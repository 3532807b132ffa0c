"""Human-readable rendering of log records.

Long mode::

    [2024-05-01T10:00:00.000] ERROR: api/42 on web-1: http/get request failed (status=500, tid=7)
        request: {
          "path": "/items",
          "tags": ["a", "b"]
        }

Short mode drops the brackets, the date, pid and hostname.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import Any

from .colors import LEVEL_COLORS, MESSAGE_COLOR, SCOPE_COLOR, TOPIC_COLOR, colorize
from .models import LogRecord, OutputMode, OutputOptions, level_label
from .values import SCALAR_KINDS, ValueKind, format_bool, format_number, kind_of

INLINE_ARRAY_LIMIT = 20
BLOB_INDENT = 4
INDENT_STEP = 2
# Containers nested deeper than this render as a marker instead of recursing.
MAX_BLOB_DEPTH = 64


def _format_offset(offset: timedelta | None) -> str:
    if not offset:
        return "Z"
    sign = "+" if offset >= timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_timestamp(ts: datetime, options: OutputOptions) -> str:
    """Header timestamp (including its trailing space) for the configured mode.

    Times the display zone would shift past the datetime range are shown in UTC.
    """
    utc = options.is_utc
    local = ts.astimezone(UTC)
    if not utc:
        try:
            local = ts.astimezone(options.timezone)
        except (OverflowError, ValueError):
            utc = True
    clock = local.strftime("%H:%M:%S") + f".{local.microsecond // 1000:03d}"

    if options.mode is OutputMode.SHORT:
        return f"{clock}Z " if utc else f"{clock} "

    # %Y is not zero-padded below year 1000 on every platform.
    stamp = f"{local.year:04d}-{local.month:02d}-{local.day:02d}T{clock}"
    if not utc:
        stamp += _format_offset(local.utcoffset())
    return f"[{stamp}] "


def format_level(level: int, options: OutputOptions) -> str:
    return colorize(level_label(level).rjust(5), LEVEL_COLORS.get(level, ""), options.use_colors)


def _header(record: LogRecord, options: OutputOptions) -> str:
    parts: list[str] = []
    if record.time is not None:
        parts.append(format_timestamp(record.time, options))
    parts.append(format_level(record.level, options))

    if options.mode is OutputMode.SHORT:
        if record.name:
            parts.append(f" {record.name}")
    else:
        parts.append(": ")
        parts.append(record.name)
        if record.pid > 0:
            parts.append(f"/{record.pid}")
        if record.hostname:
            parts.append(f" on {record.hostname}")
    return "".join(parts)


def _topic_and_scope(record: LogRecord, options: OutputOptions) -> str:
    if not record.topic:
        return ""
    out = colorize(record.topic, TOPIC_COLOR, options.use_colors)
    if record.scope:
        out += "/" + colorize(record.scope, SCOPE_COLOR, options.use_colors)
    return out + " "


def format_field_value(value: Any) -> str:
    """Inline ``key=value`` text of a scalar (or empty array) field."""
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return "<null>"
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.NUMBER:
        return format_number(value)
    if kind is ValueKind.BOOL:
        return format_bool(value)
    if kind is ValueKind.ARRAY:
        return "[" + ", ".join(format_field_value(item) for item in value) + "]"
    return str(value)


def _inline_fields(record: LogRecord) -> str:
    items = [f"{key}={format_field_value(value)}" for key, value in record.fields.items()]
    # tid always closes the list
    items.append(f"tid={record.tid}")
    return "(" + ", ".join(items) + ")"


def render_blob(value: Any, indent: int = BLOB_INDENT, depth: int = 0) -> str:
    """Render a blob value; nested lines are indented relative to ``indent``.

    Objects always span several lines, even when empty. Containers nested
    deeper than ``MAX_BLOB_DEPTH`` render as ``!!![...]`` or ``!!!{...}``.
    """
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return f'"{value}"'
    if kind is ValueKind.NUMBER:
        return format_number(value)
    if kind is ValueKind.BOOL:
        return format_bool(value)
    if kind is ValueKind.NULL:
        return "<null>"

    inner = " " * (indent + INDENT_STEP)
    if kind is ValueKind.ARRAY:
        if depth >= MAX_BLOB_DEPTH:
            return "!!![...]"
        if len(value) < INLINE_ARRAY_LIMIT and all(kind_of(v) in SCALAR_KINDS for v in value):
            return "[" + ", ".join(render_blob(v, indent) for v in value) + "]"
        lines = [inner + render_blob(v, indent + INDENT_STEP, depth + 1) for v in value]
        return "[\n" + ",\n".join(lines) + "\n" + " " * indent + "]"
    if kind is ValueKind.OBJECT:
        if depth >= MAX_BLOB_DEPTH:
            return "!!!{...}"
        lines = [f'{inner}"{k}": {render_blob(v, indent + INDENT_STEP, depth + 1)}' for k, v in value.items()]
        body = ",\n".join(lines)
        if body:
            body += "\n"
        return "{\n" + body + " " * indent + "}"
    return f"!!!{value}"


def _blobs(record: LogRecord) -> str:
    pad = " " * BLOB_INDENT
    return "\n".join(f"{pad}{key}: {render_blob(value, BLOB_INDENT)}" for key, value in record.blobs.items())


def _dump_json(record: LogRecord, **kwargs: Any) -> str:
    try:
        return json.dumps(record.source, ensure_ascii=False, default=str, **kwargs)
    except RecursionError:
        # Nesting the decoder accepted can still exhaust the encoder.
        return record.raw if record.raw is not None else "!!!{...}"


def render_record(record: LogRecord, options: OutputOptions) -> str:
    """Render a record as text (may span several lines, no trailing newline)."""
    if options.mode is OutputMode.JSON:
        indent = options.json_indent if options.json_indent > 0 else None
        return _dump_json(record, indent=indent)
    if options.mode is OutputMode.BUNYAN:
        return _dump_json(record, separators=(",", ":"))
    if options.mode is OutputMode.SIMPLE:
        level = colorize(level_label(record.level), LEVEL_COLORS.get(record.level, ""), options.use_colors)
        return f"{level} - {record.message}"

    out = (
        _header(record, options)
        + ": "
        + _topic_and_scope(record, options)
        + colorize(record.message, MESSAGE_COLOR, options.use_colors)
        + " "
        + _inline_fields(record)
    )
    if record.blobs:
        out += "\n" + _blobs(record)
    return out
