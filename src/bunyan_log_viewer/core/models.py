"""Core data models for the log viewer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from enum import Enum, IntEnum
from typing import Any

from .values import canonical_string, format_number


class LogLevel(IntEnum):
    """Bunyan severity levels (ordered)."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60


_LEVEL_ALIASES = {
    "WARNING": "WARN",
    "ERR": "ERROR",
    "CRITICAL": "FATAL",
    "CRIT": "FATAL",
    "PANIC": "FATAL",
    "INFORMATION": "INFO",
    "VERBOSE": "TRACE",
}


def parse_level(value: str) -> LogLevel | None:
    """Parse a level name (case-insensitive, common aliases accepted)."""
    name = value.strip().upper()
    if not name:
        return None
    name = _LEVEL_ALIASES.get(name, name)
    try:
        return LogLevel[name]
    except KeyError:
        return None


def level_label(level: int) -> str:
    """Display name of a numeric severity: ``INFO``, or ``LVL35`` when not a known level."""
    try:
        return LogLevel(level).name
    except ValueError:
        return f"LVL{level}"


def format_rfc3339(ts: datetime) -> str:
    """RFC3339 text with millisecond precision, ``Z`` for UTC."""
    text = ts.isoformat(timespec="milliseconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True, slots=True)
class LogRecord:
    """One decoded Bunyan log line.

    ``fields`` holds scalar (and empty-array) extension values, ``blobs`` holds
    non-empty arrays and objects.
    """

    time: datetime | None = None
    level: int = 0
    hostname: str = ""
    name: str = ""
    pid: int = 0
    tid: int = 0
    topic: str = ""
    scope: str = ""
    message: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    blobs: dict[str, Any] = field(default_factory=dict)
    source: dict[str, Any] = field(default_factory=dict)  # the decoded JSON object
    raw: str | None = None  # original line

    def get_field(self, name: str) -> str:
        """Return the string form of a field, or ``""`` when it is absent."""
        if name in self.fields:
            return canonical_string(self.fields[name])
        if name == "level":
            return level_label(self.level)
        if name == "time":
            return format_rfc3339(self.time) if self.time is not None else ""
        if name == "hostname":
            return self.hostname
        if name == "name":
            return self.name
        if name == "pid":
            return format_number(self.pid)
        if name == "tid":
            return format_number(self.tid)
        if name == "topic":
            return self.topic
        if name == "scope":
            return self.scope
        if name == "msg":
            return self.message
        if name in self.blobs:
            return canonical_string(self.blobs[name])
        return ""


class OutputMode(str, Enum):
    """Render modes understood by the viewer."""

    LONG = "long"
    SHORT = "short"
    SIMPLE = "simple"
    JSON = "json"
    BUNYAN = "bunyan"


def parse_output_mode(value: str) -> tuple[OutputMode, int]:
    """Parse an output mode name; ``json-N`` selects JSON with an N-space indent.

    Returns the mode and the JSON indent.
    """
    name = value.strip().lower()
    if name.startswith("json-"):
        indent = name[len("json-") :]
        if not indent.isdigit():
            raise ValueError(f"Invalid JSON indent in output mode '{value}'")
        return OutputMode.JSON, int(indent)
    try:
        return OutputMode(name), 2
    except ValueError as e:
        valid = ", ".join(m.value for m in OutputMode)
        raise ValueError(f"Unknown output mode '{value}'. Valid values: {valid}, json-N.") from e


@dataclass(frozen=True, slots=True)
class OutputOptions:
    """Read-only render configuration.

    ``timezone`` of ``None`` means UTC.
    """

    mode: OutputMode = OutputMode.LONG
    timezone: tzinfo | None = None
    use_colors: bool = False
    json_indent: int = 2

    @property
    def is_utc(self) -> bool:
        return self.timezone is None or self.timezone is UTC
