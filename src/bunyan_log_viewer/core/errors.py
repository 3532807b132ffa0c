"""Exception types raised by the log viewer."""

from __future__ import annotations

from typing import Any


class LogViewerError(Exception):
    """Base class for all log viewer errors."""


class DecodeError(LogViewerError, ValueError):
    """A line could not be decoded into a JSON object."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"Cannot decode log line: {reason}")
        self.line = line


class FieldCoercionError(LogViewerError, ValueError):
    """A well-known key holds a value of the wrong JSON type."""

    def __init__(self, key: str, value: Any, reason: str | None = None) -> None:
        message = f"Invalid value for '{key}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.key = key
        self.value = value


class ConditionError(LogViewerError, ValueError):
    """A condition expression cannot be compiled."""


class MalformedExpressionError(ConditionError):
    def __init__(self, expression: str) -> None:
        super().__init__(f"Malformed condition: '{expression}'")
        self.expression = expression


class InvalidOperandTypeError(ConditionError):
    def __init__(self, operand: str, expected: str = "regular expression") -> None:
        super().__init__(f"Operand '{operand}' must be a {expected}")
        self.operand = operand


class InvalidLevelSpecError(LogViewerError, ValueError):
    """A level-set specification cannot be parsed."""


class ConfigError(LogViewerError, ValueError):
    """Configuration file or environment values are invalid."""
