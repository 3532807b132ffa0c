"""Leaf operands of the condition language."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Protocol

from ..models import LogRecord
from ..values import format_bool, format_number


class LeafNode(Protocol):
    """Operand interface: resolve to a string against a record."""

    def get_value(self, record: LogRecord) -> str:
        ...


@dataclass(frozen=True, slots=True)
class FieldNode:
    """Reference to a record field (``.name``)."""

    name: str

    def get_value(self, record: LogRecord) -> str:
        return record.get_field(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ConstantNode:
    value: str

    def get_value(self, record: LogRecord) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NumberNode:
    value: float

    def get_value(self, record: LogRecord) -> str:
        return format_number(self.value)

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, slots=True)
class BooleanNode:
    value: bool

    def get_value(self, record: LogRecord) -> str:
        return format_bool(self.value)

    def __str__(self) -> str:
        return format_bool(self.value)


@dataclass(frozen=True, slots=True)
class RegexNode:
    """Compiled ``/pattern/`` literal; compiled once when the condition is parsed."""

    regex: re.Pattern[str]

    def get_value(self, record: LogRecord) -> str:
        return self.regex.pattern

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None

    def __str__(self) -> str:
        return self.regex.pattern


def _parse_number(token: str) -> float | None:
    if "_" in token:
        return None
    try:
        number = float(token)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_leaf(token: str) -> LeafNode:
    """Turn an operand token into a leaf node.

    Never fails: anything unrecognized becomes a ConstantNode holding the token.
    """
    if token.startswith("."):
        return FieldNode(token[1:])
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return ConstantNode(token[1:-1])
    if len(token) >= 2 and token[0] == "/" and token[-1] == "/":
        try:
            return RegexNode(re.compile(token[1:-1]))
        except re.error:
            return ConstantNode(token)
    if token in ("true", "false"):
        return BooleanNode(token == "true")
    number = _parse_number(token)
    if number is not None:
        return NumberNode(number)
    return ConstantNode(token)
