"""Boolean expression tree of the condition language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..errors import InvalidOperandTypeError
from ..models import LogRecord
from .leaves import LeafNode, RegexNode


class ConditionNode(Protocol):
    def evaluate(self, record: LogRecord) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class AndNode:
    left: ConditionNode
    right: ConditionNode

    def evaluate(self, record: LogRecord) -> bool:
        return self.left.evaluate(record) and self.right.evaluate(record)


@dataclass(frozen=True, slots=True)
class OrNode:
    left: ConditionNode
    right: ConditionNode

    def evaluate(self, record: LogRecord) -> bool:
        return self.left.evaluate(record) or self.right.evaluate(record)


@dataclass(frozen=True, slots=True)
class NotNode:
    node: ConditionNode

    def evaluate(self, record: LogRecord) -> bool:
        return not self.node.evaluate(record)


@dataclass(frozen=True, slots=True)
class EqualsNode:
    """String equality of two operands."""

    left: LeafNode
    right: LeafNode

    def evaluate(self, record: LogRecord) -> bool:
        return self.left.get_value(record) == self.right.get_value(record)


@dataclass(frozen=True, slots=True)
class MatchNode:
    """Regex search of the right operand's pattern in the left operand's value."""

    left: LeafNode
    right: RegexNode

    @classmethod
    def create(cls, left: LeafNode, right: LeafNode) -> MatchNode:
        if not isinstance(right, RegexNode):
            raise InvalidOperandTypeError(str(right))
        return cls(left, right)

    def evaluate(self, record: LogRecord) -> bool:
        return self.right.matches(self.left.get_value(record))
