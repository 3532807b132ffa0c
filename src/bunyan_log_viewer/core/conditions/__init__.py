"""Condition expression language.

Leaf operands, the boolean expression tree, and the parser that builds it.
"""

from __future__ import annotations

from .leaves import BooleanNode, ConstantNode, FieldNode, LeafNode, NumberNode, RegexNode, parse_leaf
from .nodes import AndNode, ConditionNode, EqualsNode, MatchNode, NotNode, OrNode
from .parser import parse_condition

__all__ = [
    "AndNode",
    "BooleanNode",
    "ConditionNode",
    "ConstantNode",
    "EqualsNode",
    "FieldNode",
    "LeafNode",
    "MatchNode",
    "NotNode",
    "NumberNode",
    "OrNode",
    "RegexNode",
    "parse_condition",
    "parse_leaf",
]
