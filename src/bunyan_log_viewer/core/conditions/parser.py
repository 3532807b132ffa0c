"""Condition expression parser.

Grammar (operators tried in this fixed order, each split on its first occurrence):

    condition := '(' condition ')'
               | '!' condition
               | condition '&&' condition
               | condition '||' condition
               | leaf '==' leaf
               | leaf '=~' leaf

Splitting is purely textual: parentheses and quoted literals are not scanned, so
an operator inside a string or regex literal still splits the expression.
"""

from __future__ import annotations

from collections.abc import Callable

from ..errors import MalformedExpressionError
from .leaves import LeafNode, parse_leaf
from .nodes import AndNode, ConditionNode, EqualsNode, MatchNode, NotNode, OrNode

LOGICAL_OPERATORS: tuple[tuple[str, Callable[[ConditionNode, ConditionNode], ConditionNode]], ...] = (
    ("&&", AndNode),
    ("||", OrNode),
)

COMPARISON_OPERATORS: tuple[tuple[str, Callable[[LeafNode, LeafNode], ConditionNode]], ...] = (
    ("==", EqualsNode),
    ("=~", MatchNode.create),
)


def _is_wrapped(expr: str) -> bool:
    """True when the first '(' is closed by the final ')'."""
    if not (expr.startswith("(") and expr.endswith(")")):
        return False
    depth = 0
    for i, ch in enumerate(expr):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0 and i < len(expr) - 1:
                return False
    return depth == 0


def parse_condition(expr: str) -> ConditionNode:
    """Compile a condition string into an evaluable tree.

    Raises MalformedExpressionError when no production matches and
    InvalidOperandTypeError when ``=~`` is not given a ``/regex/``.
    """
    condition = expr.strip()
    if _is_wrapped(condition):
        return parse_condition(condition[1:-1])

    if condition.startswith("!"):
        return NotNode(parse_condition(condition[1:]))

    for operator, build in LOGICAL_OPERATORS:
        left, found, right = condition.partition(operator)
        if found:
            return build(parse_condition(left), parse_condition(right))

    for operator, build in COMPARISON_OPERATORS:
        left, found, right = condition.partition(operator)
        if found:
            return build(parse_leaf(left.strip()), parse_leaf(right.strip()))

    raise MalformedExpressionError(condition)
