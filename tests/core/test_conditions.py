from __future__ import annotations

import pytest

from bunyan_log_viewer.core.conditions import (
    AndNode,
    BooleanNode,
    ConstantNode,
    EqualsNode,
    FieldNode,
    MatchNode,
    NotNode,
    NumberNode,
    OrNode,
    RegexNode,
    parse_condition,
    parse_leaf,
)
from bunyan_log_viewer.core.errors import InvalidOperandTypeError, MalformedExpressionError


def test_parse_leaf_dispatch() -> None:
    assert parse_leaf(".msg") == FieldNode("msg")
    assert parse_leaf('"hello world"') == ConstantNode("hello world")
    assert isinstance(parse_leaf("/time(out)?/"), RegexNode)
    assert parse_leaf("true") == BooleanNode(True)
    assert parse_leaf("false") == BooleanNode(False)
    assert parse_leaf("42") == NumberNode(42.0)
    assert parse_leaf("-1.5e2") == NumberNode(-150.0)
    assert parse_leaf("api") == ConstantNode("api")


def test_parse_leaf_degrades_to_constant() -> None:
    assert parse_leaf("/[unclosed/") == ConstantNode("/[unclosed/")
    assert parse_leaf('"') == ConstantNode('"')
    assert parse_leaf("") == ConstantNode("")
    assert parse_leaf("1_000") == ConstantNode("1_000")
    assert parse_leaf("nan") == ConstantNode("nan")


def test_leaf_values(make_record) -> None:
    record = make_record(msg="hello", count=42)
    assert parse_leaf(".msg").get_value(record) == "hello"
    assert parse_leaf(".count").get_value(record) == "42"
    assert parse_leaf("42.0").get_value(record) == "42"
    assert parse_leaf("true").get_value(record) == "true"
    assert parse_leaf("/a+/").get_value(record) == "a+"


def test_parse_simple_comparisons() -> None:
    assert parse_condition('.name == "api"') == EqualsNode(FieldNode("name"), ConstantNode("api"))
    node = parse_condition(".msg =~ /fail/")
    assert isinstance(node, MatchNode)
    assert node.left == FieldNode("msg")


def test_operator_priority_is_fixed() -> None:
    # && is split before ||, so || binds tighter.
    node = parse_condition(".a == 1 || .b == 2 && .c == 3")
    assert isinstance(node, AndNode)
    assert isinstance(node.left, OrNode)
    assert isinstance(node.right, EqualsNode)


def test_split_on_first_occurrence() -> None:
    node = parse_condition(".a == 1 && .b == 2 && .c == 3")
    assert isinstance(node, AndNode)
    assert node.left == EqualsNode(FieldNode("a"), NumberNode(1.0))
    assert isinstance(node.right, AndNode)


def test_parentheses_and_negation() -> None:
    node = parse_condition('!( .level == "ERROR" )')
    assert node == NotNode(EqualsNode(FieldNode("level"), ConstantNode("ERROR")))
    assert parse_condition("((.a == b))") == EqualsNode(FieldNode("a"), ConstantNode("b"))


def test_not_wrapped_when_parentheses_do_not_match() -> None:
    node = parse_condition("(.a == 1) && (.b == 2)")
    assert isinstance(node, AndNode)
    assert node.left == EqualsNode(FieldNode("a"), NumberNode(1.0))
    assert node.right == EqualsNode(FieldNode("b"), NumberNode(2.0))


def test_negation(make_record) -> None:
    node = parse_condition('!( .level == "ERROR" )')
    assert node.evaluate(make_record(level=50)) is False
    assert node.evaluate(make_record(level=30)) is True


def test_conjunction_matches_parts(make_record) -> None:
    node = parse_condition('a == "x" && .b =~ /y/')
    equals = parse_condition('a == "x"')
    match = parse_condition(".b =~ /y/")
    for record in (make_record(b="y"), make_record(b="n"), make_record(a="x", b="yy")):
        assert node.evaluate(record) == (equals.evaluate(record) and match.evaluate(record))


def test_evaluate(make_record) -> None:
    record = make_record(name="api", msg="upstream timeout", status=500, ok=False)
    assert parse_condition(".name == api").evaluate(record)
    assert parse_condition(".status == 500").evaluate(record)
    assert parse_condition(".ok == false").evaluate(record)
    assert parse_condition(".msg =~ /time(out)?/").evaluate(record)
    assert not parse_condition(".msg =~ /^timeout/").evaluate(record)
    assert parse_condition('.name == "web" || .status == 500').evaluate(record)
    assert not parse_condition('.name == "web" && .status == 500').evaluate(record)
    assert parse_condition(".missing == \"\"").evaluate(record)


def test_match_requires_regex_operand() -> None:
    with pytest.raises(InvalidOperandTypeError):
        parse_condition('a =~ "not-a-regex"')
    with pytest.raises(InvalidOperandTypeError):
        parse_condition(".msg =~ /[broken/")


@pytest.mark.parametrize("expr", ["", "   ", ".msg", "hello", "!", "()", "&& .a == 1"])
def test_malformed_expressions(expr: str) -> None:
    with pytest.raises(MalformedExpressionError):
        parse_condition(expr)


def test_malformed_carries_offending_text() -> None:
    with pytest.raises(MalformedExpressionError) as exc:
        parse_condition(".a == 1 && bogus")
    assert exc.value.expression == "bogus"
