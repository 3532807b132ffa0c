from __future__ import annotations

import pytest

from bunyan_log_viewer.core.errors import InvalidLevelSpecError, MalformedExpressionError
from bunyan_log_viewer.core.filters import (
    AllFilter,
    ConditionFilter,
    LevelFilter,
    MultiFilter,
    build_filter,
)


class _Counting:
    def __init__(self, result: bool) -> None:
        self.result = result
        self.calls = 0

    def filter(self, record) -> bool:
        self.calls += 1
        return self.result


def test_all_filter_accepts_everything(make_record) -> None:
    assert AllFilter().filter(make_record())


def test_reduce() -> None:
    level = LevelFilter.from_spec("INFO")
    condition = ConditionFilter.from_expression(".a == 1")
    assert isinstance(MultiFilter().reduce(), AllFilter)
    assert MultiFilter((level,)).reduce() is level
    both = MultiFilter().add(level, condition)
    assert both.reduce() is both


def test_multi_filter_short_circuits(make_record) -> None:
    first = _Counting(False)
    second = _Counting(True)
    assert not MultiFilter((first, second)).filter(make_record())
    assert first.calls == 1
    assert second.calls == 0


def test_level_filter_uses_topic_and_scope(make_record) -> None:
    f = LevelFilter.from_spec("WARN;DEBUG:{http:get}")
    assert f.filter(make_record(level=20, topic="http", scope="get"))
    assert not f.filter(make_record(level=20, topic="http", scope="post"))
    assert f.filter(make_record(level=40))


def test_build_filter_combines(make_record) -> None:
    f = build_filter(level="WARN", condition='.name == "api"')
    assert isinstance(f, MultiFilter)
    assert f.filter(make_record(level=50, name="api"))
    assert not f.filter(make_record(level=30, name="api"))
    assert not f.filter(make_record(level=50, name="web"))


def test_build_filter_without_options() -> None:
    assert isinstance(build_filter(), AllFilter)
    assert isinstance(build_filter(condition=".a == 1"), ConditionFilter)


def test_build_filter_fails_fast() -> None:
    with pytest.raises(MalformedExpressionError):
        build_filter(condition="oops")
    with pytest.raises(InvalidLevelSpecError):
        build_filter(level="LOUD")
