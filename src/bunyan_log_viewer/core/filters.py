"""Record filters: level thresholds, conditions, and their conjunction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .conditions import ConditionNode, parse_condition
from .levels import LevelSet
from .models import LogRecord

logger = logging.getLogger(__name__)


class LogFilter(Protocol):
    """Filter interface: return True when the record should be shown."""

    def filter(self, record: LogRecord) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class AllFilter:
    """Accept every record."""

    def filter(self, record: LogRecord) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class LevelFilter:
    level_set: LevelSet

    @classmethod
    def from_spec(cls, spec: str) -> LevelFilter:
        return cls(LevelSet.parse(spec))

    def filter(self, record: LogRecord) -> bool:
        return self.level_set.should_show(record.level, record.topic, record.scope)


@dataclass(frozen=True, slots=True)
class ConditionFilter:
    condition: ConditionNode

    @classmethod
    def from_expression(cls, expression: str) -> ConditionFilter:
        return cls(parse_condition(expression))

    def filter(self, record: LogRecord) -> bool:
        return self.condition.evaluate(record)


@dataclass(frozen=True, slots=True)
class MultiFilter:
    """Conjunction of filters, evaluated in order; stops at the first rejection."""

    filters: Sequence[LogFilter] = field(default_factory=tuple)

    def add(self, *filters: LogFilter) -> MultiFilter:
        return MultiFilter(tuple(self.filters) + filters)

    def reduce(self) -> LogFilter:
        """Cheapest equivalent filter: AllFilter, the single child, or self."""
        if not self.filters:
            return AllFilter()
        if len(self.filters) == 1:
            return self.filters[0]
        return self

    def filter(self, record: LogRecord) -> bool:
        return all(f.filter(record) for f in self.filters)


def build_filter(*, level: str | None = None, condition: str | None = None) -> LogFilter:
    """Build the filter for a level spec and/or condition expression.

    Compilation errors propagate so callers can fail before reading input.
    """
    filters = MultiFilter()
    if level:
        logger.info("Adding log level filter at %s", level)
        filters = filters.add(LevelFilter.from_spec(level))
    if condition:
        logger.info("Adding condition filter: %s", condition)
        filters = filters.add(ConditionFilter.from_expression(condition))
    return filters.reduce()
