"""Level-set rules deciding which severities are shown.

Syntax::

    INFO                          default threshold
    WARN;DEBUG:{http}             DEBUG for topic "http", WARN elsewhere
    INFO;TRACE:{db:query,tx;http} TRACE for db/query, db/tx and topic http

The most specific rule wins: (topic, scope), then topic, then the default.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import InvalidLevelSpecError
from .models import LogLevel, parse_level


def _split_top_level(text: str, sep: str) -> list[str]:
    """Split on ``sep`` outside of braces."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                raise InvalidLevelSpecError(f"Unbalanced '}}' in level spec: {text!r}")
        if ch == sep and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if depth != 0:
        raise InvalidLevelSpecError(f"Unbalanced '{{' in level spec: {text!r}")
    parts.append("".join(current))
    return parts


def _level(name: str) -> LogLevel:
    level = parse_level(name)
    if level is None:
        raise InvalidLevelSpecError(f"Unknown level '{name.strip()}'")
    return level


@dataclass(frozen=True, slots=True)
class LevelSet:
    """Severity thresholds, optionally per topic and scope."""

    default: LogLevel = LogLevel.TRACE
    topics: dict[str, LogLevel] = field(default_factory=dict)
    scopes: dict[tuple[str, str], LogLevel] = field(default_factory=dict)

    @classmethod
    def parse(cls, spec: str) -> LevelSet:
        default = LogLevel.TRACE
        topics: dict[str, LogLevel] = {}
        scopes: dict[tuple[str, str], LogLevel] = {}

        rules = [r.strip() for r in _split_top_level(spec, ";") if r.strip()]
        if not rules:
            raise InvalidLevelSpecError("Empty level spec")

        for rule in rules:
            name, sep, targets = rule.partition(":")
            level = _level(name)
            if not sep:
                default = level
                continue

            targets = targets.strip()
            if not (targets.startswith("{") and targets.endswith("}")):
                raise InvalidLevelSpecError(f"Expected '{{topic[:scope,...]}}' after '{name}:' in {rule!r}")
            for target in targets[1:-1].split(";"):
                topic, _, scope_list = target.partition(":")
                topic = topic.strip()
                if not topic:
                    raise InvalidLevelSpecError(f"Missing topic in {rule!r}")
                scope_names = [s.strip() for s in scope_list.split(",") if s.strip()]
                if not scope_names:
                    topics[topic] = level
                for scope in scope_names:
                    scopes[(topic, scope)] = level

        return cls(default=default, topics=topics, scopes=scopes)

    def threshold(self, topic: str = "", scope: str = "") -> LogLevel:
        if (topic, scope) in self.scopes:
            return self.scopes[(topic, scope)]
        if topic in self.topics:
            return self.topics[topic]
        return self.default

    def should_show(self, level: int, topic: str = "", scope: str = "") -> bool:
        return level >= self.threshold(topic, scope)
