from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from bunyan_log_viewer.core.models import LogRecord
from bunyan_log_viewer.core.records import decode_record

BUNYAN_LINES = [
    {
        "name": "api",
        "hostname": "web-1",
        "pid": 4120,
        "tid": 1,
        "level": 30,
        "msg": "service started",
        "time": "2025-12-30T08:12:01.000Z",
        "v": 0,
    },
    {
        "name": "api",
        "hostname": "web-1",
        "pid": 4120,
        "tid": 7,
        "level": 40,
        "topic": "http",
        "scope": "get",
        "msg": "slow request",
        "route": "/items",
        "time": "2025-12-30T08:12:03.120Z",
        "v": 0,
    },
    {
        "name": "api",
        "hostname": "web-1",
        "pid": 4120,
        "tid": 7,
        "level": 50,
        "topic": "db",
        "msg": "query failed",
        "err": {"code": "ETIMEDOUT"},
        "time": "2025-12-30T08:12:04.500Z",
        "v": 0,
    },
]


@pytest.fixture
def make_record() -> Callable[..., LogRecord]:
    """Build a LogRecord from keyword arguments as if decoded from JSON."""

    def _make(**obj: Any) -> LogRecord:
        record, errors = decode_record(obj)
        assert errors == []
        return record

    return _make


@pytest.fixture
def write_bunyan_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        lines = [json.dumps(obj) for obj in BUNYAN_LINES]
        lines.insert(1, "not json")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return _write
