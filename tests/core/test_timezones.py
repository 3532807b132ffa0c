from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from bunyan_log_viewer.core.timezones import resolve_timezone


@pytest.mark.parametrize("name", [None, "", "UTC", "utc", "Z"])
def test_utc_names_resolve_to_none(name) -> None:
    assert resolve_timezone(name) is None


def test_named_zone() -> None:
    assert resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")


def test_local() -> None:
    expected = datetime.now().astimezone().utcoffset()
    assert datetime.now(resolve_timezone("Local")).utcoffset() == expected
    assert datetime.now(resolve_timezone("Europe/Paris", local=True)).utcoffset() == expected


def test_unknown_zone() -> None:
    with pytest.raises(ValueError):
        resolve_timezone("Mars/Olympus")
