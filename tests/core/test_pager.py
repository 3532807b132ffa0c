from __future__ import annotations

import sys

import pytest

from bunyan_log_viewer.core import pager
from bunyan_log_viewer.core.pager import find_pager, open_pager


def test_pager_env_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGER", "most -s")
    assert find_pager() == "most -s"


def test_nopager_disables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGER", "NOPAGER")
    assert find_pager() is None


def test_falls_back_to_less_then_more(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PAGER", raising=False)
    available = {"more": "/usr/bin/more"}
    monkeypatch.setattr(pager.shutil, "which", available.get)
    assert find_pager() == "/usr/bin/more"

    available.clear()
    assert find_pager() is None


def test_open_pager_without_pager_yields_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGER", "NOPAGER")
    with open_pager() as out:
        assert out is sys.stdout
