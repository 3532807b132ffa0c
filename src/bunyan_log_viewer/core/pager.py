"""Pipe output through a pager (``$PAGER``, ``less`` or ``more``)."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

logger = logging.getLogger(__name__)

NO_PAGER = "NOPAGER"


def find_pager() -> str | None:
    """Return the pager command, or None when paging is disabled or unavailable."""
    location = os.getenv("PAGER", "")
    if location == NO_PAGER:
        return None
    if location:
        return location
    for candidate in ("less", "more"):
        found = shutil.which(candidate)
        if found:
            return found
        logger.warning("Failed to find pager %s", candidate)
    return None


@contextmanager
def open_pager(encoding: str = "utf-8") -> Iterator[TextIO]:
    """Yield a stream feeding a pager process, or stdout when there is none."""
    location = find_pager()
    if location is None:
        yield sys.stdout
        return

    logger.info("Using pager %s", location)
    env = dict(os.environ)
    # Colors pass through less unchanged.
    env.setdefault("LESS", "-R")
    pager = subprocess.Popen(
        location,
        shell=True,
        stdin=subprocess.PIPE,
        text=True,
        encoding=encoding,
        errors="replace",
        env=env,
    )
    try:
        yield pager.stdin
    finally:
        logger.debug("Waiting for pager %s", location)
        try:
            pager.stdin.close()
        except BrokenPipeError:
            logger.debug("Pager %s exited before reading all output", location)
        pager.wait()
        logger.info("Pager done")
