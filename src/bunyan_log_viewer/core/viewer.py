"""Read, filter and render loop.

Lines are processed strictly one at a time: read, decode, filter, render, write.
"""

from __future__ import annotations

import gzip
import io
import logging
import sys
from collections.abc import AsyncIterator, Iterable, Iterator
from contextlib import aclosing, asynccontextmanager
from pathlib import Path
from typing import TextIO

import aiofiles
from aiofiles.threadpool import wrap

from .errors import DecodeError
from .filters import AllFilter, LogFilter
from .models import OutputOptions
from .records import parse_line
from .rendering import render_record

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


@asynccontextmanager
async def _open_text(path: Path | None, *, encoding: str, decode_errors: str):
    """Open a log source for async text reading (stdin, plain or gzip)."""
    if path is None:
        # stdin is shared with the process: never closed here.
        stream = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors=decode_errors)
        try:
            yield wrap(stream)
        finally:
            stream.detach()
    elif path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


def _resolve_path(log_path: str | Path | None) -> Path | None:
    if log_path is None or str(log_path) == STDIN_PATH:
        return None
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    return path


async def iter_lines(
    log_path: str | Path | None,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AsyncIterator[str]:
    """Yield lines (without line endings) from a file, a .gz file, or stdin."""
    path = _resolve_path(log_path)
    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
        async for line in f:
            yield line.rstrip("\r\n")


def process_line(line: str, log_filter: LogFilter, options: OutputOptions) -> str | None:
    """Return the text to emit for one input line, or None to emit nothing.

    Lines that are not JSON objects are passed through unchanged.
    """
    if not line:
        return None

    try:
        record, errors = parse_line(line)
    except DecodeError as e:
        logger.debug("Passing through undecodable line: %s", e)
        return line

    for error in errors:
        logger.warning("%s", error)

    if not log_filter.filter(record):
        return None
    return render_record(record, options)


def render_lines(
    lines: Iterable[str],
    *,
    log_filter: LogFilter | None = None,
    options: OutputOptions | None = None,
) -> Iterator[str]:
    """Synchronously render an iterable of raw lines."""
    log_filter = log_filter or AllFilter()
    options = options or OutputOptions()
    for line in lines:
        out = process_line(line, log_filter, options)
        if out is not None:
            yield out


async def view(
    log_path: str | Path | None,
    output: TextIO,
    *,
    log_filter: LogFilter | None = None,
    options: OutputOptions | None = None,
    limit: int | None = None,
    encoding: str = "utf-8",
) -> int:
    """Render a log source to ``output``; returns the number of entries written."""
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")
    log_filter = log_filter or AllFilter()
    options = options or OutputOptions()

    written = 0
    async with aclosing(iter_lines(log_path, encoding=encoding)) as lines:
        async for line in lines:
            out = process_line(line, log_filter, options)
            if out is None:
                continue
            output.write(out + "\n")
            written += 1
            if limit is not None and written >= limit:
                break
    output.flush()
    return written
