"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from contextlib import aclosing
from typing import Any

from bunyan_log_viewer.core.filters import build_filter
from bunyan_log_viewer.core.models import OutputOptions, parse_output_mode
from bunyan_log_viewer.core.timezones import resolve_timezone
from bunyan_log_viewer.core.viewer import STDIN_PATH, iter_lines, process_line

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


async def view_logs_impl(
    *,
    log_path: str,
    condition: str | None = None,
    level: str | None = None,
    output: str = "long",
    timezone: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `view_logs` MCP tool.

    Notes
    -----
    - Output is never colorized.
    - Lines that are not JSON objects are returned unchanged.
    - ``truncated`` is true when the limit stopped reading before the end of the file.
    """
    if not log_path or log_path == STDIN_PATH:
        raise ValueError("log_path must name a file; stdin is not available to MCP tools.")
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    mode, json_indent = parse_output_mode(output)
    options = OutputOptions(
        mode=mode,
        timezone=resolve_timezone(timezone),
        use_colors=False,
        json_indent=json_indent,
    )
    log_filter = build_filter(level=level, condition=condition)

    lines: list[str] = []
    truncated = False
    async with aclosing(iter_lines(log_path)) as source:
        async for line in source:
            out = process_line(line, log_filter, options)
            if out is None:
                continue
            if len(lines) >= limit:
                truncated = True
                break
            lines.append(out)

    return {"count": len(lines), "lines": lines, "truncated": truncated}
