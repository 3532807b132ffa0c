"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (render and filter a Bunyan log file)
- Resources: addressable data blobs (help, sample log, condition syntax)

Run locally (stdio):
    python -m bunyan_log_viewer.server.log_server
"""

from __future__ import annotations

import logging
import os
from typing import Any

from mcp.server.fastmcp import FastMCP

from bunyan_log_viewer.resources.registry import register_resources
from bunyan_log_viewer.tools.view import view_logs_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LV_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-viewer", json_response=True)

register_resources(mcp)


@mcp.tool()
async def view_logs(
    log_path: str,
    condition: str | None = None,
    level: str | None = None,
    output: str = "long",
    timezone: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Render a Bunyan JSON log file as human-readable lines.

    Parameters
    ----------
    log_path:
        Path to a local log file. Supports plain text and .gz.
    condition:
        Filter expression, e.g. `.name == "api" && .msg =~ /timeout/`.
        See app://log-viewer/syntax/condition.
    level:
        Level spec, e.g. "WARN" or "INFO;DEBUG:{http}".
    output:
        long (default), short, simple, json, json-N or bunyan.
    timezone:
        Display timezone (IANA name). Default UTC.
    limit:
        Maximum number of rendered entries (hard-capped in the implementation).

    Returns
    -------
    dict:
        {"count": int, "lines": list[str], "truncated": bool}
    """
    return await view_logs_impl(
        log_path=log_path,
        condition=condition,
        level=level,
        output=output,
        timezone=timezone,
        limit=limit,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
