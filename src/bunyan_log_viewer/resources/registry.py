"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from bunyan_log_viewer.core.models import OutputMode

SAMPLE_LOG = (
    '{"name":"api","hostname":"web-1","pid":4120,"tid":1,"level":30,'
    '"msg":"service started","time":"2025-12-30T08:12:01.000Z","v":0}\n'
    '{"name":"api","hostname":"web-1","pid":4120,"tid":7,"level":40,"topic":"http","scope":"get",'
    '"msg":"slow request","route":"/items","elapsed":1.25,"time":"2025-12-30T08:12:03.120Z","v":0}\n'
    '{"name":"api","hostname":"web-1","pid":4120,"tid":7,"level":50,"topic":"db",'
    '"msg":"query failed","err":{"code":"ETIMEDOUT","retries":[1,2,3]},'
    '"time":"2025-12-30T08:12:04.500Z","v":0}\n'
    "plain text lines are passed through\n"
)

CONDITION_SYNTAX = """\
Condition syntax
================
Operands:
  .name       field of the record (msg, level, name, hostname, pid, tid, topic, scope, time, or any extra key)
  "text"      string constant
  42, 1.5     number (compared by its shortest text form)
  true/false  boolean
  /regex/     regular expression (right side of =~ only)
  other       bare word, treated as a string

Operators (tried in this order, each splits on its first occurrence):
  &&   and
  ||   or
  ==   equal string forms
  =~   regex search

Prefixes: !expr negates the rest of the expression; (expr) groups a whole expression.
Operators inside quoted strings or regexes are not protected.

Examples:
  .level == "ERROR"
  .name == api && .msg =~ /timeout|refused/
  !(.topic == "http")
"""


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-viewer/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        modes = ", ".join(m.value for m in OutputMode)
        return (
            "Resources:\n"
            "- app://log-viewer/help\n"
            "- app://log-viewer/examples/sample-log\n"
            "- app://log-viewer/syntax/condition\n"
            f"\nOutput modes: {modes}, json-N\n"
        )

    @mcp.resource("app://log-viewer/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample Bunyan log for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://log-viewer/syntax/condition")
    def condition_syntax() -> str:
        """Return the condition language reference."""
        return CONDITION_SYNTAX
