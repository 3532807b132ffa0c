from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from contextlib import nullcontext
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from bunyan_log_viewer.core.config import ViewerSettings, load_settings
from bunyan_log_viewer.core.errors import LogViewerError
from bunyan_log_viewer.core.filters import LogFilter, build_filter
from bunyan_log_viewer.core.models import OutputOptions, parse_output_mode
from bunyan_log_viewer.core.pager import open_pager
from bunyan_log_viewer.core.timezones import resolve_timezone
from bunyan_log_viewer.core.viewer import view

LOGGER = logging.getLogger(__name__)
APP = "lv"


def _version() -> str:
    try:
        return version("bunyan-log-viewer")
    except PackageNotFoundError:
        return "0+unknown"


def _configure_logging(*, log_file: str | None, verbose: bool, debug: bool) -> None:
    """Send diagnostics to stderr (or ``--log FILE``), never to the render output."""
    level_name = os.getenv("LV_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if verbose:
        level = min(level, logging.INFO)
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=log_file,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APP,
        description="Pretty-print Bunyan JSON logs from stdin or file(s).",
    )
    p.add_argument("files", nargs="*", help="Log files (plain or .gz). Reads stdin when omitted or '-'.")
    p.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    p.add_argument("--config", default=None, help="Config file (default: ~/.config/logviewer/config.yaml)")
    p.add_argument(
        "-l",
        "--level",
        default=None,
        help="Only show entries at or above a level, e.g. WARN or 'INFO;DEBUG:{http:get}'",
    )
    p.add_argument(
        "-c",
        "--condition",
        "-f",
        "--filter",
        dest="condition",
        default=None,
        help="Only show entries matching a condition, e.g. '.name == \"api\" && .msg =~ /timeout/'",
    )
    p.add_argument("-L", "--local", action="store_true", default=None, help="Display time in local time, not UTC")
    p.add_argument("--time", dest="timezone", default=None, help="Display time in the given timezone")
    p.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output mode: long (default), short, simple, json, json-N, bunyan",
    )
    p.add_argument("--color", action="store_true", help="Colorize output even if stdout is not a TTY")
    p.add_argument("--no-color", action="store_true", help="Do not colorize output")
    p.add_argument("--no-pager", action="store_true", help="Do not pipe output through a pager")
    p.add_argument("--max", dest="max_results", type=int, default=None, help="Stop after N entries")
    p.add_argument("--log", dest="log_file", default=None, help="Write diagnostics to this file")
    p.add_argument("--debug", action="store_true", help="Log diagnostics at DEBUG level")
    p.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics at INFO level")
    return p


def _use_colors(args: argparse.Namespace, settings: ViewerSettings, stdout: TextIO) -> bool:
    if args.no_color:
        return False
    if args.color:
        return True
    if settings.color is not None:
        return settings.color
    return stdout.isatty()


def build_options(args: argparse.Namespace, settings: ViewerSettings, stdout: TextIO) -> OutputOptions:
    """Merge CLI flags over configuration into render options."""
    mode, json_indent = parse_output_mode(args.output or settings.output)
    local = args.local if args.local is not None else settings.local
    timezone = resolve_timezone(args.timezone or settings.timezone, local=local)
    LOGGER.info("Displaying time at location: %s", timezone or "UTC")
    return OutputOptions(
        mode=mode,
        timezone=timezone,
        use_colors=_use_colors(args, settings, stdout),
        json_indent=json_indent,
    )


async def _view_all(
    paths: Sequence[str | None],
    output: TextIO,
    *,
    log_filter: LogFilter,
    options: OutputOptions,
    max_results: int | None,
) -> int:
    total = 0
    for path in paths:
        remaining = None if max_results is None else max_results - total
        if remaining is not None and remaining <= 0:
            break
        total += await view(path, output, log_filter=log_filter, options=options, limit=remaining)
    return total


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging(log_file=args.log_file, verbose=args.verbose, debug=args.debug)
    LOGGER.info("Starting %s v%s", APP, _version())

    try:
        if args.max_results is not None and args.max_results < 1:
            raise ValueError("--max must be >= 1")
        settings = load_settings(args.config)
        options = build_options(args, settings, sys.stdout)
        log_filter = build_filter(level=args.level, condition=args.condition)
    except (LogViewerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    paths: list[str | None] = list(args.files) or [None]
    use_pager = not args.no_pager and sys.stdin.isatty() and sys.stdout.isatty()

    try:
        with open_pager() if use_pager else nullcontext(sys.stdout) as output:
            asyncio.run(
                _view_all(
                    paths,
                    output,
                    log_filter=log_filter,
                    options=options,
                    max_results=args.max_results,
                )
            )
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (BrokenPipeError, KeyboardInterrupt):
        raise SystemExit(0)


if __name__ == "__main__":
    main()
