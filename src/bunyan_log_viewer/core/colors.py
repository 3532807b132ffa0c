"""ANSI color codes used by the renderer."""

from __future__ import annotations

GRAY = "\033[90m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"
RESET = "\033[0m"

LEVEL_COLORS = {
    0: BLUE,  # unset
    10: GRAY,  # trace
    20: YELLOW,  # debug
    30: GREEN,  # info
    40: MAGENTA,  # warn
    50: RED,  # error
    60: RED,  # fatal
}

TOPIC_COLOR = GREEN
SCOPE_COLOR = YELLOW
MESSAGE_COLOR = CYAN


def colorize(text: str, color: str, enabled: bool) -> str:
    if not enabled or not color:
        return text
    return f"{color}{text}{RESET}"
