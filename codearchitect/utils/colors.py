# codearchitect/utils/colors.py
"""
ANSI colors for CLI output. Disabled when stdout is not a terminal or
NO_COLOR is set.
"""

import os
import sys

_ENABLED = sys.stdout.isatty() and not os.getenv("NO_COLOR")


def _code(seq: str) -> str:
    return seq if _ENABLED else ""


ACCENT = _code("\033[38;5;51m")     # headings / labels
HIGHLIGHT = _code("\033[38;5;201m")  # active selection
MUTED = _code("\033[38;5;250m")
SUCCESS = _code("\033[38;5;46m")
WARNING = _code("\033[38;5;226m")
ERROR = _code("\033[38;5;196m")

BOLD = _code("\033[1m")
RESET = _code("\033[0m")
