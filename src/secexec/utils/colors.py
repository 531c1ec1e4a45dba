"""Terminal color utilities."""

from __future__ import annotations

import os
from typing import TextIO


class Colors:
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"


def supports_color(stream: TextIO) -> bool:
    """True if ``stream`` is a terminal and NO_COLOR is not set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def c(text: str, color: str, enabled: bool = True) -> str:
    """
    Colorize text with ANSI color code.

    Args:
        text: Text to colorize
        color: Color code from Colors class
        enabled: Return ``text`` untouched when False

    Returns:
        Colorized text string
    """
    if not enabled:
        return text
    return f"{color}{text}{Colors.ENDC}"
