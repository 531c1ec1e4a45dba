"""Shell argument escaping for the two supported shell conventions.

This is a fallback for call sites forced through a shell-interpreting API.
The executor in :mod:`secexec.utils.process` never needs it.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from typing import Optional


class Platform(Enum):
    """Shell quoting convention."""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def detect(cls) -> "Platform":
        """Pick the convention of the running interpreter."""
        return cls.WINDOWS if os.name == "nt" else cls.POSIX

    @classmethod
    def parse(cls, name: str) -> "Platform":
        """Parse ``auto``, ``posix`` or ``windows`` (case-insensitive)."""
        key = name.strip().lower()
        if key == "auto":
            return HOST_PLATFORM
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown platform: {name!r}") from None


HOST_PLATFORM = Platform.detect()

# a run of backslashes followed by a quote, or by the end of the value
_WINDOWS_SPECIAL_RX = re.compile(r'(\\*)("|\Z)')


def _quote_windows(value: str) -> str:
    def double(m: "re.Match[str]") -> str:
        slashes, quote = m.group(1), m.group(2)
        return slashes * 2 + ('\\"' if quote else "")

    return '"' + _WINDOWS_SPECIAL_RX.sub(double, value) + '"'


def escape_shell_arg(value: str, platform: Optional[Platform] = None) -> str:
    """
    Quote ``value`` so a shell reads it back as exactly one word.

    POSIX wraps in single quotes and rewrites each embedded ``'`` as
    ``'\\''``. Windows wraps in double quotes following the
    ``CommandLineToArgvW`` rules: each embedded ``"`` gets a backslash, and
    any backslashes directly before a ``"`` or before the closing quote are
    doubled. Other backslashes stay literal, so ``C:\\dir\\file`` is unchanged
    inside the quotes. The empty string becomes ``''`` or ``""``.

    Not idempotent: escaping an already-escaped value quotes the quotes.

    Args:
        value: Raw argument
        platform: Quoting convention (defaults to the host's)

    Returns:
        The quoted token
    """
    platform = platform or HOST_PLATFORM
    if platform is Platform.WINDOWS:
        return _quote_windows(value)
    return "'" + value.replace("'", "'\\''") + "'"


__all__ = ["Platform", "HOST_PLATFORM", "escape_shell_arg"]
