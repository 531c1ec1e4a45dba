"""Injection-resistant validators for git refs and file paths.

Both validators are allow-lists and return a plain bool. They never raise and
never try to repair input: unsafe values are rejected, not sanitized.
The two character sets are independent on purpose, a ref and a path differ
on ``..`` and whitespace.
"""

from __future__ import annotations

import re

from .errors import ValidationRejected

# One or more segments of [A-Za-z0-9_.-] joined by single slashes.
_GIT_REF_RX = re.compile(r"[A-Za-z0-9_.\-]+(?:/[A-Za-z0-9_.\-]+)*")

# Letters, digits, path punctuation and plain spaces (no tabs or newlines).
_FILE_PATH_RX = re.compile(r"[A-Za-z0-9/\\.\-_: ]+")

# Rejected by both validators even though neither allow-list contains them.
SHELL_METACHARACTERS = frozenset(";|&`$()[]{}")


def validate_git_ref(candidate: str) -> bool:
    """
    Return True if ``candidate`` is safe to use as a branch, tag or ref name.

    Rejects the empty string, anything containing ``..``, anything starting
    with ``-`` (would be read as a flag), and any character outside
    ``[A-Za-z0-9_.-/]``, which covers whitespace and shell metacharacters.
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    if ".." in candidate:
        return False
    if candidate.startswith("-"):
        return False
    return _GIT_REF_RX.fullmatch(candidate) is not None


def validate_file_path(candidate: str) -> bool:
    """
    Return True if ``candidate`` is safe to use as a file-system path.

    More permissive than :func:`validate_git_ref`: spaces, drive colons,
    backslashes and ``..`` parent segments are all legitimate in paths.
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    if any(ch in SHELL_METACHARACTERS for ch in candidate):
        return False
    return _FILE_PATH_RX.fullmatch(candidate) is not None


def require_git_ref(value: str) -> str:
    """Return ``value`` unchanged or raise ValidationRejected."""
    if not validate_git_ref(value):
        raise ValidationRejected("git ref", value)
    return value


def require_file_path(value: str) -> str:
    """Return ``value`` unchanged or raise ValidationRejected."""
    if not validate_file_path(value):
        raise ValidationRejected("file path", value)
    return value


__all__ = [
    "SHELL_METACHARACTERS",
    "validate_git_ref",
    "validate_file_path",
    "require_git_ref",
    "require_file_path",
]
