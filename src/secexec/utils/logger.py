"""Pluggable logger facade.

The executor only needs something with ``error/warn/info/verbose/debug``.
``ConsoleLogger`` is the default; ``LoggingAdapter`` forwards to the stdlib
``logging`` module for applications that already configure it.

``get_logger``/``set_logger`` hold one process-wide instance. Set it once at
startup; later calls are last-write-wins with no locking. Library code should
prefer taking a ``logger`` argument over reading the global.
"""

from __future__ import annotations

import logging
import sys
from enum import IntEnum
from typing import Any, Optional, Protocol, TextIO, Union

from .colors import Colors, c, supports_color

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")


class LogLevel(IntEnum):
    """Thresholds, ordered from quietest to noisiest."""

    ERROR = 0
    WARN = 1
    INFO = 2
    VERBOSE = 3
    DEBUG = 4

    @classmethod
    def parse(cls, value: Union[str, "LogLevel"]) -> "LogLevel":
        if isinstance(value, LogLevel):
            return value
        key = str(value).strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown log level: {value!r}") from None


class Logger(Protocol):
    def error(self, msg: str, *meta: Any) -> None: ...

    def warn(self, msg: str, *meta: Any) -> None: ...

    def info(self, msg: str, *meta: Any) -> None: ...

    def verbose(self, msg: str, *meta: Any) -> None: ...

    def debug(self, msg: str, *meta: Any) -> None: ...


def _join(parts: tuple[Any, ...]) -> str:
    return " ".join(str(p) for p in parts)


class ConsoleLogger:
    """
    Console logger with a level threshold.

    error and warn go to stderr, everything else to stdout, unless a single
    ``stream`` is given. verbose and debug lines are tagged ``[VERBOSE]`` and
    ``[DEBUG]``.
    """

    def __init__(
        self,
        level: Union[str, LogLevel] = LogLevel.INFO,
        stream: Optional[TextIO] = None,
        color: Optional[bool] = None,
    ):
        self.level = LogLevel.parse(level)
        self.stream = stream
        self.color = color

    def enabled_for(self, level: LogLevel) -> bool:
        return level <= self.level

    def _emit(self, level: LogLevel, parts: tuple[Any, ...], tag: str = "", color: str = "") -> None:
        if not self.enabled_for(level):
            return
        if self.stream is not None:
            stream = self.stream
        else:
            # resolved per call so redirected std streams are honored
            stream = sys.stderr if level <= LogLevel.WARN else sys.stdout
        line = _join(((tag,) if tag else ()) + parts)
        use_color = self.color if self.color is not None else supports_color(stream)
        if color:
            line = c(line, color, enabled=use_color)
        print(line, file=stream)

    def error(self, msg: str, *meta: Any) -> None:
        self._emit(LogLevel.ERROR, (msg,) + meta, color=Colors.RED)

    def warn(self, msg: str, *meta: Any) -> None:
        self._emit(LogLevel.WARN, (msg,) + meta, color=Colors.YELLOW)

    def info(self, msg: str, *meta: Any) -> None:
        self._emit(LogLevel.INFO, (msg,) + meta)

    def verbose(self, msg: str, *meta: Any) -> None:
        self._emit(LogLevel.VERBOSE, (msg,) + meta, tag="[VERBOSE]", color=Colors.DIM)

    def debug(self, msg: str, *meta: Any) -> None:
        self._emit(LogLevel.DEBUG, (msg,) + meta, tag="[DEBUG]", color=Colors.DIM)


class LoggingAdapter:
    """Forward facade calls to a stdlib ``logging.Logger``."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("secexec")

    def error(self, msg: str, *meta: Any) -> None:
        self.logger.log(logging.ERROR, "%s", _join((msg,) + meta))

    def warn(self, msg: str, *meta: Any) -> None:
        self.logger.log(logging.WARNING, "%s", _join((msg,) + meta))

    def info(self, msg: str, *meta: Any) -> None:
        self.logger.log(logging.INFO, "%s", _join((msg,) + meta))

    def verbose(self, msg: str, *meta: Any) -> None:
        self.logger.log(VERBOSE, "%s", _join(("[VERBOSE]", msg) + meta))

    def debug(self, msg: str, *meta: Any) -> None:
        self.logger.log(logging.DEBUG, "%s", _join(("[DEBUG]", msg) + meta))


_active: Optional[Logger] = None


def _default_logger() -> ConsoleLogger:
    from ..core.config import get_config_value, load_user_config

    config = load_user_config()
    try:
        level = LogLevel.parse(get_config_value("logging.level", "info", config))
    except ValueError:
        level = LogLevel.INFO
    color = None if get_config_value("logging.color", True, config) else False
    return ConsoleLogger(level, color=color)


def get_logger() -> Logger:
    """Return the process-wide logger, creating the default on first use."""
    global _active
    if _active is None:
        _active = _default_logger()
    return _active


def set_logger(logger: Logger) -> None:
    """Replace the process-wide logger (last write wins)."""
    global _active
    _active = logger


__all__ = [
    "LogLevel",
    "Logger",
    "ConsoleLogger",
    "LoggingAdapter",
    "get_logger",
    "set_logger",
]
