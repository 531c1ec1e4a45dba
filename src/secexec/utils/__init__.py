"""Utility modules for secexec."""

from .colors import Colors, c
from .logger import LogLevel, Logger, ConsoleLogger, LoggingAdapter, get_logger, set_logger
from .process import (
    CommandSpec,
    ExecutionResult,
    run_secure,
    run_secure_with_inherited_stdio,
    check_command_exists,
)

__all__ = [
    "Colors", "c",
    "LogLevel", "Logger", "ConsoleLogger", "LoggingAdapter", "get_logger", "set_logger",
    "CommandSpec", "ExecutionResult",
    "run_secure", "run_secure_with_inherited_stdio", "check_command_exists",
]
