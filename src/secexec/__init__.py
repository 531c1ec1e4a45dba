"""
secexec - run git and file-system tools without handing untrusted input to a shell.

Validators reject unsafe refs and paths, the executor spawns argument vectors
directly, and ``escape_shell_arg`` covers the rare call site that must go
through a shell.
"""

from .core.errors import (
    SecexecError,
    ValidationRejected,
    ExecutionFailure,
    SpawnFailed,
    NonZeroExit,
    SignalTerminated,
)
from .core.escape import Platform, escape_shell_arg
from .core.validators import validate_git_ref, validate_file_path
from .utils.logger import ConsoleLogger, LogLevel, get_logger, set_logger
from .utils.process import (
    CommandSpec,
    ExecutionResult,
    run_secure,
    run_secure_with_inherited_stdio,
)

__version__ = "0.1.0"
__all__ = [
    "SecexecError",
    "ValidationRejected",
    "ExecutionFailure",
    "SpawnFailed",
    "NonZeroExit",
    "SignalTerminated",
    "Platform",
    "escape_shell_arg",
    "validate_git_ref",
    "validate_file_path",
    "ConsoleLogger",
    "LogLevel",
    "get_logger",
    "set_logger",
    "CommandSpec",
    "ExecutionResult",
    "run_secure",
    "run_secure_with_inherited_stdio",
]
