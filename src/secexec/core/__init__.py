"""Core functionality for secexec."""

from .paths import SECEXEC_HOME, USER_CONFIG_FILE
from .config import load_user_config, get_config_value
from .errors import (
    SecexecError,
    ValidationRejected,
    ExecutionFailure,
    SpawnFailed,
    NonZeroExit,
    SignalTerminated,
)
from .validators import validate_git_ref, validate_file_path, require_git_ref, require_file_path
from .escape import Platform, HOST_PLATFORM, escape_shell_arg
from . import git

__all__ = [
    "SECEXEC_HOME",
    "USER_CONFIG_FILE",
    "load_user_config",
    "get_config_value",
    "SecexecError",
    "ValidationRejected",
    "ExecutionFailure",
    "SpawnFailed",
    "NonZeroExit",
    "SignalTerminated",
    "validate_git_ref",
    "validate_file_path",
    "require_git_ref",
    "require_file_path",
    "Platform",
    "HOST_PLATFORM",
    "escape_shell_arg",
    "git",
]
