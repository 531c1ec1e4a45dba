"""Error types for secexec.

Executor failures form a closed set: ``SpawnFailed``, ``NonZeroExit`` and
``SignalTerminated``. Callers match on the class (or ``kind``) instead of
parsing messages.
"""

from __future__ import annotations


class SecexecError(Exception):
    """Base class for every error raised by secexec."""


class ValidationRejected(SecexecError):
    """Raised by callers when a validator returned False for an input."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        # repr() keeps control characters from reaching terminals or logs raw
        super().__init__(f"unsafe {kind}: {value!r}")


class ExecutionFailure(SecexecError):
    """A spawned command did not complete successfully."""

    kind = "failure"

    def __init__(self, program: str, message: str, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.program = program
        self.stdout = stdout
        self.stderr = stderr


class SpawnFailed(ExecutionFailure):
    """The executable could not be started (missing, not executable, ...)."""

    kind = "spawn_failed"

    def __init__(self, program: str, reason: str):
        super().__init__(program, f"failed to spawn {program!r}: {reason}")
        self.reason = reason


class NonZeroExit(ExecutionFailure):
    """The command exited with a non-zero status code."""

    kind = "non_zero_exit"

    def __init__(self, program: str, code: int, stdout: str = "", stderr: str = ""):
        super().__init__(program, f"{program!r} exited with code {code}", stdout, stderr)
        self.code = code


class SignalTerminated(ExecutionFailure):
    """The command was killed by a signal."""

    kind = "signal_terminated"

    def __init__(self, program: str, signal: str, stdout: str = "", stderr: str = ""):
        super().__init__(program, f"{program!r} terminated by {signal}", stdout, stderr)
        self.signal = signal


__all__ = [
    "SecexecError",
    "ValidationRejected",
    "ExecutionFailure",
    "SpawnFailed",
    "NonZeroExit",
    "SignalTerminated",
]
