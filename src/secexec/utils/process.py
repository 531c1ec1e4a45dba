"""Secure subprocess execution (argument vectors only, never a shell)."""

from __future__ import annotations

import asyncio
import contextlib
import shutil
import signal
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Mapping, Optional, Sequence, Union

from ..core.errors import NonZeroExit, SignalTerminated, SpawnFailed
from .logger import Logger, get_logger

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CommandSpec:
    """A program and its argument vector."""

    program: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.args, (str, bytes)):
            raise TypeError("args must be a sequence of strings, not a single string")
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    async def run(self, **kwargs) -> "ExecutionResult":
        """Run with captured output; see :func:`run_secure`."""
        return await run_secure(self.program, self.args, **kwargs)

    async def run_inherited(self, **kwargs) -> None:
        """Run sharing this process's stdio; see :func:`run_secure_with_inherited_stdio`."""
        await run_secure_with_inherited_stdio(self.program, self.args, **kwargs)


@dataclass(frozen=True)
class ExecutionResult:
    """Captured output of a command that exited with code 0."""

    stdout: str
    stderr: str


def _decode(data: Optional[bytes]) -> str:
    # surrogateescape keeps undecodable bytes recoverable via .encode()
    return (data or b"").decode("utf-8", errors="surrogateescape")


def _signal_name(returncode: int) -> str:
    try:
        return signal.Signals(-returncode).name
    except ValueError:
        return f"signal {-returncode}"


def _check_argv(args: Sequence[str]) -> list[str]:
    if isinstance(args, (str, bytes)):
        raise TypeError("args must be a sequence of strings, not a single string")
    argv = list(args)
    for arg in argv:
        if not isinstance(arg, str):
            raise TypeError(f"argument must be str, not {type(arg).__name__}")
    return argv


async def _spawn(
    program: str,
    argv: list[str],
    cwd: Optional[PathLike],
    env: Optional[Mapping[str, str]],
    capture: bool,
    log: Logger,
) -> asyncio.subprocess.Process:
    log.debug(f"spawning {program!r} with {len(argv)} argument(s)")
    reason = None
    if not program:
        reason = "empty program name"
    elif "\x00" in program or any("\x00" in arg for arg in argv):
        reason = "embedded null byte"
    if reason:
        failure = SpawnFailed(program, reason)
        log.error(f"{failure.kind}: {program!r} ({reason})")
        raise failure
    pipe = asyncio.subprocess.PIPE if capture else None
    try:
        return await asyncio.create_subprocess_exec(
            program,
            *argv,
            stdin=asyncio.subprocess.DEVNULL if capture else None,
            stdout=pipe,
            stderr=pipe,
            cwd=str(cwd) if cwd else None,
            env=dict(env) if env is not None else None,
        )
    except (OSError, ValueError) as e:
        failure = SpawnFailed(program, getattr(e, "strerror", None) or str(e))
        log.error(f"{failure.kind}: {program!r} ({failure.reason})")
        raise failure from e


async def _wait(proc: asyncio.subprocess.Process, capture: bool) -> tuple[bytes, bytes]:
    try:
        if capture:
            return await proc.communicate()
        await proc.wait()
        return b"", b""
    except asyncio.CancelledError:
        # never leave an orphaned child behind a cancelled caller
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        raise


def _check_exit(
    program: str,
    returncode: int,
    stdout: str,
    stderr: str,
    log: Logger,
    expected_codes: Collection[int] = (),
) -> None:
    if returncode == 0:
        return
    if returncode < 0:
        failure: Union[NonZeroExit, SignalTerminated] = SignalTerminated(
            program, _signal_name(returncode), stdout, stderr
        )
        log.error(f"{failure.kind}: {program!r} ({failure.signal})")
    else:
        failure = NonZeroExit(program, returncode, stdout, stderr)
        # an anticipated code is still raised, but is not an error for the log
        report = log.debug if returncode in expected_codes else log.error
        report(f"{failure.kind}: {program!r} (code {returncode})")
    raise failure


async def run_secure(
    program: str,
    args: Sequence[str] = (),
    *,
    cwd: Optional[PathLike] = None,
    env: Optional[Mapping[str, str]] = None,
    logger: Optional[Logger] = None,
    expected_codes: Collection[int] = (),
) -> ExecutionResult:
    """
    Run a program directly with an argument vector and capture its output.

    The arguments go to the OS as discrete elements; no shell ever sees them,
    so metacharacters in them are inert.

    Args:
        program: Executable name or path (resolved via PATH)
        args: Arguments, one element per argv entry
        cwd: Working directory for the command
        env: Full environment for the child (inherits the parent's if None)
        logger: Logger to use instead of the process-wide one
        expected_codes: Non-zero exit codes the caller anticipates; they still
            raise NonZeroExit but are logged at debug instead of error

    Returns:
        ExecutionResult with untrimmed stdout/stderr

    Raises:
        SpawnFailed: The executable could not be started, or the program
            or an argument contains a NUL byte
        NonZeroExit: The command exited non-zero (output attached)
        SignalTerminated: The command was killed by a signal (output attached)
    """
    log = logger or get_logger()
    argv = _check_argv(args)
    proc = await _spawn(program, argv, cwd, env, True, log)
    out, err = await _wait(proc, True)
    stdout, stderr = _decode(out), _decode(err)
    _check_exit(program, proc.returncode, stdout, stderr, log, expected_codes)
    return ExecutionResult(stdout=stdout, stderr=stderr)


async def run_secure_with_inherited_stdio(
    program: str,
    args: Sequence[str] = (),
    *,
    cwd: Optional[PathLike] = None,
    env: Optional[Mapping[str, str]] = None,
    logger: Optional[Logger] = None,
    expected_codes: Collection[int] = (),
) -> None:
    """
    Run a program directly with the parent's stdin/stdout/stderr.

    Same spawning rules and failures as :func:`run_secure`; nothing is
    captured, so failures carry empty output.
    """
    log = logger or get_logger()
    argv = _check_argv(args)
    # keep our buffered output ahead of the child's
    for stream in (sys.stdout, sys.stderr):
        with contextlib.suppress(AttributeError, ValueError):
            stream.flush()
    proc = await _spawn(program, argv, cwd, env, False, log)
    await _wait(proc, False)
    _check_exit(program, proc.returncode, "", "", log, expected_codes)


def check_command_exists(command: str) -> bool:
    """Check if a command exists in PATH."""
    return shutil.which(command) is not None
