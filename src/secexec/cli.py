"""CLI argument parsing and command routing."""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import signal
import sys
from typing import Callable, Optional, Sequence

from .core.config import create_example_config, get_config_value, load_user_config, write_example_config
from .core.errors import ExecutionFailure, NonZeroExit, SecexecError, SignalTerminated, SpawnFailed, ValidationRejected
from .core.escape import Platform, escape_shell_arg
from .core import paths
from .core.validators import validate_file_path, validate_git_ref
from .utils.colors import Colors, c, supports_color
from .utils.logger import ConsoleLogger, LogLevel, get_logger, set_logger
from .utils.process import CommandSpec, check_command_exists

LEVELS = [level.name.lower() for level in LogLevel]


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag to a parser."""
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output in JSON format (for scripting)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="secexec",
        description="secexec - validate refs/paths and run commands without a shell",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  secexec check-ref feature/login origin/main
  secexec check-path "docs/My Notes.md" --json
  secexec escape "it's here"
  secexec run git -- log --oneline -n 5

Config:
  ~/.secexec/config.toml
        """,
    )
    parser.add_argument("--log-level", choices=LEVELS, help="Logger threshold (default: from config)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # check-ref
    p = subparsers.add_parser("check-ref", help="Validate git ref names")
    p.add_argument("refs", nargs="+", help="Ref names to check")
    add_json_flag(p)

    # check-path
    p = subparsers.add_parser("check-path", help="Validate file paths")
    p.add_argument("paths", nargs="+", help="Paths to check")
    add_json_flag(p)

    # escape
    p = subparsers.add_parser("escape", help="Quote a value for a shell")
    p.add_argument("value", help="Value to quote")
    p.add_argument(
        "--platform", "-p",
        choices=["auto", "posix", "windows"],
        default=None,
        help="Quoting convention (default: from config, else host)",
    )

    # run
    p = subparsers.add_parser("run", help="Run a program directly (no shell)")
    p.add_argument("program", help="Program to run")
    p.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed verbatim")
    p.add_argument("--inherit", "-i", action="store_true", help="Share this terminal's stdio")
    p.add_argument("--cwd", help="Working directory")

    # config
    p = subparsers.add_parser("config", help="Show or create the config file")
    p.add_argument("--init", action="store_true", help="Write an example config to ~/.secexec/config.toml")

    return parser


def _report(kind: str, values: Sequence[str], check: Callable[[str], bool], as_json: bool) -> int:
    verdicts = {value: check(value) for value in values}
    if as_json:
        print(json.dumps({"kind": kind, "results": [{"value": v, "valid": ok} for v, ok in verdicts.items()]}, indent=2))
    else:
        color = supports_color(sys.stdout)
        for value, ok in verdicts.items():
            mark = c("ok", Colors.GREEN, color) if ok else c("rejected", Colors.RED, color)
            print(f"{mark}  {value!r}")
    return 0 if all(verdicts.values()) else 1


def cmd_check_ref(args) -> int:
    """Validate git refs; exit 1 if any is rejected."""
    return _report("git-ref", args.refs, validate_git_ref, args.json)


def cmd_check_path(args) -> int:
    """Validate file paths; exit 1 if any is rejected."""
    return _report("file-path", args.paths, validate_file_path, args.json)


def cmd_escape(args) -> int:
    """Print the quoted form of a value."""
    name = args.platform or get_config_value("escape.platform", "auto")
    try:
        platform = Platform.parse(name)
    except ValueError as e:
        print(c(str(e), Colors.RED, supports_color(sys.stderr)), file=sys.stderr)
        return 2
    print(escape_shell_arg(args.value, platform))
    return 0


def exit_code_for(error: SecexecError) -> int:
    """Map a failure to a shell-style exit status."""
    if isinstance(error, NonZeroExit):
        return error.code
    if isinstance(error, SpawnFailed):
        return 127
    if isinstance(error, SignalTerminated):
        try:
            return 128 + int(signal.Signals[error.signal])
        except (KeyError, ValueError):
            return 128
    if isinstance(error, ValidationRejected):
        return 2
    return 1


def _is_path(program: str) -> bool:
    return os.sep in program or bool(os.altsep and os.altsep in program)


def cmd_run(args) -> int:
    """Run a program and mirror its output and exit status."""
    command_args = list(args.args)
    if command_args and command_args[0] == "--":
        command_args = command_args[1:]
    spec = CommandSpec(args.program, tuple(command_args))

    if not _is_path(spec.program) and not check_command_exists(spec.program):
        print(c(f"Missing dependency: {spec.program}", Colors.RED, supports_color(sys.stderr)), file=sys.stderr)
        return 127

    if args.inherit:
        asyncio.run(spec.run_inherited(cwd=args.cwd))
        return 0

    try:
        result = asyncio.run(spec.run(cwd=args.cwd))
    except (NonZeroExit, SignalTerminated) as e:
        sys.stdout.write(e.stdout)
        sys.stderr.write(e.stderr)
        raise
    sys.stdout.write(result.stdout)
    sys.stderr.write(result.stderr)
    return 0


def cmd_config(args) -> int:
    """Print the example config, or write it with --init."""
    if args.init:
        if write_example_config():
            print(c(f"+ Wrote {paths.USER_CONFIG_FILE}", Colors.GREEN, supports_color(sys.stdout)))
        else:
            print(c(f"{paths.USER_CONFIG_FILE} already exists", Colors.YELLOW, supports_color(sys.stdout)))
        return 0
    print(create_example_config(), end="")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        color = None if get_config_value("logging.color", True, load_user_config()) else False
        set_logger(ConsoleLogger(args.log_level, color=color))

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "check-ref": cmd_check_ref,
        "check-path": cmd_check_path,
        "escape": cmd_escape,
        "run": cmd_run,
        "config": cmd_config,
    }

    try:
        result = commands[args.command](args)
    except SecexecError as e:
        # the executor already logged its own failures
        if not isinstance(e, ExecutionFailure):
            get_logger().error(str(e))
        return exit_code_for(e)
    except KeyboardInterrupt:
        return 130
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
