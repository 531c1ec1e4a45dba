"""Safe git operations (argument vectors, validated refs and paths)."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, Optional, Sequence, Union

from ..utils.logger import Logger
from ..utils.process import ExecutionResult, run_secure
from .errors import NonZeroExit
from .validators import require_file_path, require_git_ref

RepoPath = Union[str, Path]


async def run_git(
    repo_path: RepoPath,
    args: Sequence[str],
    logger: Optional[Logger] = None,
    expected_codes: Collection[int] = (),
) -> ExecutionResult:
    """Run ``git <args>`` inside ``repo_path``."""
    return await run_secure(
        "git", list(args), cwd=repo_path, logger=logger, expected_codes=expected_codes
    )


async def current_branch(repo_path: RepoPath, logger: Optional[Logger] = None) -> Optional[str]:
    """Get the current branch name, or None on a detached HEAD."""
    result = await run_git(repo_path, ["rev-parse", "--abbrev-ref", "HEAD"], logger)
    name = result.stdout.strip()
    return None if name == "HEAD" else name


async def rev_parse(repo_path: RepoPath, ref: str, logger: Optional[Logger] = None) -> str:
    """
    Resolve a ref to its object id.

    Raises:
        ValidationRejected: ``ref`` is not a safe ref name (nothing is spawned)
        NonZeroExit: git could not resolve it
    """
    require_git_ref(ref)
    result = await run_git(repo_path, ["rev-parse", "--verify", "--quiet", ref], logger)
    return result.stdout.strip()


async def branch_exists(
    repo_path: RepoPath,
    branch: str,
    remote: Optional[str] = "origin",
    logger: Optional[Logger] = None,
) -> bool:
    """Check if a branch exists locally or on ``remote``."""
    require_git_ref(branch)
    candidates = [f"refs/heads/{branch}"]
    if remote:
        require_git_ref(remote)
        candidates.append(f"refs/remotes/{remote}/{branch}")

    for ref in candidates:
        try:
            # show-ref exits 1 for a missing ref; anything else is a real failure
            await run_git(repo_path, ["show-ref", "--verify", "--quiet", ref], logger, expected_codes=(1,))
            return True
        except NonZeroExit as e:
            if e.code != 1:
                raise
    return False


async def diff_range(
    repo_path: RepoPath,
    base: str,
    head: str = "HEAD",
    stat: bool = False,
    logger: Optional[Logger] = None,
) -> str:
    """Get git diff for ``base..head``; each side is validated separately."""
    require_git_ref(base)
    require_git_ref(head)
    args = ["diff", f"{base}..{head}"]
    if stat:
        args.append("--stat")
    result = await run_git(repo_path, args, logger)
    return result.stdout


async def show_file(
    repo_path: RepoPath,
    ref: str,
    path: str,
    logger: Optional[Logger] = None,
) -> str:
    """Return the contents of ``path`` as of ``ref``."""
    require_git_ref(ref)
    require_file_path(path)
    result = await run_git(repo_path, ["show", f"{ref}:{path}"], logger)
    return result.stdout


async def log_oneline(
    repo_path: RepoPath,
    ref: Optional[str] = None,
    count: Optional[int] = None,
    paths: Sequence[str] = (),
    logger: Optional[Logger] = None,
) -> list[str]:
    """List commits as ``<sha> <subject>`` lines, optionally limited to paths."""
    args = ["log", "--oneline"]
    if count:
        args.extend(["-n", str(int(count))])
    if ref:
        args.append(require_git_ref(ref))
    if paths:
        # "--" stops git from reading a path as a revision or option
        args.append("--")
        args.extend(require_file_path(p) for p in paths)
    result = await run_git(repo_path, args, logger)
    return [line for line in result.stdout.splitlines() if line]
