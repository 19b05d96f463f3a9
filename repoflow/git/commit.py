"""Git commit operations."""

from pathlib import Path

from repoflow.git.runner import run_git, GitResult


def stage_files(worktree: Path, files: list[str]) -> GitResult:
    """Stage specific files, including deletions."""
    return run_git(["add", "-A", "--"] + files, worktree)


def commit(worktree: Path, message: str) -> GitResult:
    """Create a commit with the given message."""
    return run_git(["commit", "-m", message], worktree)
