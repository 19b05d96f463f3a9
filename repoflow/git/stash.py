"""Git stash operations."""

from pathlib import Path

from repoflow.git.runner import run_git, GitResult


def get_stash_list(repo: Path) -> list[str]:
    """List stash entries, most recent first."""
    result = run_git(["stash", "list"], repo)
    if not result.success:
        return []
    return [s for s in result.stdout.splitlines() if s.strip()]


def stash(repo: Path, args: list[str]) -> GitResult:
    """Run a stash subcommand (e.g. ["pop"])."""
    return run_git(["stash"] + args, repo)
