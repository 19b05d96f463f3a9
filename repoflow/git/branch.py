"""Git branch operations."""

from pathlib import Path

from repoflow.git.runner import run_git, GitResult


def get_local_branches(repo: Path) -> list[str]:
    """List local branch names. Empty on failure or before the first commit."""
    result = run_git(["branch", "--format=%(refname:short)"], repo)
    if not result.success:
        return []
    return [b.strip() for b in result.stdout.splitlines() if b.strip()]


def checkout_branch(repo: Path, branch: str) -> GitResult:
    """Checkout an existing branch."""
    return run_git(["checkout", branch], repo)


def checkout_new_branch(repo: Path, branch: str) -> GitResult:
    """Create a branch from HEAD and check it out."""
    return run_git(["checkout", "-b", branch], repo)
