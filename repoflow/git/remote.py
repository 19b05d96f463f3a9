"""Git remote operations."""

import re
from enum import Enum
from pathlib import Path

from repoflow.git.runner import run_git, GitResult, NETWORK_TIMEOUT

SSH_DENIED_PATTERN = re.compile(r"Permission denied \(publickey\)", re.IGNORECASE)


class PullFailure(Enum):
    """Why a pull (or another remote command) failed."""
    SSH_KEY_MISSING = "ssh_key_missing"
    REMOTE_BRANCH_ABSENT = "remote_branch_absent"
    OTHER = "other"


def classify_pull_failure(stderr: str, branch: str | None = None) -> PullFailure:
    """Map git's error text onto a PullFailure tag.

    Without a branch only the SSH rejection is recognised.
    """
    if SSH_DENIED_PATTERN.search(stderr):
        return PullFailure.SSH_KEY_MISSING
    if branch is None:
        return PullFailure.OTHER
    missing_ref = re.compile(rf"couldn't find remote ref {re.escape(branch)}(?:\s|$)", re.IGNORECASE)
    if missing_ref.search(stderr):
        return PullFailure.REMOTE_BRANCH_ABSENT
    return PullFailure.OTHER


def get_remotes(repo: Path) -> list[str]:
    """List configured remote names."""
    result = run_git(["remote"], repo)
    return [r.strip() for r in result.stdout.splitlines() if r.strip()]


def add_remote(repo: Path, name: str, url: str) -> GitResult:
    """Register a remote."""
    return run_git(["remote", "add", name, url], repo)


def pull(repo: Path, remote: str, branch: str, options: list[str] | None = None) -> GitResult:
    """Pull a branch with a merge (never rebase), without opening an editor."""
    args = ["pull", "--no-rebase", "--no-edit", remote, branch] + (options or [])
    return run_git(args, repo, timeout=NETWORK_TIMEOUT)


def push(repo: Path, remote: str, branch: str) -> GitResult:
    """Push a branch to a remote."""
    return run_git(["push", remote, branch], repo, timeout=NETWORK_TIMEOUT)


def list_remote(repo: Path, args: list[str] | None = None) -> GitResult:
    """Run git ls-remote against the default remote."""
    return run_git(["ls-remote"] + (args or []), repo, timeout=NETWORK_TIMEOUT)
