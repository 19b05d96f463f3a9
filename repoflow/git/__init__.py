"""Git operations for repoflow.

Low-level functions take the repository path and return a GitResult (or a
parsed value that is empty on failure). The workflow uses LocalRepo, which
binds them to one directory and raises GitCommandError on failure.
"""

from repoflow.git.runner import GitResult, run_git
from repoflow.git.status import GitStatus, get_status, parse_status
from repoflow.git.remote import PullFailure, classify_pull_failure
from repoflow.git.repo import LocalRepo, PullError, RemoteCommandError

__all__ = [
    "GitResult",
    "run_git",
    "GitStatus",
    "get_status",
    "parse_status",
    "PullFailure",
    "classify_pull_failure",
    "LocalRepo",
    "PullError",
    "RemoteCommandError",
]
