"""LocalRepo: the git operations the workflow consumes, bound to one directory.

Methods raise GitCommandError when git exits non-zero, so callers only
handle the failures they can act on. Failed network commands (ls-remote,
pull, push) raise RemoteCommandError, tagged with a PullFailure.
"""

from pathlib import Path

from repoflow.git import branch as git_branch
from repoflow.git import commit as git_commit
from repoflow.git import remote as git_remote
from repoflow.git import stash as git_stash
from repoflow.git.remote import PullFailure, classify_pull_failure
from repoflow.git.runner import run_git, GitResult
from repoflow.git.status import GitStatus, get_status
from repoflow.lib.constants import GIT_ROOT_DIR, MASTER_BRANCH
from repoflow.lib.errors import GitCommandError


class RemoteCommandError(GitCommandError):
    """A command talking to the remote failed; failure says why."""

    def __init__(self, args: list[str], stderr: str, failure: PullFailure):
        self.failure = failure
        super().__init__(args, stderr)


class PullError(RemoteCommandError):
    """A pull failed."""


def _check(args: list[str], result: GitResult) -> GitResult:
    if not result.success:
        raise GitCommandError(args, result.output)
    return result


class LocalRepo:
    """Git operations on a single working directory."""

    def __init__(self, path: Path):
        self.path = path

    def is_initialized(self) -> bool:
        return (self.path / GIT_ROOT_DIR).exists()

    def init(self, initial_branch: str = MASTER_BRANCH) -> None:
        args = ["init", f"--initial-branch={initial_branch}"]
        _check(args, run_git(args, self.path))

    def status(self) -> GitStatus:
        result, status = get_status(self.path)
        _check(["status"], result)
        return status

    def add(self, paths: list[str]) -> None:
        if not paths:
            return
        _check(["add"] + paths, git_commit.stage_files(self.path, paths))

    def commit(self, message: str) -> None:
        _check(["commit"], git_commit.commit(self.path, message))

    def get_remotes(self) -> list[str]:
        return git_remote.get_remotes(self.path)

    def add_remote(self, name: str, url: str) -> None:
        _check(["remote", "add", name, url], git_remote.add_remote(self.path, name, url))

    def pull(self, remote: str, branch: str, options: list[str] | None = None) -> None:
        result = git_remote.pull(self.path, remote, branch, options)
        if not result.success:
            stderr = result.output
            raise PullError(
                ["pull", remote, branch] + (options or []),
                stderr,
                classify_pull_failure(stderr, branch),
            )

    def push(self, remote: str, branch: str) -> None:
        result = git_remote.push(self.path, remote, branch)
        if not result.success:
            raise RemoteCommandError(
                ["push", remote, branch], result.output, classify_pull_failure(result.output)
            )

    def list_remote(self, args: list[str] | None = None) -> str:
        result = git_remote.list_remote(self.path, args)
        if not result.success:
            raise RemoteCommandError(
                ["ls-remote"] + (args or []),
                result.output,
                classify_pull_failure(result.output),
            )
        return result.stdout

    def branch_local(self) -> list[str]:
        return git_branch.get_local_branches(self.path)

    def checkout(self, branch: str) -> None:
        _check(["checkout", branch], git_branch.checkout_branch(self.path, branch))

    def checkout_local_branch(self, branch: str) -> None:
        _check(["checkout", "-b", branch], git_branch.checkout_new_branch(self.path, branch))

    def stash_list(self) -> list[str]:
        return git_stash.get_stash_list(self.path)

    def stash(self, args: list[str]) -> None:
        _check(["stash"] + args, git_stash.stash(self.path, args))
