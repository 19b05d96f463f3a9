"""Pull/push against origin with classified remote failures."""

import logging
from contextlib import contextmanager
from enum import Enum

from repoflow.git.remote import PullFailure
from repoflow.git.repo import LocalRepo, PullError, RemoteCommandError
from repoflow.hosts.base import GitServer
from repoflow.lib.constants import REMOTE_NAME
from repoflow.lib.errors import SSHKeyMissing, UnclassifiedSyncFailure

logger = logging.getLogger(__name__)


class SyncOutcome(Enum):
    """Result of a pull that did not raise."""
    PULLED = "pulled"
    REMOTE_BRANCH_ABSENT = "remote_branch_absent"


class SyncProtocol:
    """Merges remote branches into the working tree and pushes it back."""

    def __init__(self, repo: LocalRepo, server: GitServer):
        self.repo = repo
        self.server = server

    @contextmanager
    def ssh_checked(self):
        """Raise SSHKeyMissing when a remote command inside is refused our key."""
        try:
            yield
        except RemoteCommandError as e:
            if e.failure is PullFailure.SSH_KEY_MISSING:
                raise SSHKeyMissing(
                    self.server.get_ssh_keys_url(),
                    self.server.get_ssh_keys_help_url(),
                ) from e
            raise

    def list_refs(self) -> str:
        """ls-remote --refs against origin."""
        with self.ssh_checked():
            return self.repo.list_remote(["--refs"])

    def pull(self, branch: str, options: list[str] | None = None) -> SyncOutcome:
        """Pull a branch from origin.

        A branch missing on the remote is not an error: the caller proceeds
        without that history.

        Raises:
            SSHKeyMissing: remote rejected the public key
            UnclassifiedSyncFailure: any other pull failure
        """
        logger.info(f"Syncing remote {branch} branch")
        try:
            with self.ssh_checked():
                self.repo.pull(REMOTE_NAME, branch, options)
        except PullError as e:
            if e.failure is PullFailure.REMOTE_BRANCH_ABSENT:
                logger.info(f"Remote branch [{branch}] not found, continuing without it")
                return SyncOutcome.REMOTE_BRANCH_ABSENT
            logger.error(e.stderr.strip())
            raise UnclassifiedSyncFailure(branch, e.stderr.strip()) from e
        return SyncOutcome.PULLED

    def push(self, branch: str) -> None:
        logger.info(f"Pushing to remote {branch} branch")
        with self.ssh_checked():
            self.repo.push(REMOTE_NAME, branch)
        logger.info("Push succeeded")
