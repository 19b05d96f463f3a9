"""
Versioned branch naming and remote ref discovery.

Branches are named "<channel>/<semver>", e.g. "dev/0.1.0" or
"release/1.2.3". Released versions are discovered from remote tags
(refs/tags/release/<semver>), in-progress ones from remote heads
(refs/heads/dev/<semver>).
"""

import logging

from repoflow.git.repo import LocalRepo
from repoflow.lib.constants import (
    DEV_BRANCH_PREFIX,
    RELEASE_TAG_PREFIX,
    SEMVER_PATTERN,
    VALID_CHANNELS,
    VERSION_DEVELOP,
    VERSION_RELEASE,
)
from repoflow.lib.errors import InvalidVersion
from repoflow.workflow.context import RepositoryContext

logger = logging.getLogger(__name__)


def is_valid_version(version: str) -> bool:
    return bool(version) and SEMVER_PATTERN.match(version) is not None


def build_branch_name(channel: str | None, version: str) -> str:
    """Compose "<channel>/<version>", defaulting the channel to dev.

    Raises:
        InvalidVersion: if version is not a semantic version
        ValueError: if channel is unknown
    """
    channel = channel or VERSION_DEVELOP
    if channel not in VALID_CHANNELS:
        raise ValueError(f"Unknown channel '{channel}'")
    if not is_valid_version(version):
        raise InvalidVersion(version)
    return f"{channel}/{version}"


def channel_ref_prefix(channel: str | None) -> str:
    """Ref prefix scanned for a channel's versions."""
    if channel == VERSION_RELEASE:
        return RELEASE_TAG_PREFIX
    return DEV_BRANCH_PREFIX


def scan_remote_refs(refs: str, prefix: str) -> list[str]:
    """Extract valid versions from `git ls-remote --refs` output.

    Lines look like "<sha>\\t<ref>". Refs under prefix whose remainder is
    not a semantic version are skipped.
    """
    versions = []
    for line in refs.splitlines():
        parts = line.split()
        if not parts:
            continue
        ref = parts[-1]
        if not ref.startswith(prefix):
            continue
        token = ref[len(prefix):]
        if is_valid_version(token):
            versions.append(token)
    return versions


class BranchResolver:
    """Resolves and checks out the working branch for a context."""

    def __init__(self, repo: LocalRepo, context: RepositoryContext):
        self.repo = repo
        self.context = context

    def remote_versions(self, channel: str | None = None) -> list[str]:
        refs = self.repo.list_remote(["--refs"])
        return scan_remote_refs(refs, channel_ref_prefix(channel))

    def resolve_version(self, channel: str | None = None) -> str:
        """Set context.branch from the channel and the literal context version."""
        logger.info("Resolving code branch")
        remote_versions = self.remote_versions(channel)
        # The remote list is informational; the declared version is used as-is.
        logger.debug(f"remote versions ({channel or VERSION_DEVELOP}): {remote_versions}")
        self.context.branch = build_branch_name(channel, self.context.version)
        logger.info(f"Code branch resolved: {self.context.branch}")
        return self.context.branch

    def remote_branch_exists(self) -> bool:
        """Whether the current branch already exists as a remote head."""
        channel, _, version = self.context.branch.partition("/")
        refs = self.repo.list_remote(["--refs"])
        return version in scan_remote_refs(refs, f"refs/heads/{channel}/")

    def checkout_branch(self) -> None:
        branch = self.context.branch
        if branch in self.repo.branch_local():
            self.repo.checkout(branch)
        else:
            self.repo.checkout_local_branch(branch)
        logger.info(f"Switched to branch {branch}")

    def check_stash(self) -> bool:
        """Pop the most recent stash, if any. Returns True if one was popped."""
        logger.info("Checking stash entries")
        if not self.repo.stash_list():
            return False
        self.repo.stash(["pop"])
        logger.info("stash pop succeeded")
        return True
