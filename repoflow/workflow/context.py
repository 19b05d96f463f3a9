"""Per-invocation workflow state."""

from dataclasses import dataclass, field
from pathlib import Path

from repoflow.hosts.base import Identity, RemoteRepo
from repoflow.lib.constants import REPO_OWNER_USER


@dataclass
class WorkflowOptions:
    """Flags controlling cache refresh and release mode."""
    cli_home: Path | None = None
    refresh_server: bool = False
    refresh_token: bool = False
    refresh_owner: bool = False
    prod: bool = False
    channel: str | None = None  # "release" or "dev"; None means dev


@dataclass
class RepositoryContext:
    """Everything the workflow has resolved about the repository so far.

    Created once per invocation and filled in step by step; never persisted
    as a whole.
    """
    dir: Path
    name: str
    version: str
    home: Path | None = None
    server: str | None = None  # "github" or "gitee"
    owner: str = REPO_OWNER_USER
    login: str | None = None
    user: Identity | None = None
    orgs: list[Identity] = field(default_factory=list)
    repo: RemoteRepo | None = None
    remote: str | None = None
    branch: str | None = None
