"""Hosting platform clients."""

from repoflow.hosts.base import GitServer, Identity, RemoteRepo
from repoflow.hosts.gitee import Gitee
from repoflow.hosts.github import GitHub
from repoflow.lib.constants import GITEE, GITHUB
from repoflow.lib.errors import UnknownGitServer

GIT_SERVERS: dict[str, type[GitServer]] = {
    GITHUB: GitHub,
    GITEE: Gitee,
}


def create_git_server(kind: str) -> GitServer:
    """Instantiate the client for a platform kind ("github" or "gitee")."""
    try:
        server_cls = GIT_SERVERS[kind]
    except KeyError:
        raise UnknownGitServer(kind) from None
    return server_cls()


__all__ = [
    "GitServer",
    "Identity",
    "RemoteRepo",
    "GitHub",
    "Gitee",
    "GIT_SERVERS",
    "create_git_server",
]
