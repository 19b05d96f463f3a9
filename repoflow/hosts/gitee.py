"""Gitee (v5) REST API client."""

from typing import Any

from repoflow.hosts.base import GitServer
from repoflow.lib.constants import GITEE


class Gitee(GitServer):
    """Token auth via the access_token query parameter."""

    type = GITEE
    base_url = "https://gitee.com/api/v5"

    def _auth_params(self, params: dict[str, Any] | None) -> dict[str, Any] | None:
        if not self.token:
            return params
        return {**(params or {}), "access_token": self.token}

    def get_remote(self, login: str, name: str) -> str:
        return f"git@gitee.com:{login}/{name}.git"

    def get_token_help_url(self) -> str:
        return "https://gitee.com/personal_access_tokens"

    def get_ssh_keys_url(self) -> str:
        return "https://gitee.com/profile/sshkeys"

    def get_ssh_keys_help_url(self) -> str:
        return "https://gitee.com/help/articles/4191"
