"""GitHub REST API client."""

from repoflow.hosts.base import GitServer
from repoflow.lib.constants import GITHUB


class GitHub(GitServer):
    """Token auth via the Authorization header."""

    type = GITHUB
    base_url = "https://api.github.com"

    def _auth_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def get_remote(self, login: str, name: str) -> str:
        return f"git@github.com:{login}/{name}.git"

    def get_token_help_url(self) -> str:
        return "https://github.com/settings/tokens"

    def get_ssh_keys_url(self) -> str:
        return "https://github.com/settings/keys"

    def get_ssh_keys_help_url(self) -> str:
        return "https://docs.github.com/en/authentication/connecting-to-github-with-ssh"
