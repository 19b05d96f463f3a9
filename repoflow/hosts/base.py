"""
Hosting platform client interface.

A GitServer authenticates with a personal access token, resolves the user
and organizations behind it, and finds or creates repositories. The workflow
picks one concrete client (GitHub or Gitee) once and talks only to this
interface afterwards.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from repoflow.lib.errors import HostAPIError
from repoflow.lib.validate import validate

logger = logging.getLogger(__name__)

# Timeout for hosting platform API calls (seconds)
API_TIMEOUT_SECONDS = 30


@dataclass
class Identity:
    """A user or organization account."""
    login: str
    name: str | None = None


@dataclass
class RemoteRepo:
    """A repository as reported by the hosting platform."""
    name: str
    full_name: str
    owner: str
    ssh_url: str
    html_url: str | None = None


def identity_from_payload(data: dict[str, Any]) -> Identity:
    validate(data, "identity")
    return Identity(login=data["login"], name=data.get("name"))


def repo_from_payload(data: dict[str, Any]) -> RemoteRepo:
    validate(data, "repository")
    owner = (data.get("owner") or {}).get("login") or data["full_name"].split("/")[0]
    return RemoteRepo(
        name=data["name"],
        full_name=data["full_name"],
        owner=owner,
        ssh_url=data["ssh_url"],
        html_url=data.get("html_url"),
    )


class GitServer(ABC):
    """Base class for hosting platform clients."""

    type: str = ""
    base_url: str = ""

    def __init__(self, transport: httpx.BaseTransport | None = None):
        self.token: str | None = None
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=API_TIMEOUT_SECONDS,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def set_token(self, token: str) -> None:
        self.token = token

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> Any:
        """Send an authenticated request and decode the JSON response.

        Returns None on 404 when allow_missing is set.

        Raises:
            HostAPIError: on transport failure or any other non-2xx status
        """
        try:
            response = self._client.request(
                method,
                path,
                params=self._auth_params(params),
                json=body,
                headers=self._auth_headers(),
            )
        except httpx.HTTPError as e:
            raise HostAPIError(self.type, 0, str(e)) from e

        if response.status_code == 404 and allow_missing:
            return None
        if response.status_code >= 400:
            raise HostAPIError(self.type, response.status_code, _error_message(response))
        return response.json()

    def _auth_headers(self) -> dict[str, str]:
        return {}

    def _auth_params(self, params: dict[str, Any] | None) -> dict[str, Any] | None:
        return params

    def get_user(self) -> Identity | None:
        try:
            data = self._request("GET", "/user", allow_missing=True)
        except HostAPIError as e:
            if e.status_code != 401:
                raise
            logger.warning(f"{self.type} rejected the token: {e}")
            return None
        if not data:
            return None
        return identity_from_payload(data)

    def get_orgs(self) -> list[Identity]:
        data = self._request("GET", "/user/orgs", params={"page": 1, "per_page": 100})
        return [identity_from_payload(item) for item in data or []]

    def get_repo(self, login: str, name: str) -> RemoteRepo | None:
        data = self._request("GET", f"/repos/{login}/{name}", allow_missing=True)
        if not data:
            return None
        return repo_from_payload(data)

    def create_repo(self, name: str) -> RemoteRepo | None:
        data = self._request("POST", "/user/repos", body={"name": name})
        return repo_from_payload(data) if data else None

    def create_org_repo(self, name: str, org: str) -> RemoteRepo | None:
        data = self._request("POST", f"/orgs/{org}/repos", body={"name": name})
        return repo_from_payload(data) if data else None

    @abstractmethod
    def get_remote(self, login: str, name: str) -> str:
        ...

    @abstractmethod
    def get_token_help_url(self) -> str:
        ...

    @abstractmethod
    def get_ssh_keys_url(self) -> str:
        ...

    @abstractmethod
    def get_ssh_keys_help_url(self) -> str:
        ...


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(data, dict):
        return data.get("message") or data.get("error") or str(data)
    return str(data)
