"""
Build service handoff for publish.

The engine only knows the three-phase Builder contract. CloudBuild is the
default implementation: it registers the pushed branch with a remote build
service and asks it to build and upload to the chosen publish target.
"""

import logging
import os
from typing import Any, Callable, Protocol

import httpx

from repoflow.lib.constants import GIT_PUBLISH_TYPE
from repoflow.lib.errors import BuildError
from repoflow.lib.validate import validate
from repoflow.workflow.context import RepositoryContext

logger = logging.getLogger(__name__)

BUILD_URL_ENV = "REPOFLOW_BUILD_URL"
DEFAULT_BUILD_URL = "http://127.0.0.1:7001"

# Builds can take a while
BUILD_TIMEOUT_SECONDS = 600


class Builder(Protocol):
    def prepare(self) -> None: ...
    def init(self) -> None: ...
    def build(self) -> None: ...
    def close(self) -> None: ...

BuilderFactory = Callable[[RepositoryContext, str, bool], Builder]


class CloudBuild:
    """Client for the remote build service."""

    def __init__(
        self,
        context: RepositoryContext,
        publish_type: str,
        prod: bool = False,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.context = context
        self.publish_type = publish_type
        self.prod = prod
        self.base_url = (base_url or os.environ.get(BUILD_URL_ENV) or DEFAULT_BUILD_URL).rstrip("/")
        self.task_id: str | None = None
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=BUILD_TIMEOUT_SECONDS,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def prepare(self) -> None:
        """Check the publish target and that there is something to build."""
        supported = {value for value, _ in GIT_PUBLISH_TYPE}
        if self.publish_type not in supported:
            raise BuildError(f"Unsupported publish type '{self.publish_type}'")
        if not self.context.remote or not self.context.branch:
            raise BuildError("Nothing to build: remote and branch must be resolved first")
        logger.info(f"Build target: {self.publish_type} ({'prod' if self.prod else 'dev'})")

    def init(self) -> None:
        """Register a build task with the service."""
        data = self._post("/build/init", {
            "repo": self.context.remote,
            "name": self.context.name,
            "version": self.context.version,
            "branch": self.context.branch,
            "prod": self.prod,
            "publish_type": self.publish_type,
        })
        validate(data, "build_task")
        self.task_id = data["task_id"]
        logger.info(f"Build task created: {self.task_id}")

    def build(self) -> None:
        """Run the registered task.

        Raises:
            BuildError: if the service reports failure
        """
        if not self.task_id:
            raise BuildError("Build task not initialized")
        data = self._post(f"/build/{self.task_id}", {})
        validate(data, "build_result")
        if not data["success"]:
            raise BuildError(f"Build failed: {data.get('message') or 'unknown error'}")
        logger.info(f"Build succeeded{': ' + data['url'] if data.get('url') else ''}")

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, body: dict[str, Any]) -> Any:
        try:
            response = self._client.post(path, json=body)
        except httpx.HTTPError as e:
            raise BuildError(f"Build service unreachable at {self.base_url}: {e}") from e
        if response.status_code >= 400:
            raise BuildError(f"Build service error ({response.status_code}): {response.text.strip()}")
        return response.json()
