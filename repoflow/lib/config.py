"""
Configuration loaders for repoflow.

Resolves the cache home directory and reads project name/version defaults
from the project's own metadata files.
"""

import json
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from repoflow.lib.constants import CLI_HOME_ENV, DEFAULT_CLI_HOME
from repoflow.lib.errors import HomeDirectoryUnavailable

logger = logging.getLogger(__name__)


@dataclass
class ProjectMetadata:
    """Name and version declared by the project being published."""
    name: str | None = None
    version: str | None = None
    source: str | None = None  # File the values were read from


def resolve_cli_home(explicit: str | Path | None = None) -> Path:
    """
    Resolve and create the cache home directory.

    Order: explicit override, then $CLI_HOME relative to the user home,
    then ~/.repoflow-cli.

    Raises:
        HomeDirectoryUnavailable: if the directory cannot be created
    """
    if explicit:
        home = Path(explicit).expanduser().resolve()
    else:
        user_home = Path.home()
        env_home = os.environ.get(CLI_HOME_ENV)
        home = (user_home / (env_home or DEFAULT_CLI_HOME)).resolve()

    logger.debug(f"home: {home}")
    try:
        home.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise HomeDirectoryUnavailable(home) from e
    if not home.is_dir():
        raise HomeDirectoryUnavailable(home)
    return home


def load_project_metadata(project_dir: Path) -> ProjectMetadata:
    """Read name/version from pyproject.toml, falling back to package.json.

    Returns empty metadata when neither file declares them.
    """
    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        try:
            data = tomllib.loads(pyproject.read_text())
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Ignoring unreadable {pyproject}: {e}")
        else:
            project = data.get("project", {})
            if project.get("name") or project.get("version"):
                return ProjectMetadata(
                    name=project.get("name"),
                    version=project.get("version"),
                    source=str(pyproject),
                )

    package_json = project_dir / "package.json"
    if package_json.exists():
        try:
            data = json.loads(package_json.read_text())
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable {package_json}: {e}")
        else:
            return ProjectMetadata(
                name=data.get("name"),
                version=data.get("version"),
                source=str(package_json),
            )

    return ProjectMetadata()
