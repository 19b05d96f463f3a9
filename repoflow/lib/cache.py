"""Persisted single-value cache entries (server, token, owner, login, publish)."""

import logging
from pathlib import Path

from repoflow.lib.constants import GIT_ROOT_DIR
from repoflow.lib.errors import HomeDirectoryUnavailable

logger = logging.getLogger(__name__)


class CredentialStore:
    """One file per entry under <home>/.git/.

    An empty or whitespace-only file reads as absent.
    """

    def __init__(self, home: Path):
        self.home = home
        self.root = home / GIT_ROOT_DIR

    def path_for(self, name: str) -> Path:
        """Return the file backing an entry, creating the cache dir if needed."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HomeDirectoryUnavailable(self.root) from e
        return self.root / name

    def read_entry(self, name: str) -> str | None:
        path = self.root / name
        if not path.exists():
            return None
        value = path.read_text().strip()
        return value or None

    def write_entry(self, name: str, value: str) -> Path:
        path = self.path_for(name)
        path.write_text(value)
        logger.debug(f"Wrote cache entry {name} -> {path}")
        return path
