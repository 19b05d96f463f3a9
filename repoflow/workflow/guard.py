"""Conflict and staging checks run before every sync."""

import logging

from repoflow.git.repo import LocalRepo
from repoflow.lib.errors import UnresolvedConflict
from repoflow.lib.prompts import Prompter

logger = logging.getLogger(__name__)

COMMIT_MESSAGE_PROMPT = "Enter commit message"


class ConflictGuard:
    """Refuses to continue over conflicts; commits pending work."""

    def __init__(self, repo: LocalRepo, prompter: Prompter):
        self.repo = repo
        self.prompter = prompter

    def check_conflicted(self) -> None:
        """
        Raises:
            UnresolvedConflict: if the working tree has any conflicted path
        """
        logger.info("Checking for code conflicts")
        status = self.repo.status()
        if status.conflicted:
            raise UnresolvedConflict(status.conflicted)
        logger.info("Conflict check passed")

    def check_not_committed(self) -> bool:
        """Stage and commit pending changes. Returns True if a commit was made.

        Re-prompts until the commit message is non-empty.
        """
        status = self.repo.status()
        if not status.has_pending:
            return False

        logger.debug(f"status: {status}")
        self.repo.add(status.not_added)
        self.repo.add(status.created)
        self.repo.add(status.deleted)
        self.repo.add(status.modified)
        self.repo.add(status.renamed)

        message = ""
        while not message:
            message = self.prompter.text(COMMIT_MESSAGE_PROMPT, default="").strip()
        self.repo.commit(message)
        logger.info("Local commit created")
        return True
