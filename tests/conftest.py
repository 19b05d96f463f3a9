"""Shared fakes for workflow tests."""

from unittest.mock import MagicMock

import pytest

from repoflow.git.repo import LocalRepo
from repoflow.git.status import GitStatus
from repoflow.hosts.base import Identity, RemoteRepo


class FakePrompter:
    """Answers prompts from a queue and records every prompt shown.

    Single-choice lists resolve without consuming an answer, like Prompter.
    """

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.calls = []

    def choose(self, message, choices, default=1):
        self.calls.append(("choose", message, choices))
        if len(choices) == 1:
            return choices[0][0]
        return self.answers.pop(0)

    def password(self, message):
        self.calls.append(("password", message, None))
        return self.answers.pop(0)

    def text(self, message, default=""):
        self.calls.append(("text", message, default))
        return self.answers.pop(0)


class FakeServer:
    """In-memory GitServer: repositories exist once created."""

    def __init__(self, type="github", user=None, orgs=None):
        self.type = type
        self.user = user if user is not None else Identity(login="alice", name="Alice")
        self.orgs = orgs or []
        self.repos = {}
        self.token = None
        self.created = []
        self.fail_create = False

    def set_token(self, token):
        self.token = token

    def get_user(self):
        return self.user

    def get_orgs(self):
        return list(self.orgs)

    def get_repo(self, login, name):
        return self.repos.get((login, name))

    def _create(self, login, name):
        if self.fail_create:
            return None
        repo = RemoteRepo(
            name=name,
            full_name=f"{login}/{name}",
            owner=login,
            ssh_url=self.get_remote(login, name),
        )
        self.repos[(login, name)] = repo
        self.created.append((login, name))
        return repo

    def create_repo(self, name):
        return self._create(self.user.login, name)

    def create_org_repo(self, name, org):
        return self._create(org, name)

    def get_remote(self, login, name):
        return f"git@{self.type}.com:{login}/{name}.git"

    def get_token_help_url(self):
        return "https://example.com/tokens"

    def get_ssh_keys_url(self):
        return "https://example.com/keys"

    def get_ssh_keys_help_url(self):
        return "https://example.com/keys-help"

    def close(self):
        pass


@pytest.fixture
def fake_server():
    return FakeServer()


@pytest.fixture
def mock_repo():
    """LocalRepo double for a clean, initialized tree with no remote refs."""
    repo = MagicMock(spec=LocalRepo)
    repo.is_initialized.return_value = True
    repo.status.return_value = GitStatus()
    repo.get_remotes.return_value = ["origin"]
    repo.list_remote.return_value = ""
    repo.branch_local.return_value = ["master"]
    repo.stash_list.return_value = []
    return repo


@pytest.fixture
def make_prompter():
    """Factory for FakePrompter with queued answers."""
    return FakePrompter
