"""Tests for repoflow.lib.config and repoflow.lib.cache modules."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from repoflow.lib.cache import CredentialStore
from repoflow.lib.config import load_project_metadata, resolve_cli_home
from repoflow.lib.errors import HomeDirectoryUnavailable


class TestResolveCliHome:
    """Test cache home resolution order."""

    def test_explicit_override_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CLI_HOME", "ignored")
        home = resolve_cli_home(tmp_path / "explicit")
        assert home == (tmp_path / "explicit").resolve()
        assert home.is_dir()

    def test_env_relative_to_user_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CLI_HOME", ".custom-home")
        with patch("repoflow.lib.config.Path.home", return_value=tmp_path):
            home = resolve_cli_home()
        assert home == (tmp_path / ".custom-home").resolve()
        assert home.is_dir()

    def test_default_under_user_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CLI_HOME", raising=False)
        with patch("repoflow.lib.config.Path.home", return_value=tmp_path):
            home = resolve_cli_home()
        assert home == (tmp_path / ".repoflow-cli").resolve()

    def test_unavailable_when_path_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(HomeDirectoryUnavailable):
            resolve_cli_home(blocker / "home")


class TestCredentialStore:
    """Test single-value cache entries."""

    def test_missing_entry_reads_none(self, tmp_path):
        assert CredentialStore(tmp_path).read_entry(".git_token") is None

    def test_write_then_read(self, tmp_path):
        store = CredentialStore(tmp_path)
        path = store.write_entry(".git_server", "github")
        assert path == tmp_path / ".git" / ".git_server"
        assert store.read_entry(".git_server") == "github"

    def test_overwrite(self, tmp_path):
        store = CredentialStore(tmp_path)
        store.write_entry(".git_own", "user")
        store.write_entry(".git_own", "org")
        assert store.read_entry(".git_own") == "org"

    def test_blank_entry_reads_none(self, tmp_path):
        store = CredentialStore(tmp_path)
        store.write_entry(".git_login", "  \n")
        assert store.read_entry(".git_login") is None

    def test_strips_whitespace(self, tmp_path):
        store = CredentialStore(tmp_path)
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / ".git_token").write_text("abc123\n")
        assert store.read_entry(".git_token") == "abc123"


class TestLoadProjectMetadata:
    """Test name/version discovery from project files."""

    def test_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "1.2.3"\n')
        meta = load_project_metadata(tmp_path)
        assert (meta.name, meta.version) == ("demo", "1.2.3")

    def test_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"name": "web", "version": "0.1.0"}))
        meta = load_project_metadata(tmp_path)
        assert (meta.name, meta.version) == ("web", "0.1.0")

    def test_pyproject_without_project_table_falls_back(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.black]\nline-length = 100\n')
        (tmp_path / "package.json").write_text(json.dumps({"name": "web", "version": "0.2.0"}))
        meta = load_project_metadata(tmp_path)
        assert meta.version == "0.2.0"

    def test_nothing_declared(self, tmp_path):
        meta = load_project_metadata(tmp_path)
        assert meta.name is None
        assert meta.version is None

    def test_invalid_json_warns(self, tmp_path, caplog):
        (tmp_path / "package.json").write_text("{not json")
        meta = load_project_metadata(tmp_path)
        assert meta.version is None
        assert "Ignoring unreadable" in caplog.text
