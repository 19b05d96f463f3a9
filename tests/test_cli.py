"""Tests for repoflow.cli module."""

import json
from unittest.mock import patch

import pytest

from repoflow.cli import build_parser, get_engine, main
from repoflow.lib.errors import InvalidVersion, UnresolvedConflict


@pytest.fixture
def project(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps({"name": "web", "version": "1.0.0"}))
    return tmp_path


class TestParser:
    """Test argument parsing."""

    def test_prepare_defaults(self):
        args = build_parser().parse_args(["prepare"])
        assert args.dir == "."
        assert args.refresh_server is False
        assert args.refresh_token is False
        assert args.refresh_owner is False

    def test_commit_channel(self):
        args = build_parser().parse_args(["commit", "--channel", "release"])
        assert args.channel == "release"

    def test_unknown_channel_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["commit", "--channel", "hotfix"])

    def test_publish_prod(self):
        args = build_parser().parse_args(["publish", "--prod", "--refresh-token"])
        assert args.prod is True
        assert args.refresh_token is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestGetEngine:

    def test_metadata_defaults(self, project):
        args = build_parser().parse_args(["prepare", "--dir", str(project)])
        engine = get_engine(args)
        assert engine.context.name == "web"
        assert engine.context.version == "1.0.0"

    def test_flags_override_metadata(self, project):
        args = build_parser().parse_args([
            "publish", "--dir", str(project), "--name", "site", "--version", "2.0.0",
            "--prod", "--channel", "release",
        ])
        engine = get_engine(args)
        assert (engine.context.name, engine.context.version) == ("site", "2.0.0")
        assert engine.options.prod is True
        assert engine.options.channel == "release"

    def test_name_falls_back_to_directory(self, tmp_path):
        args = build_parser().parse_args(["prepare", "--dir", str(tmp_path), "--version", "0.1.0"])
        assert get_engine(args).context.name == tmp_path.name


class TestMain:
    """Test exit codes."""

    def test_missing_directory(self, tmp_path, capsys):
        assert main(["prepare", "--dir", str(tmp_path / "nope")]) == 2
        assert "Not a directory" in capsys.readouterr().err

    def test_missing_version(self, tmp_path, capsys):
        assert main(["prepare", "--dir", str(tmp_path)]) == 2
        assert "No version found" in capsys.readouterr().err

    @patch("repoflow.cli.WorkflowEngine")
    def test_prepare_success(self, mock_engine_cls, project, capsys):
        engine = mock_engine_cls.return_value
        engine.prepare.return_value.name = "web"
        engine.prepare.return_value.version = "1.0.0"

        assert main(["prepare", "--dir", str(project)]) == 0
        assert "Prepared web 1.0.0" in capsys.readouterr().out
        engine.close.assert_called_once()

    @patch("repoflow.cli.WorkflowEngine")
    def test_commit_runs_prepare_first(self, mock_engine_cls, project):
        engine = mock_engine_cls.return_value
        engine.commit.return_value = "dev/1.0.0"

        assert main(["commit", "--dir", str(project)]) == 0
        calls = [c[0] for c in engine.method_calls]
        assert calls[:2] == ["prepare", "commit"]

    @patch("repoflow.cli.WorkflowEngine")
    def test_workflow_error_exit_code(self, mock_engine_cls, project, capsys):
        engine = mock_engine_cls.return_value
        engine.commit.side_effect = UnresolvedConflict(["app.py"])

        assert main(["commit", "--dir", str(project)]) == 1
        assert "ERROR: Unresolved conflicts in: app.py" in capsys.readouterr().err
        engine.close.assert_called_once()

    @patch("repoflow.cli.WorkflowEngine")
    def test_config_error_exit_code(self, mock_engine_cls, project):
        mock_engine_cls.return_value.commit.side_effect = InvalidVersion("1.0")
        assert main(["commit", "--dir", str(project)]) == 2

    @patch("repoflow.cli.WorkflowEngine")
    def test_publish_reports_mode(self, mock_engine_cls, project, capsys):
        engine = mock_engine_cls.return_value
        engine.commit.return_value = "dev/1.0.0"
        engine.publish.return_value = "oss"

        assert main(["publish", "--dir", str(project), "--prod"]) == 0
        assert "Published dev/1.0.0 to oss (production)" in capsys.readouterr().out
