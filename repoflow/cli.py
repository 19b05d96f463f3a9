#!/usr/bin/env python3
"""repoflow CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from repoflow import __version__
from repoflow.commands import commit as cmd_commit_module
from repoflow.commands import prepare as cmd_prepare_module
from repoflow.commands import publish as cmd_publish_module
from repoflow.lib.config import load_project_metadata
from repoflow.lib.constants import EXIT_CONFIG, VERSION_DEVELOP, VERSION_RELEASE
from repoflow.lib.errors import RepoflowError
from repoflow.workflow.context import RepositoryContext, WorkflowOptions
from repoflow.workflow.engine import WorkflowEngine


def get_engine(args) -> WorkflowEngine | None:
    """Build the engine for --dir, defaulting name/version from project metadata."""
    project_dir = Path(args.dir).resolve()
    if not project_dir.is_dir():
        print(f"ERROR: Not a directory: {project_dir}", file=sys.stderr)
        return None

    metadata = load_project_metadata(project_dir)
    name = args.name or metadata.name or project_dir.name
    version = args.project_version or metadata.version
    if not version:
        print(
            "ERROR: No version found. Pass --version or declare one in "
            "pyproject.toml or package.json.",
            file=sys.stderr,
        )
        return None

    context = RepositoryContext(dir=project_dir, name=name, version=version)
    options = WorkflowOptions(
        cli_home=Path(args.cli_home) if args.cli_home else None,
        refresh_server=args.refresh_server,
        refresh_token=args.refresh_token,
        refresh_owner=args.refresh_owner,
        prod=getattr(args, "prod", False),
        channel=getattr(args, "channel", None),
    )
    return WorkflowEngine(context, options)


def run_command(args, command) -> int:
    engine = get_engine(args)
    if engine is None:
        return EXIT_CONFIG
    try:
        return command(args, engine)
    except RepoflowError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    finally:
        engine.close()


def cmd_prepare(args):
    return run_command(args, cmd_prepare_module.cmd_prepare)


def cmd_commit(args):
    return run_command(args, cmd_commit_module.cmd_commit)


def cmd_publish(args):
    return run_command(args, cmd_publish_module.cmd_publish)


def add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument('--dir', '-d', default='.', help='Project directory (default: current)')
    p.add_argument('--name', help='Repository name (default: from project metadata or directory name)')
    p.add_argument('--version', dest='project_version', help='Semantic version (default: from project metadata)')
    p.add_argument('--cli-home', help='Cache directory (default: $CLI_HOME or ~/.repoflow-cli)')
    p.add_argument('--refresh-server', action='store_true', help='Choose the git platform again')
    p.add_argument('--refresh-token', action='store_true', help='Enter the access token again')
    p.add_argument('--refresh-owner', action='store_true', help='Choose the repository owner again')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='repoflow', description='Prepare, commit and publish a project')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug logging')
    parser.add_argument('-V', action='version', version=f'repoflow {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # repoflow prepare
    p_prepare = subparsers.add_parser('prepare', help='Resolve platform, token, owner and remote repository')
    add_common_arguments(p_prepare)
    p_prepare.set_defaults(func=cmd_prepare)

    # repoflow commit
    p_commit = subparsers.add_parser('commit', help='Commit and push the versioned branch')
    add_common_arguments(p_commit)
    p_commit.add_argument(
        '--channel', choices=[VERSION_DEVELOP, VERSION_RELEASE],
        help='Branch channel (default: dev)',
    )
    p_commit.set_defaults(func=cmd_commit)

    # repoflow publish
    p_publish = subparsers.add_parser('publish', help='Commit, push and build for release')
    add_common_arguments(p_publish)
    p_publish.add_argument(
        '--channel', choices=[VERSION_DEVELOP, VERSION_RELEASE],
        help='Branch channel (default: dev)',
    )
    p_publish.add_argument('--prod', action='store_true', help='Production release')
    p_publish.set_defaults(func=cmd_publish)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
