"""
Workflow engine: prepare, commit and publish a local project.

prepare resolves everything needed to talk to the remote (cache home,
platform, token, identity, owner, remote repository), writes a default
.gitignore and initializes the local repository on first run. commit puts
pending work on the versioned branch, merges master and the remote copy of
the branch into it, and pushes. publish hands the pushed branch to a build
service.

Steps run strictly in order on one thread; the WorkflowFSM rejects a step
whose prerequisites have not run. Every fatal condition raises a
RepoflowError and nothing already done is rolled back.
"""

import functools
import logging

from repoflow.git.repo import LocalRepo
from repoflow.hosts import create_git_server
from repoflow.hosts.base import GitServer
from repoflow.lib.cache import CredentialStore
from repoflow.lib.config import resolve_cli_home
from repoflow.lib.constants import (
    DEFAULT_GITIGNORE,
    GIT_IGNORE_FILE,
    GIT_LOGIN_FILE,
    GIT_OWN_FILE,
    GIT_OWNER_TYPE,
    GIT_OWNER_TYPE_ONLY,
    GIT_PUBLISH_FILE,
    GIT_PUBLISH_TYPE,
    GIT_SERVER_FILE,
    GIT_SERVER_TYPE,
    GIT_TOKEN_FILE,
    MASTER_BRANCH,
    REMOTE_NAME,
    REPO_OWNER_USER,
)
from repoflow.lib.errors import (
    HostAPIError,
    IdentityResolutionFailed,
    RemoteRepoCreationFailed,
    WorkflowOrderError,
)
from repoflow.lib.prompts import Prompter
from repoflow.workflow.branches import BranchResolver
from repoflow.workflow.build import BuilderFactory, CloudBuild
from repoflow.workflow.context import RepositoryContext, WorkflowOptions
from repoflow.workflow.fsm import WorkflowFSM
from repoflow.workflow.guard import ConflictGuard
from repoflow.workflow.sync import SyncProtocol

logger = logging.getLogger(__name__)


def step(trigger: str):
    """Run a method only when the FSM allows trigger; advance after success."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            if not self.fsm.can(trigger):
                raise WorkflowOrderError(trigger, self.fsm.state)
            result = fn(self, *args, **kwargs)
            self.fsm.advance(trigger)
            return result
        return wrapper
    return decorator


class WorkflowEngine:
    """Drives one repository through prepare, commit and publish."""

    def __init__(
        self,
        context: RepositoryContext,
        options: WorkflowOptions | None = None,
        prompter: Prompter | None = None,
        repo: LocalRepo | None = None,
        server_factory=create_git_server,
        builder_factory: BuilderFactory = CloudBuild,
    ):
        self.context = context
        self.options = options or WorkflowOptions()
        self.prompter = prompter or Prompter()
        self.repo = repo or LocalRepo(context.dir)
        self.server_factory = server_factory
        self.builder_factory = builder_factory

        self.fsm = WorkflowFSM()
        self.store: CredentialStore | None = None
        self.server: GitServer | None = None
        self.sync: SyncProtocol | None = None
        self.guard = ConflictGuard(self.repo, self.prompter)
        self.branches = BranchResolver(self.repo, context)

    # prepare

    def prepare(self) -> RepositoryContext:
        self.check_home_path()
        self.check_git_server()
        self.check_git_token()
        self.check_user_and_orgs()
        self.check_git_owner()
        self.check_repo()
        self.check_git_ignore()
        self.init()
        return self.context

    @step("resolve_home")
    def check_home_path(self) -> None:
        self.context.home = resolve_cli_home(self.options.cli_home)
        self.store = CredentialStore(self.context.home)

    @step("resolve_server")
    def check_git_server(self) -> None:
        server = self.store.read_entry(GIT_SERVER_FILE)
        if not server or self.options.refresh_server:
            server = self.prompter.choose("Select the git platform to host your code", GIT_SERVER_TYPE)
            path = self.store.write_entry(GIT_SERVER_FILE, server)
            logger.info(f"git server saved: {server} -> {path}")
        else:
            logger.info(f"git server loaded: {server}")

        if self.server is not None:
            self.server.close()
        self.server = self.server_factory(server)
        self.context.server = server
        self.sync = SyncProtocol(self.repo, self.server)

    @step("resolve_token")
    def check_git_token(self) -> None:
        token = self.store.read_entry(GIT_TOKEN_FILE)
        if not token or self.options.refresh_token:
            logger.info(
                f"{self.server.type} token not found. Generate one at: "
                f"{self.server.get_token_help_url()}"
            )
            token = ""
            while not token:
                token = self.prompter.password("Paste your token here")
            path = self.store.write_entry(GIT_TOKEN_FILE, token)
            logger.info(f"token saved -> {path}")
        else:
            logger.info(f"token loaded from {self.store.root / GIT_TOKEN_FILE}")
        self.server.set_token(token)

    @step("resolve_identity")
    def check_user_and_orgs(self) -> None:
        """
        Raises:
            IdentityResolutionFailed: if the token resolves to no user
        """
        user = self.server.get_user()
        if not user:
            raise IdentityResolutionFailed(self.server.type)
        self.context.user = user
        self.context.orgs = self.server.get_orgs()
        logger.info(
            f"{self.server.type} user resolved: {user.login} "
            f"({len(self.context.orgs)} organizations)"
        )

    @step("resolve_owner")
    def check_git_owner(self) -> None:
        owner = self.store.read_entry(GIT_OWN_FILE)
        login = self.store.read_entry(GIT_LOGIN_FILE)
        if not owner or not login or self.options.refresh_owner:
            logger.info(f"{self.server.type} owner not set, choose one")
            choices = GIT_OWNER_TYPE if self.context.orgs else GIT_OWNER_TYPE_ONLY
            owner = self.prompter.choose("Select the remote repository owner type", choices)
            if owner == REPO_OWNER_USER:
                login = self.context.user.login
            else:
                login = self.prompter.choose(
                    "Select the organization",
                    [(org.login, org.login) for org in self.context.orgs],
                )
            own_path = self.store.write_entry(GIT_OWN_FILE, owner)
            login_path = self.store.write_entry(GIT_LOGIN_FILE, login)
            logger.info(f"git owner saved: {owner} -> {own_path}")
            logger.info(f"git login saved: {login} -> {login_path}")
        else:
            logger.info(f"git owner loaded: {owner}")
            logger.info(f"git login loaded: {login}")
        self.context.owner = owner
        self.context.login = login

    @step("resolve_repo")
    def check_repo(self) -> None:
        """
        Raises:
            RemoteRepoCreationFailed: if the repository is absent and creation fails
        """
        login, name = self.context.login, self.context.name
        repo = self.server.get_repo(login, name)
        if not repo:
            logger.info(f"Creating remote repository {login}/{name}...")
            try:
                if self.context.owner == REPO_OWNER_USER:
                    repo = self.server.create_repo(name)
                else:
                    repo = self.server.create_org_repo(name, login)
            except HostAPIError as e:
                logger.error(f"Repository creation rejected: {e}")
                raise RemoteRepoCreationFailed(login, name) from e
            if not repo:
                raise RemoteRepoCreationFailed(login, name)
            logger.info("Remote repository created")
        logger.info(f"Remote repository resolved: {repo.full_name}")
        self.context.repo = repo

    @step("check_ignore")
    def check_git_ignore(self) -> bool:
        """Write the default .gitignore if missing. Returns True if written."""
        path = self.context.dir / GIT_IGNORE_FILE
        if path.exists():
            return False
        path.write_text(DEFAULT_GITIGNORE)
        logger.info(f"Wrote default {GIT_IGNORE_FILE}")
        return True

    @step("init_local")
    def init(self) -> None:
        self.context.remote = self.server.get_remote(self.context.login, self.context.name)
        if self.repo.is_initialized():
            logger.info("git already initialized")
            return

        logger.info("Initializing git repository")
        self.repo.init()
        if REMOTE_NAME not in self.repo.get_remotes():
            logger.info(f"Adding git remote {REMOTE_NAME} -> {self.context.remote}")
            self.repo.add_remote(REMOTE_NAME, self.context.remote)
        self.init_commit()

    def init_commit(self) -> None:
        self.guard.check_conflicted()
        self.guard.check_not_committed()
        if self.check_remote_master():
            logger.info(f"Remote {MASTER_BRANCH} exists, merging unrelated histories")
            self.sync.pull(MASTER_BRANCH, ["--allow-unrelated-histories"])
        self.sync.push(MASTER_BRANCH)

    def check_remote_master(self) -> bool:
        return f"refs/heads/{MASTER_BRANCH}" in self.sync.list_refs().split()

    # commit

    def commit(self) -> str:
        """Commit, merge and push the versioned branch. Returns the branch name."""
        self.get_correct_version()
        self.sync_branch()
        return self.context.branch

    @step("resolve_branch")
    def get_correct_version(self) -> str:
        with self.sync.ssh_checked():
            return self.branches.resolve_version(self.options.channel)

    @step("sync_branch")
    def sync_branch(self) -> None:
        self.branches.check_stash()
        self.guard.check_conflicted()
        self.guard.check_not_committed()
        self.branches.checkout_branch()
        self.pull_remote_master_and_branch()
        self.sync.push(self.context.branch)

    def pull_remote_master_and_branch(self) -> None:
        branch = self.context.branch
        logger.info(f"Merging [{MASTER_BRANCH}] -> [{branch}]")
        self.sync.pull(MASTER_BRANCH)
        logger.info(f"Merged remote [{MASTER_BRANCH}]")
        self.guard.check_conflicted()

        logger.info("Checking remote branches")
        with self.sync.ssh_checked():
            remote_exists = self.branches.remote_branch_exists()
        if remote_exists:
            logger.info(f"Merging [{branch}] -> [{branch}]")
            self.sync.pull(branch)
            logger.info(f"Merged remote [{branch}]")
            self.guard.check_conflicted()
        else:
            logger.info(f"Remote branch [{branch}] does not exist yet")

    # publish

    @step("publish")
    def publish(self) -> str:
        """Choose the publish target and run the build. Returns the target."""
        logger.info("Starting publish")
        publish_type = self.store.read_entry(GIT_PUBLISH_FILE)
        if not publish_type:
            publish_type = self.prompter.choose("Select where to publish the build", GIT_PUBLISH_TYPE)
            path = self.store.write_entry(GIT_PUBLISH_FILE, publish_type)
            logger.info(f"publish type saved: {publish_type} -> {path}")
        else:
            logger.info(f"publish type loaded: {publish_type}")

        builder = self.builder_factory(self.context, publish_type, self.options.prod)
        try:
            builder.prepare()
            builder.init()
            builder.build()
        finally:
            builder.close()
        return publish_type

    def close(self) -> None:
        if self.server is not None:
            self.server.close()
