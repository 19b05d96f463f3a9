"""Exception types raised by the repoflow workflow.

Every fatal workflow condition is a RepoflowError subclass so the CLI can
report it and exit with the matching code. Non-fatal outcomes (a missing
remote branch, a clean tree, an empty stash) never raise.
"""

from repoflow.lib.constants import EXIT_CONFIG, EXIT_ERROR


class RepoflowError(Exception):
    """Base exception for all repoflow errors."""

    exit_code = EXIT_ERROR


class HomeDirectoryUnavailable(RepoflowError):
    """The cache root could not be created or confirmed."""

    exit_code = EXIT_CONFIG

    def __init__(self, path):
        self.path = path
        super().__init__(f"Cache home directory unavailable: {path}")


class UnknownGitServer(RepoflowError):
    """A cached or requested hosting platform is not supported."""

    exit_code = EXIT_CONFIG

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown git server '{kind}' (use --refresh-server to choose again)")


class IdentityResolutionFailed(RepoflowError):
    """The hosting platform returned no user for the configured token."""

    def __init__(self, server_type: str):
        self.server_type = server_type
        super().__init__(
            f"Failed to resolve {server_type} user or organizations "
            "(check the token, or use --refresh-token)"
        )


class RemoteRepoCreationFailed(RepoflowError):
    """The remote repository was absent and could not be created."""

    def __init__(self, login: str, name: str):
        self.login = login
        self.name = name
        super().__init__(f"Failed to create remote repository {login}/{name}")


class UnresolvedConflict(RepoflowError):
    """The working tree contains conflicted paths."""

    def __init__(self, paths: list[str]):
        self.paths = paths
        listing = ", ".join(paths)
        super().__init__(
            f"Unresolved conflicts in: {listing}. Resolve and commit them manually, then retry."
        )


class SSHKeyMissing(RepoflowError):
    """The remote rejected our public key."""

    def __init__(self, keys_url: str, help_url: str):
        self.keys_url = keys_url
        self.help_url = help_url
        super().__init__(
            f"Permission denied (publickey). Add your local SSH public key at {keys_url} "
            f"(see {help_url})"
        )


class UnclassifiedSyncFailure(RepoflowError):
    """A pull failed for a reason we do not recognise."""

    def __init__(self, branch: str, detail: str):
        self.branch = branch
        self.detail = detail
        super().__init__(f"Failed to sync '{branch}' from remote: {detail}")


class InvalidVersion(RepoflowError):
    """A version string is not a valid semantic version."""

    exit_code = EXIT_CONFIG

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Invalid semantic version '{version}' (expected MAJOR.MINOR.PATCH)")


class GitCommandError(RepoflowError):
    """A git command exited non-zero."""

    def __init__(self, args: list[str], stderr: str):
        self.command = args
        self.stderr = stderr
        super().__init__(f"git {' '.join(args)} failed: {stderr.strip()}")


class HostAPIError(RepoflowError):
    """The hosting platform API returned an unexpected response."""

    def __init__(self, server_type: str, status_code: int, message: str):
        self.server_type = server_type
        self.status_code = status_code
        super().__init__(f"{server_type} API error ({status_code}): {message}")


class BuildError(RepoflowError):
    """The build service rejected or failed a publish."""


class WorkflowOrderError(RepoflowError):
    """A workflow step was invoked before its prerequisites."""

    def __init__(self, step: str, state: str):
        self.step = step
        self.state = state
        super().__init__(f"Workflow step '{step}' cannot run from state '{state}'")
