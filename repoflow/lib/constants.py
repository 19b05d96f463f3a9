"""Shared constants for repoflow."""

import re

DEFAULT_CLI_HOME = ".repoflow-cli"
CLI_HOME_ENV = "CLI_HOME"

# Cache layout: <cli home>/.git/<entry>
GIT_ROOT_DIR = ".git"
GIT_SERVER_FILE = ".git_server"
GIT_TOKEN_FILE = ".git_token"
GIT_OWN_FILE = ".git_own"
GIT_LOGIN_FILE = ".git_login"
GIT_PUBLISH_FILE = ".git_publish"
GIT_IGNORE_FILE = ".gitignore"

REMOTE_NAME = "origin"
MASTER_BRANCH = "master"

# Owner kinds
REPO_OWNER_USER = "user"
REPO_OWNER_ORG = "org"

# Release channels
VERSION_RELEASE = "release"
VERSION_DEVELOP = "dev"
VALID_CHANNELS = {VERSION_RELEASE, VERSION_DEVELOP}

# Hosting platforms
GITHUB = "github"
GITEE = "gitee"

GIT_SERVER_TYPE = [
    (GITHUB, "Github"),
    (GITEE, "Gitee"),
]

GIT_OWNER_TYPE = [
    (REPO_OWNER_USER, "Personal"),
    (REPO_OWNER_ORG, "Organization"),
]

GIT_OWNER_TYPE_ONLY = [
    (REPO_OWNER_USER, "Personal"),
]

PUBLISH_OSS = "oss"

GIT_PUBLISH_TYPE = [
    (PUBLISH_OSS, "OSS"),
]

# semver 2.0.0
SEMVER_PATTERN = re.compile(
    r'^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)'
    r'(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)'
    r'(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?'
    r'(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$'
)

# Remote ref discovery, one per channel
RELEASE_TAG_PREFIX = "refs/tags/release/"
DEV_BRANCH_PREFIX = "refs/heads/dev/"

DEFAULT_GITIGNORE = """.DS_Store
node_modules
/dist
/build
*.egg-info
__pycache__/
*.py[cod]


# local env files
.env
.env.local
.env.*.local

# Log files
*.log
npm-debug.log*
yarn-debug.log*
yarn-error.log*
pnpm-debug.log*

# Editor directories and files
.idea
.vscode
*.suo
*.ntvs*
*.njsproj
*.sln
*.sw?
"""

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
