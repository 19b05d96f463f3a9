"""repoflow: prepare, commit and publish a local project to GitHub or Gitee."""

__version__ = "0.1.0"
