"""
repoflow commit - Commit pending work onto the versioned branch and push it.

Runs prepare first.
"""

from repoflow.lib.constants import EXIT_SUCCESS
from repoflow.workflow.engine import WorkflowEngine


def cmd_commit(args, engine: WorkflowEngine) -> int:
    engine.prepare()
    branch = engine.commit()
    print(f"Pushed {branch} to {engine.context.remote}")
    return EXIT_SUCCESS
