"""
repoflow publish - Push the versioned branch and hand it to the build service.

Runs prepare and commit first, so the build always sees the pushed branch.
"""

from repoflow.lib.constants import EXIT_SUCCESS
from repoflow.workflow.engine import WorkflowEngine


def cmd_publish(args, engine: WorkflowEngine) -> int:
    engine.prepare()
    branch = engine.commit()
    publish_type = engine.publish()
    mode = "production" if args.prod else "test"
    print(f"Published {branch} to {publish_type} ({mode})")
    return EXIT_SUCCESS
