"""
repoflow prepare - Resolve platform, token, owner and remote repository.
"""

from repoflow.lib.constants import EXIT_SUCCESS
from repoflow.workflow.engine import WorkflowEngine


def cmd_prepare(args, engine: WorkflowEngine) -> int:
    """Run the prepare steps and report what was resolved."""
    context = engine.prepare()
    print(f"Prepared {context.name} {context.version}")
    print(f"  Platform: {context.server}")
    print(f"  Owner:    {context.login} ({context.owner})")
    print(f"  Remote:   {context.remote}")
    return EXIT_SUCCESS
