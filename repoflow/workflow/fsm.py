"""Workflow step order as a state machine, using the transitions library.

Each step of prepare/commit/publish is a trigger whose source is the state
left by the step before it, so a step run before its prerequisites fails
instead of working on half-resolved context. resolve_home is allowed from any
state so prepare can be re-run.

Usage:
    fsm = WorkflowFSM()
    fsm.advance("resolve_home")
    fsm.advance("resolve_server")
"""

import logging
from typing import Callable

from transitions import Machine, MachineError

from repoflow.lib.errors import WorkflowOrderError

logger = logging.getLogger(__name__)


STATES = [
    "created",
    "home_resolved",
    "server_resolved",
    "token_resolved",
    "identity_resolved",
    "owner_resolved",
    "repo_resolved",
    "ignore_checked",
    "prepared",
    "branch_resolved",
    "committed",
    "published",
]

TRANSITIONS = [
    # prepare
    {"trigger": "resolve_home", "source": "*", "dest": "home_resolved"},
    {"trigger": "resolve_server", "source": "home_resolved", "dest": "server_resolved"},
    {"trigger": "resolve_token", "source": "server_resolved", "dest": "token_resolved"},
    {"trigger": "resolve_identity", "source": "token_resolved", "dest": "identity_resolved"},
    {"trigger": "resolve_owner", "source": "identity_resolved", "dest": "owner_resolved"},
    {"trigger": "resolve_repo", "source": "owner_resolved", "dest": "repo_resolved"},
    {"trigger": "check_ignore", "source": "repo_resolved", "dest": "ignore_checked"},
    {"trigger": "init_local", "source": "ignore_checked", "dest": "prepared"},

    # commit
    {"trigger": "resolve_branch", "source": "prepared", "dest": "branch_resolved"},
    {"trigger": "resolve_branch", "source": "committed", "dest": "branch_resolved"},
    {"trigger": "resolve_branch", "source": "published", "dest": "branch_resolved"},
    {"trigger": "sync_branch", "source": "branch_resolved", "dest": "committed"},

    # publish
    {"trigger": "publish", "source": "prepared", "dest": "published"},
    {"trigger": "publish", "source": "committed", "dest": "published"},
]


class WorkflowFSM:
    """Tracks where an engine is within prepare/commit/publish."""

    def __init__(self, on_transition: Callable[[str, str, str], None] | None = None):
        self.on_transition = on_transition
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="created",
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        logger.debug(f"[FSM] {from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)

    def advance(self, trigger: str) -> None:
        """Fire a trigger.

        Raises:
            WorkflowOrderError: if the step is not allowed from the current state
        """
        if not self.can(trigger):
            raise WorkflowOrderError(trigger, self.state)
        try:
            getattr(self, trigger)()
        except MachineError as e:
            raise WorkflowOrderError(trigger, self.state) from e
