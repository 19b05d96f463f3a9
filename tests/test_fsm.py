"""Tests for repoflow.workflow.fsm module."""

import pytest

from repoflow.lib.errors import WorkflowOrderError
from repoflow.workflow.fsm import WorkflowFSM, STATES, TRANSITIONS

PREPARE_TRIGGERS = [
    "resolve_home",
    "resolve_server",
    "resolve_token",
    "resolve_identity",
    "resolve_owner",
    "resolve_repo",
    "check_ignore",
    "init_local",
]


def prepared_fsm() -> WorkflowFSM:
    fsm = WorkflowFSM()
    for trigger in PREPARE_TRIGGERS:
        fsm.advance(trigger)
    return fsm


class TestFSMStates:
    """Tests for FSM state definitions."""

    def test_starts_created(self):
        assert WorkflowFSM().state == "created"

    def test_every_transition_targets_known_state(self):
        for t in TRANSITIONS:
            assert t["dest"] in STATES


class TestFSMOrdering:
    """Steps must run in the fixed order."""

    def test_prepare_sequence_reaches_prepared(self):
        assert prepared_fsm().state == "prepared"

    def test_owner_before_identity_rejected(self):
        fsm = WorkflowFSM()
        fsm.advance("resolve_home")
        fsm.advance("resolve_server")
        fsm.advance("resolve_token")
        with pytest.raises(WorkflowOrderError) as exc_info:
            fsm.advance("resolve_owner")
        assert exc_info.value.state == "token_resolved"
        assert fsm.state == "token_resolved"

    def test_commit_before_prepare_rejected(self):
        with pytest.raises(WorkflowOrderError):
            WorkflowFSM().advance("resolve_branch")

    def test_prepare_can_rerun_from_any_state(self):
        fsm = prepared_fsm()
        fsm.advance("resolve_branch")
        fsm.advance("sync_branch")
        fsm.advance("resolve_home")
        assert fsm.state == "home_resolved"

    def test_commit_then_publish(self):
        fsm = prepared_fsm()
        fsm.advance("resolve_branch")
        fsm.advance("sync_branch")
        fsm.advance("publish")
        assert fsm.state == "published"

    def test_publish_mid_commit_rejected(self):
        fsm = prepared_fsm()
        fsm.advance("resolve_branch")
        assert not fsm.can("publish")


class TestFSMCallback:
    """on_transition receives every transition."""

    def test_callback_invoked(self):
        seen = []
        fsm = WorkflowFSM(on_transition=lambda src, dst, trig: seen.append((src, dst, trig)))
        fsm.advance("resolve_home")
        assert seen == [("created", "home_resolved", "resolve_home")]
