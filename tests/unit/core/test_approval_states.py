"""Tests for per-department approval states and transitions."""

import pytest

from projectreview.core.approval.states import (
    ApprovalAction,
    ApprovalStatus,
    TERMINAL_STATUSES,
    action_to_status,
    can_transition,
    get_target_status,
    get_transition_rule,
)


class TestApprovalStatuses:
    """Test status definitions."""

    def test_all_statuses_defined(self):
        """Test that exactly the three statuses exist."""
        assert {s.value for s in ApprovalStatus} == {"pending", "approved", "rejected"}

    def test_terminal_statuses(self):
        """Test both decisions are terminal."""
        assert ApprovalStatus.APPROVED in TERMINAL_STATUSES
        assert ApprovalStatus.REJECTED in TERMINAL_STATUSES
        assert ApprovalStatus.PENDING not in TERMINAL_STATUSES

    def test_status_compares_to_plain_string(self):
        """Test statuses compare equal to their wire values."""
        assert ApprovalStatus.APPROVED == "approved"


class TestApprovalTransitions:
    """Test valid slot transitions."""

    def test_pending_transitions(self):
        """Test both actions are valid from pending."""
        assert can_transition(ApprovalStatus.PENDING, ApprovalAction.APPROVE)
        assert can_transition(ApprovalStatus.PENDING, ApprovalAction.REJECT)

    @pytest.mark.parametrize("status", [ApprovalStatus.APPROVED, ApprovalStatus.REJECTED])
    @pytest.mark.parametrize("action", list(ApprovalAction))
    def test_no_re_review(self, status, action):
        """Test decided slots have no outgoing transitions."""
        assert not can_transition(status, action)
        assert get_transition_rule(status, action) is None

    def test_get_target_status(self):
        """Test getting target status from an action."""
        assert get_target_status(ApprovalStatus.PENDING, ApprovalAction.APPROVE) == ApprovalStatus.APPROVED
        assert get_target_status(ApprovalStatus.PENDING, ApprovalAction.REJECT) == ApprovalStatus.REJECTED
        assert get_target_status(ApprovalStatus.APPROVED, ApprovalAction.REJECT) is None

    def test_action_to_status_accepts_strings(self):
        """Test action values map to recorded statuses."""
        assert action_to_status("approve") == ApprovalStatus.APPROVED
        assert action_to_status(ApprovalAction.REJECT) == ApprovalStatus.REJECTED
