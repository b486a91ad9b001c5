"""Per-department approval statuses and transitions.

Each reviewing department owns one slot in a file's approval status map.

State Machine Diagram (one slot):

         ┌──────────┐
         │ PENDING  │ ← Initial state (file sent for approval)
         └────┬─────┘
              │
        ┌─────┴─────┐
        │           │
   ┌────▼─────┐ ┌───▼──────┐
   │ APPROVED │ │ REJECTED │
   └──────────┘ └──────────┘

Both decisions are terminal. There is no re-review transition.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional, Set


class ApprovalStatus(str, Enum):
    """Decision recorded for one department on one file."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApprovalAction(str, Enum):
    """Actions a reviewer can take on their department slot."""

    APPROVE = "approve"    # PENDING → APPROVED
    REJECT = "reject"      # PENDING → REJECTED


class TransitionRule(NamedTuple):
    """Defines a valid slot transition."""
    from_status: ApprovalStatus
    to_status: ApprovalStatus
    action: ApprovalAction


TRANSITION_RULES: list[TransitionRule] = [
    TransitionRule(ApprovalStatus.PENDING, ApprovalStatus.APPROVED, ApprovalAction.APPROVE),
    TransitionRule(ApprovalStatus.PENDING, ApprovalStatus.REJECTED, ApprovalAction.REJECT),
]

# Build lookup table
TRANSITION_TARGETS: Dict[tuple[ApprovalStatus, ApprovalAction], TransitionRule] = {}

for rule in TRANSITION_RULES:
    TRANSITION_TARGETS[(rule.from_status, rule.action)] = rule


TERMINAL_STATUSES: Set[ApprovalStatus] = {
    ApprovalStatus.APPROVED,
    ApprovalStatus.REJECTED,
}

# Status each action records, independent of the slot's prior value
ACTION_RESULTS: Dict[ApprovalAction, ApprovalStatus] = {
    ApprovalAction.APPROVE: ApprovalStatus.APPROVED,
    ApprovalAction.REJECT: ApprovalStatus.REJECTED,
}


def can_transition(from_status: ApprovalStatus, action: ApprovalAction) -> bool:
    """Check if an action is valid from the given status."""
    return (from_status, action) in TRANSITION_TARGETS


def get_transition_rule(
    from_status: ApprovalStatus, action: ApprovalAction
) -> Optional[TransitionRule]:
    """Get the transition rule for a status/action combination."""
    return TRANSITION_TARGETS.get((from_status, action))


def get_target_status(
    from_status: ApprovalStatus, action: ApprovalAction
) -> Optional[ApprovalStatus]:
    """Get the target status for a transition."""
    rule = get_transition_rule(from_status, action)
    return rule.to_status if rule else None


def action_to_status(action: ApprovalAction) -> ApprovalStatus:
    """Get the status an action writes into a slot."""
    return ACTION_RESULTS[ApprovalAction(action)]
