"""Approval status module for project review.

Implements the per-department approval slot state machine and the
status map it is stored in.
"""

from .states import ApprovalAction, ApprovalStatus, TERMINAL_STATUSES, TRANSITION_RULES
from .status_map import StatusMap, apply_action, normalize, parse_status_map, status_for

__all__ = [
    "ApprovalAction",
    "ApprovalStatus",
    "TERMINAL_STATUSES",
    "TRANSITION_RULES",
    "StatusMap",
    "apply_action",
    "normalize",
    "parse_status_map",
    "status_for",
]
