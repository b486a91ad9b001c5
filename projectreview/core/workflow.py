"""Multi-department approval workflow.

Answers workflow questions for an acting user over a file's approval
status map: may they act, what do they still have to review, and how
should each department slot be displayed.
"""

import logging
from typing import Iterable, List, Mapping, Optional

from jinja2 import Template

from projectreview.core.approval.states import (
    ApprovalAction,
    ApprovalStatus,
    TERMINAL_STATUSES,
    can_transition,
)
from projectreview.core.approval.status_map import StatusMap, apply_action, status_for
from projectreview.core.departments import REVIEW_DEPARTMENTS, UPLOADER_DEPARTMENT, is_reviewer
from projectreview.core.errors import PermissionDeniedError, TransitionError
from projectreview.core.session import Session
from projectreview.schemas.approvals import ApprovalSummary, Notification, StatusBadge
from projectreview.schemas.files import FileRecord
from projectreview.schemas.users import User

logger = logging.getLogger(__name__)


STATUS_DISPLAY = {
    ApprovalStatus.PENDING: ("⏳", "Pending Review"),
    ApprovalStatus.APPROVED: ("✓", "Approved"),
    ApprovalStatus.REJECTED: ("✗", "Rejected"),
}

NOTIFICATION_BANNER = Template(
    "You have {{ notifications | length }} new file"
    "{{ 's' if notifications | length > 1 }} to review\n"
    "{% for n in notifications %}"
    "• {{ n.file_name }} (Uploaded by {{ n.uploaded_by }} from {{ n.department }})\n"
    "{% endfor %}"
)


def can_act(user: Optional[User], status_map: Mapping[str, ApprovalStatus]) -> bool:
    """Check if a user may approve or reject their department's slot."""
    if user is None or not user.department:
        return False
    if user.department == UPLOADER_DEPARTMENT.value:
        return False
    return status_for(status_map, user.department) == ApprovalStatus.PENDING


def pending_notifications_for(
    user: Optional[User], files: Iterable[FileRecord]
) -> List[Notification]:
    """Build one notification per file awaiting the user's department.

    Input order is preserved; callers pass files already sorted by
    upload date, newest first.
    """
    if user is None or not user.department or user.department == UPLOADER_DEPARTMENT.value:
        return []

    notifications = []
    for file in files:
        if status_for(file.approval_status, user.department) != ApprovalStatus.PENDING:
            continue
        notifications.append(
            Notification(
                id=f"notify_{file.id}",
                file_id=file.id,
                file_name=file.filename,
                uploaded_by=file.uploaded_by or "Unknown",
                timestamp=file.upload_date,
            )
        )
    return notifications


def summarize(files: Iterable[FileRecord]) -> ApprovalSummary:
    """Count files by overall review outcome.

    A file is rejected when any department rejected it, approved when
    every reviewing department approved it, and pending otherwise.
    """
    summary = ApprovalSummary()
    for file in files:
        statuses = [status_for(file.approval_status, d) for d in REVIEW_DEPARTMENTS]
        summary.total += 1
        if ApprovalStatus.REJECTED in statuses:
            summary.rejected += 1
        elif all(s == ApprovalStatus.APPROVED for s in statuses):
            summary.approved += 1
        else:
            summary.pending += 1
    return summary


def render_notification_banner(notifications: List[Notification]) -> str:
    """Render the reviewer banner text; empty when nothing is pending."""
    if not notifications:
        return ""
    return NOTIFICATION_BANNER.render(notifications=notifications).rstrip("\n")


class ApprovalWorkflow:
    """Workflow queries bound to the session's logged-in user."""

    def __init__(self, session: Session):
        self.session = session

    @property
    def user(self) -> Optional[User]:
        return self.session.current_user

    @property
    def is_reviewer(self) -> bool:
        return self.user is not None and is_reviewer(self.user.department)

    def status_for(self, status_map: Mapping[str, ApprovalStatus]) -> Optional[ApprovalStatus]:
        """Status of the current user's department slot; None for non-reviewers."""
        if not self.is_reviewer:
            return None
        return status_for(status_map, self.user.department)

    def can_act(self, status_map: Mapping[str, ApprovalStatus]) -> bool:
        return can_act(self.user, status_map)

    def require_can_act(self, status_map: Mapping[str, ApprovalStatus]) -> str:
        """Check the current user may act, returning their department.

        Raises:
            NotAuthenticatedError: If nobody is logged in
            PermissionDeniedError: If the user's department does not review
            TransitionError: If the department slot is already decided
        """
        user = self.session.require_user()
        if not is_reviewer(user.department):
            logger.warning(f"User {user.username} in {user.department} attempted a review action")
            raise PermissionDeniedError(user.department)

        current = status_for(status_map, user.department)
        if current in TERMINAL_STATUSES:
            raise TransitionError(
                f"{user.department} has already {current.value} this file",
                user.department,
                current.value,
            )
        return user.department

    def apply(self, status_map: Mapping[str, ApprovalStatus], action: ApprovalAction) -> StatusMap:
        """Gate and apply an action for the current user's department."""
        department = self.require_can_act(status_map)
        current = status_for(status_map, department)
        if not can_transition(current, ApprovalAction(action)):
            raise TransitionError(
                f"Cannot {ApprovalAction(action).value} from {current.value}",
                department,
                current.value,
            )
        return apply_action(status_map, department, action)

    def pending_notifications(self, files: Iterable[FileRecord]) -> List[Notification]:
        return pending_notifications_for(self.user, files)

    def status_badges(self, status_map: Mapping[str, ApprovalStatus]) -> List[StatusBadge]:
        """One badge per reviewing department, in canonical order."""
        current_department = self.user.department if self.user else None
        badges = []
        for department in REVIEW_DEPARTMENTS:
            status = status_for(status_map, department)
            icon, label = STATUS_DISPLAY[status]
            badges.append(
                StatusBadge(
                    department=department,
                    status=status,
                    label=label,
                    icon=icon,
                    is_current=department == current_department,
                )
            )
        return badges

    def action_label(self, status_map: Mapping[str, ApprovalStatus]) -> Optional[str]:
        """Label shown instead of the approve/reject buttons.

        None when the buttons are shown or the user does not review.
        """
        if not self.is_reviewer or self.can_act(status_map):
            return None
        _, label = STATUS_DISPLAY[self.status_for(status_map)]
        return label
