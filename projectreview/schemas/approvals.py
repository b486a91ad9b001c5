"""Approval workflow schemas."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from projectreview.core.approval.states import ApprovalAction, ApprovalStatus, action_to_status
from projectreview.core.approval.status_map import StatusMap, dump_status_map
from projectreview.core.departments import UPLOADER_DEPARTMENT


class Notification(BaseModel):
    """Derived reminder that a department has a file awaiting its decision."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    file_id: str
    file_name: str
    uploaded_by: str = "Unknown"
    timestamp: Optional[datetime] = None
    department: str = UPLOADER_DEPARTMENT.value
    is_new: bool = True


class StatusBadge(BaseModel):
    """Display data for one department slot of a file."""
    department: str
    status: ApprovalStatus
    label: str
    icon: str
    is_current: bool = False


class ApprovalSummary(BaseModel):
    """Aggregate counters across a list of files."""
    total: int = 0
    approved: int = 0
    rejected: int = 0
    pending: int = 0


class ApprovalSubmission(BaseModel):
    """Request body for recording a department's decision.

    ``approval_status`` is always the complete updated map so the remote
    service never has to merge.
    """
    file_id: str
    department: str
    action: ApprovalAction
    user_id: str
    approval_status: StatusMap

    def to_payload(self) -> Dict[str, Any]:
        return {
            "section": self.department,
            "action": action_to_status(self.action).value,
            "user_id": self.user_id,
            "approval_status": dump_status_map(self.approval_status),
        }
