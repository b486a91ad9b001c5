"""Pydantic schemas for files, users and approvals."""

from .approvals import ApprovalSubmission, ApprovalSummary, Notification, StatusBadge
from .files import FileRecord, ParsedUpload, UploadItem, UploadStatus
from .users import User

__all__ = [
    "ApprovalSubmission",
    "ApprovalSummary",
    "FileRecord",
    "Notification",
    "ParsedUpload",
    "StatusBadge",
    "UploadItem",
    "UploadStatus",
    "User",
]
