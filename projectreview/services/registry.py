"""Client-side view of the remote file list.

The registry never patches file records locally: after every
successful approval it reloads the authoritative list from the files
service.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from projectreview.core.approval.states import ApprovalAction
from projectreview.core.approval.status_map import StatusMap, initial_status_map
from projectreview.core.errors import FetchError
from projectreview.core.filetypes import file_extension
from projectreview.core.optimistic import OptimisticLedger
from projectreview.core.session import Session
from projectreview.core.workflow import ApprovalWorkflow
from projectreview.schemas.approvals import ApprovalSubmission, Notification
from projectreview.schemas.files import FileRecord, UploadItem

from .client import FilesServiceClient

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch files. Please try again later."

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def new_file_id() -> str:
    """Generate a file identifier like ``FILE_1718000000000_3f2a9c1b0``."""
    return f"FILE_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def sort_by_upload_date(files: List[FileRecord]) -> List[FileRecord]:
    """Newest first; ties keep server order, undated files go last."""
    return sorted(
        files,
        key=lambda f: (f.upload_date is not None, f.upload_date or _EPOCH),
        reverse=True,
    )


class FileRegistry:
    """Holds the fetched file list and drives approval actions."""

    def __init__(
        self,
        client: FilesServiceClient,
        session: Session,
        *,
        workflow: Optional[ApprovalWorkflow] = None,
        ledger: Optional[OptimisticLedger] = None,
    ):
        self.client = client
        self.session = session
        self.workflow = workflow or ApprovalWorkflow(session)
        self.ledger = ledger or OptimisticLedger()
        self._files: List[FileRecord] = []
        self._notifications: List[Notification] = []
        self.error: Optional[str] = None

    @property
    def files(self) -> List[FileRecord]:
        return list(self._files)

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    def clear_error(self) -> None:
        self.error = None

    def get(self, file_id: str) -> Optional[FileRecord]:
        for file in self._files:
            if file.id == file_id:
                return file
        return None

    def is_busy(self, file_id: str) -> bool:
        """Check if an approval for the file is in flight."""
        return self.ledger.is_pending(file_id)

    def has_notification(self, file_id: str) -> bool:
        return any(n.file_id == file_id for n in self._notifications)

    def load(self) -> List[FileRecord]:
        """Fetch all files, newest first.

        On failure the previously loaded list is kept.

        Raises:
            FetchError: If the listing could not be fetched
        """
        self.error = None
        try:
            raw_files = self.client.list_files()
        except FetchError:
            self.error = FETCH_FAILED_MESSAGE
            raise

        records = []
        for raw in raw_files:
            try:
                records.append(FileRecord.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed file record: {e.error_count()} errors")

        self._files = sort_by_upload_date(records)
        self._notifications = self.workflow.pending_notifications(self._files)
        return self.files

    def refresh(self) -> bool:
        """Reload, leaving any failure in ``error``. Returns True on success."""
        try:
            self.load()
        except FetchError as e:
            logger.warning(f"Refresh failed: {e}")
            return False
        return True

    def refresh_after_action(self) -> bool:
        """Reload the authoritative list after a successful mutation."""
        return self.refresh()

    def act(self, file_id: str, action: ApprovalAction) -> StatusMap:
        """Approve or reject a file for the current user's department.

        The complete updated status map is sent to the service. The local
        record is not modified; the list is reloaded on success.

        Returns:
            The status map that was submitted

        Raises:
            ValueError: If the file is unknown or an action is already in flight
            NotAuthenticatedError: If nobody is logged in
            PermissionDeniedError: If the user's department does not review
            TransitionError: If the department already decided
            SubmissionError: If the service rejected the request
        """
        action = ApprovalAction(action)
        user = self.session.require_user()
        file = self.get(file_id)
        if file is None:
            raise ValueError(f"File {file_id} not found")

        updated = self.workflow.apply(file.approval_status, action)
        submission = ApprovalSubmission(
            file_id=file_id,
            department=user.department,
            action=action,
            user_id=user.id,
            approval_status=updated,
        )

        token = self.ledger.apply_local_marker(file_id, action)
        try:
            self.client.submit_approval(submission)
        except Exception:
            # The marker must never outlive a failed request
            self.ledger.rollback(token)
            self.error = f"Failed to {action.value} file. Please try again later."
            raise

        self.ledger.confirm(token)
        logger.info(f"{user.department} submitted {action.value} for {file_id}")
        self.refresh_after_action()
        return updated

    def approve(self, file_id: str) -> StatusMap:
        return self.act(file_id, ApprovalAction.APPROVE)

    def reject(self, file_id: str) -> StatusMap:
        return self.act(file_id, ApprovalAction.REJECT)

    def submit_for_review(self, upload: UploadItem) -> FileRecord:
        """Create a tracked file from a parsed upload.

        Raises:
            NotAuthenticatedError: If nobody is logged in
            SubmissionError: If the service rejected the record
        """
        user = self.session.require_user()
        record = FileRecord(
            id=new_file_id(),
            filename=upload.name,
            original_name=upload.name,
            mime_type=upload.mime_type,
            size=upload.size,
            version=1,
            uploaded_by=user.id,
            upload_date=datetime.now(timezone.utc),
            status="under_review",
            type=file_extension(upload.name),
            description=f"Uploaded file: {upload.name}",
            approval_status=initial_status_map(),
        )
        self.client.create_file(record)
        return record

