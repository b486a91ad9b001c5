"""Local staging of dropped files before they are sent for approval.

Decoding spreadsheets and geospatial files is delegated to an injected
parser; the queue only records its result.
"""

import logging
import uuid
from typing import Callable, Dict, List, NamedTuple, Optional

from projectreview.core.errors import NotAuthenticatedError, SubmissionError, UploadRejectedError
from projectreview.core.filetypes import ACCEPTED_EXTENSIONS, file_extension, is_accepted
from projectreview.core.optimistic import OptimisticLedger
from projectreview.schemas.files import FileRecord, ParsedUpload, UploadItem, UploadStatus

from .registry import FileRegistry

logger = logging.getLogger(__name__)

SENT_MESSAGE = "File sent for review successfully"
SEND_FAILED_MESSAGE = "Failed to send file for review"

# Parser type tags keyed by extension
UPLOAD_TYPES: Dict[str, str] = {
    "xlsx": "excel",
    "xls": "excel",
    "csv": "csv",
    "kmz": "kmz",
    "kml": "kml",
}


class DroppedFile(NamedTuple):
    """A file handed to the queue by the drop zone."""
    name: str
    content: bytes
    mime_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)


Parser = Callable[[str, bytes], ParsedUpload]


def default_parser(name: str, content: bytes) -> ParsedUpload:
    """Tag the upload by type and keep the raw bytes as opaque data."""
    return ParsedUpload(type=UPLOAD_TYPES.get(file_extension(name)), data=content)


class UploadQueue:
    """Dropped files, their parse results and their submission state."""

    def __init__(
        self,
        registry: FileRegistry,
        *,
        parser: Parser = default_parser,
        ledger: Optional[OptimisticLedger] = None,
        max_files: int = 10,
        max_size: int = 50 * 1024 * 1024,
    ):
        self.registry = registry
        self.parser = parser
        self.ledger = ledger or OptimisticLedger()
        self.max_files = max_files
        self.max_size = max_size
        self._items: Dict[str, UploadItem] = {}
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    @property
    def items(self) -> List[UploadItem]:
        return list(self._items.values())

    def get(self, local_id: str) -> Optional[UploadItem]:
        return self._items.get(local_id)

    def add(self, files: List[DroppedFile]) -> List[UploadItem]:
        """Stage and parse dropped files.

        Files over the size limit or with an unsupported extension are
        skipped and reported in ``error``; the rest are staged.

        Raises:
            UploadRejectedError: If the drop would exceed ``max_files``
        """
        self.error = None
        if len(self._items) + len(files) > self.max_files:
            self.error = f"Maximum {self.max_files} files allowed"
            raise UploadRejectedError(self.error)

        added = []
        reasons = []
        for dropped in files:
            reason = self._rejection_reason(dropped)
            if reason:
                reasons.append(f"{dropped.name}: {reason}")
                continue
            item = self._parse(dropped)
            self._items[item.local_id] = item
            added.append(item)

        if reasons:
            self.error = f"Upload failed: {'; '.join(reasons)}"
            logger.warning(self.error)
        return added

    def remove(self, local_id: str) -> Optional[UploadItem]:
        return self._items.pop(local_id, None)

    def send_for_approval(self, local_id: str) -> FileRecord:
        """Submit a parsed upload for review.

        The item shows ``under_review`` while the request is in flight and
        goes back to ``completed`` if it fails.

        Raises:
            ValueError: If the item is unknown
            UploadRejectedError: If the item has not been parsed successfully
            NotAuthenticatedError: If nobody is logged in
            SubmissionError: If the service rejected the record
        """
        item = self._items.get(local_id)
        if item is None:
            raise ValueError(f"Upload {local_id} not found")
        if item.status != UploadStatus.COMPLETED or item.parsed is None:
            raise UploadRejectedError(f"{item.name} is not ready to be sent for approval")

        token = self.ledger.apply_local_marker(
            local_id, UploadStatus.UNDER_REVIEW, previous=item.status
        )
        item.status = UploadStatus.UNDER_REVIEW
        try:
            record = self.registry.submit_for_review(item)
        except Exception as e:
            item.status = self.ledger.rollback(token)
            self.success = None
            if isinstance(e, (NotAuthenticatedError, SubmissionError)) and str(e):
                self.error = str(e)
            else:
                self.error = SEND_FAILED_MESSAGE
            raise

        self.ledger.confirm(token)
        item.file_id = record.id
        self.error = None
        self.success = SENT_MESSAGE
        return record

    def _rejection_reason(self, dropped: DroppedFile) -> Optional[str]:
        if not is_accepted(dropped.name):
            return f"File type must be one of {', '.join(ACCEPTED_EXTENSIONS)}"
        if dropped.size > self.max_size:
            return f"File is larger than {self.max_size} bytes"
        return None

    def _parse(self, dropped: DroppedFile) -> UploadItem:
        item = UploadItem(
            local_id=uuid.uuid4().hex,
            name=dropped.name,
            size=dropped.size,
            mime_type=dropped.mime_type,
        )
        try:
            item.parsed = self.parser(dropped.name, dropped.content)
        except Exception as e:
            logger.warning(f"Failed to parse {dropped.name}: {e}")
            item.status = UploadStatus.ERROR
            item.parsed = ParsedUpload(error=str(e))
            return item

        if item.parsed.error:
            item.status = UploadStatus.ERROR
            return item

        item.status = UploadStatus.COMPLETED
        item.progress = 100
        return item
