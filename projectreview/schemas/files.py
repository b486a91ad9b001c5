"""File record and upload schemas."""

import json
import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from projectreview.core.approval.status_map import StatusMap, dump_status_map, normalize

logger = logging.getLogger(__name__)

_PLAIN_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FileRecord(BaseModel):
    """File tracked by the remote files service."""
    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    id: str
    filename: str
    uploaded_by: Optional[str] = Field(
        None, validation_alias=AliasChoices("uploaded_by", "uploadedBy")
    )
    upload_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("uploadDate", "upload_date")
    )
    status: Optional[str] = None
    approval_status: StatusMap = Field(
        default_factory=dict,
        validation_alias=AliasChoices("approvalStatus", "approval_status"),
    )
    original_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("originalName", "original_name")
    )
    mime_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("mimeType", "mime_type")
    )
    size: Optional[int] = None
    version: Optional[int] = None
    type: Optional[str] = None
    description: Optional[str] = None

    @field_validator("approval_status", mode="before")
    @classmethod
    def _normalize_approval_status(cls, value: Any) -> StatusMap:
        return normalize(value)

    @field_validator("upload_date", mode="wrap")
    @classmethod
    def _lenient_upload_date(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Optional[datetime]:
        """Plain dates mean midnight UTC; unreadable dates mean undated."""
        if isinstance(value, str) and _PLAIN_DATE.match(value):
            value = f"{value}T00:00:00"
        try:
            parsed = handler(value)
        except ValidationError:
            logger.warning(f"Treating unreadable upload date {value!r} as undated")
            return None
        if parsed is not None and parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    @field_validator("size", "version", mode="wrap")
    @classmethod
    def _lenient_counts(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Optional[int]:
        try:
            return handler(value)
        except ValidationError:
            logger.debug(f"Ignoring non-integer value {value!r}")
            return None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the wire shape expected by the files service."""
        return {
            "id": self.id,
            "filename": self.filename,
            "originalName": self.original_name or self.filename,
            "mimeType": self.mime_type,
            "size": self.size,
            "version": self.version,
            "uploaded_by": self.uploaded_by,
            "uploadDate": self.upload_date.isoformat() if self.upload_date else None,
            "status": self.status,
            "type": self.type,
            "description": self.description,
            "approvalStatus": json.dumps(dump_status_map(self.approval_status)),
        }


class ParsedUpload(BaseModel):
    """Result of the delegated spreadsheet/geospatial parser.

    ``data`` is opaque: tabular rows for spreadsheets, GeoJSON for
    geospatial files.
    """
    type: Optional[str] = None
    data: Any = None
    sheet_name: Optional[str] = None
    error: Optional[str] = None


class UploadStatus(str, Enum):
    """Local lifecycle of a dropped file."""

    UPLOADING = "uploading"
    COMPLETED = "completed"
    ERROR = "error"
    UNDER_REVIEW = "under_review"


class UploadItem(BaseModel):
    """File staged locally before it is sent for approval."""
    local_id: str
    name: str
    size: int = 0
    mime_type: Optional[str] = None
    status: UploadStatus = UploadStatus.UPLOADING
    progress: int = 0
    parsed: Optional[ParsedUpload] = None
    file_id: Optional[str] = None
