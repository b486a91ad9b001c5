"""HTTP client for the remote files service.

Endpoints (relative to ``api_base_url``):
- GET  /files                  list all files
- POST /files                  create a file record
- POST /files/{id}/approval    record one department's decision
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from projectreview.core.errors import FetchError, SubmissionError
from projectreview.schemas.approvals import ApprovalSubmission
from projectreview.schemas.files import FileRecord

logger = logging.getLogger(__name__)


class FilesServiceClient:
    """Thin synchronous wrapper around the files service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root, e.g. ``https://host/api``
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FilesServiceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list_files(self) -> List[Dict[str, Any]]:
        """Fetch every file record.

        Raises:
            FetchError: If the request fails or the body is not a list
        """
        try:
            response = self._client.get("/files")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Files listing request failed: {e}")
            raise FetchError("Failed to fetch files") from e

        if not response.is_success:
            logger.warning(f"Files listing returned HTTP {response.status_code}")
            raise FetchError("Failed to fetch files", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError("Files listing returned invalid JSON") from e

        if not isinstance(data, list):
            raise FetchError(f"Files listing must be a list, got {type(data).__name__}")

        logger.debug(f"Fetched {len(data)} file records")
        return data

    def create_file(self, record: FileRecord) -> Dict[str, Any]:
        """Create a file record on the service.

        Raises:
            SubmissionError: If the request fails
        """
        response = self._post("/files", record.to_payload(), "Failed to save file data")
        logger.info(f"Created file record {record.id} ({record.filename})")
        return response

    def submit_approval(self, submission: ApprovalSubmission) -> Dict[str, Any]:
        """Record a department decision, sending the complete status map.

        Raises:
            SubmissionError: If the request fails
        """
        action = submission.action.value
        response = self._post(
            f"/files/{quote(submission.file_id, safe='')}/approval",
            submission.to_payload(),
            f"Failed to {action} file",
        )
        logger.info(
            f"{submission.department} recorded {action} on file {submission.file_id}"
        )
        return response

    def _post(self, path: str, payload: Dict[str, Any], failure: str) -> Dict[str, Any]:
        try:
            response = self._client.post(path, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"POST {path} failed: {e}")
            raise SubmissionError(failure) from e

        if not response.is_success:
            message = _error_message(response) or failure
            logger.warning(f"POST {path} returned HTTP {response.status_code}: {message}")
            raise SubmissionError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"result": body}


def _error_message(response: httpx.Response) -> Optional[str]:
    """Extract the ``error`` field from a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
