"""Error taxonomy for the project review client.

Every error is recoverable at the UI boundary; none of them is fatal
to the process and nothing is retried automatically.
"""

from typing import Optional


class ProjectReviewError(Exception):
    """Base class for all project review errors."""


class ParseError(ProjectReviewError):
    """Raised when a stored approval status document cannot be decoded."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class FetchError(ProjectReviewError):
    """Raised when the files listing could not be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SubmissionError(ProjectReviewError):
    """Raised when an approval or file creation request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PermissionDeniedError(ProjectReviewError):
    """Raised when a user may not act on a department slot."""

    def __init__(self, department: Optional[str]):
        super().__init__(f"Permission denied: department {department!r} cannot review files")
        self.department = department


class TransitionError(ProjectReviewError):
    """Raised when a department slot has already been decided."""

    def __init__(self, message: str, department: str, status: str):
        super().__init__(message)
        self.department = department
        self.status = status


class NotAuthenticatedError(ProjectReviewError):
    """Raised when an operation needs a logged-in user."""


class AuthenticationError(ProjectReviewError):
    """Raised when login credentials do not match a directory entry."""


class StaleTokenError(ProjectReviewError):
    """Raised when an optimistic marker token is confirmed or rolled back twice."""


class UploadRejectedError(ProjectReviewError):
    """Raised when dropped files violate the upload limits."""
