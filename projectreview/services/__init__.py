"""Services talking to the remote files service."""

from .client import FilesServiceClient
from .registry import FileRegistry
from .uploads import DroppedFile, UploadQueue

__all__ = ["DroppedFile", "FileRegistry", "FilesServiceClient", "UploadQueue"]
