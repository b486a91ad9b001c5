"""Composition root wiring settings, logging, session and services."""

import logging
from typing import Optional

import httpx

from projectreview.common.logger import setup_logger
from projectreview.core.directory import UserDirectory
from projectreview.core.session import Session
from projectreview.core.workflow import ApprovalWorkflow
from projectreview.schemas.users import User
from projectreview.services.client import FilesServiceClient
from projectreview.services.registry import FileRegistry
from projectreview.services.uploads import Parser, UploadQueue, default_parser
from projectreview.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ReviewApp:
    """One client instance: a session plus the services bound to it."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        directory: Optional[UserDirectory] = None,
        parser: Parser = default_parser,
        transport: Optional[httpx.BaseTransport] = None,
        configure_logging: bool = True,
    ):
        self.settings = settings or get_settings()
        if configure_logging:
            setup_logger(settings=self.settings)

        self.session = Session()
        self._directory = directory
        self.client = FilesServiceClient(
            self.settings.api_base_url,
            timeout=self.settings.request_timeout,
            transport=transport,
        )
        self.workflow = ApprovalWorkflow(self.session)
        self.registry = FileRegistry(self.client, self.session, workflow=self.workflow)
        self.uploads = UploadQueue(
            self.registry,
            parser=parser,
            max_files=self.settings.max_upload_files,
            max_size=self.settings.max_upload_size,
        )

    @property
    def directory(self) -> UserDirectory:
        if self._directory is None:
            self._directory = UserDirectory.from_file(self.settings.users_file)
        return self._directory

    def login(self, username: str, password: str, department: str) -> User:
        """Authenticate against the directory and start the session.

        The file list is loaded right away; a failed load only sets the
        registry's error banner.
        """
        user = self.directory.authenticate(username, password, department)
        self.session.login(user)
        self.registry.refresh()
        return user

    def logout(self) -> None:
        self.session.logout()

    def close(self) -> None:
        self.client.close()
