"""Session holding the logged-in user.

A Session is created once and passed to the components that need the
acting user. Nothing reads the user from module-level state.
"""

import logging
from typing import Optional

from projectreview.core.errors import NotAuthenticatedError
from projectreview.schemas.users import User

logger = logging.getLogger(__name__)


class Session:
    """Explicit login/logout lifecycle for one client."""

    def __init__(self, user: Optional[User] = None):
        self._user = user

    @property
    def current_user(self) -> Optional[User]:
        """The logged-in user, or None."""
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def login(self, user: User) -> User:
        """Start a session for ``user``, replacing any previous one."""
        if self._user is not None:
            logger.info(f"Replacing session for {self._user.username}")
        self._user = user
        logger.info(f"User {user.username} logged in under {user.department}")
        return user

    def logout(self) -> None:
        """End the session. Logging out twice is a no-op."""
        if self._user is not None:
            logger.info(f"User {self._user.username} logged out")
        self._user = None

    def require_user(self) -> User:
        """Get the logged-in user.

        Raises:
            NotAuthenticatedError: If nobody is logged in
        """
        if self._user is None:
            raise NotAuthenticatedError("User information not found")
        return self._user
