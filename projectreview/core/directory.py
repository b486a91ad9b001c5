"""User directory used by the login screen.

The directory is a YAML (or JSON) document of the form::

    users:
      - id: "u-1"
        username: alice
        password: secret
        department: Electrical
        name: Alice Example
        email: alice@example.com
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from projectreview.common.config import load_config
from projectreview.core.departments import is_known_department
from projectreview.core.errors import AuthenticationError
from projectreview.schemas.users import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials. Please try again."

REQUIRED_FIELDS = ("id", "username", "password", "department")


class UserDirectory:
    """Credential lookup against a static list of users."""

    def __init__(self, entries: List[Dict[str, Any]]):
        """
        Raises:
            TypeError: If an entry is not a mapping
            ValueError: If an entry lacks one of the required fields
        """
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise TypeError(
                    f"User entry {index} must be a mapping, got {type(entry).__name__}"
                )
            missing = [key for key in REQUIRED_FIELDS if entry.get(key) in (None, "")]
            if missing:
                raise ValueError(f"User entry {index} is missing {', '.join(missing)}")
        self._entries = entries

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "UserDirectory":
        """Load a directory from a YAML/JSON file."""
        config = load_config(path)
        entries = config.get("users", [])
        if not isinstance(entries, list):
            raise TypeError(f"'users' must be a list, got {type(entries).__name__}")
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def authenticate(self, username: str, password: str, department: str) -> User:
        """Find the user matching all three login fields.

        Raises:
            AuthenticationError: If the department is unknown or no entry matches
        """
        if not is_known_department(department):
            raise AuthenticationError(INVALID_CREDENTIALS)

        for entry in self._entries:
            if (
                entry.get("username") == username
                and entry.get("password") == password
                and entry.get("department") == department
            ):
                return User.model_validate(entry)

        logger.warning(f"Failed login for {username!r} under {department}")
        raise AuthenticationError(INVALID_CREDENTIALS)
