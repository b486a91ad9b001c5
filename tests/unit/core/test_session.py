"""Tests for sessions and the login user directory."""

import pytest
import yaml

from projectreview.core.directory import INVALID_CREDENTIALS, UserDirectory
from projectreview.core.errors import AuthenticationError, NotAuthenticatedError
from projectreview.core.session import Session


@pytest.fixture
def directory_file(tmp_path):
    path = tmp_path / "users.yaml"
    path.write_text(yaml.safe_dump({
        "users": [
            {
                "id": 7,
                "username": "ada",
                "password": "s3cret",
                "department": "Electrical",
                "name": "Ada",
                "email": "ada@example.com",
            },
            {
                "id": "u-2",
                "username": "sol",
                "password": "sunny",
                "department": "Solar and Wind",
            },
        ]
    }))
    return path


class TestSession:
    """Test the login/logout lifecycle."""

    def test_starts_anonymous(self, session):
        """Test a new session has no user."""
        assert session.current_user is None
        assert not session.is_authenticated

    def test_login_logout(self, session, civil_user):
        """Test logging in and out."""
        session.login(civil_user)
        assert session.is_authenticated
        assert session.require_user() is civil_user

        session.logout()
        assert session.current_user is None
        session.logout()  # second logout is a no-op

    def test_require_user_when_anonymous(self, session):
        """Test require_user raises without a login."""
        with pytest.raises(NotAuthenticatedError):
            session.require_user()

    def test_login_replaces_user(self, session, civil_user, electrical_user):
        """Test a second login replaces the first."""
        session.login(civil_user)
        session.login(electrical_user)
        assert session.current_user.department == "Electrical"


class TestUserDirectory:
    """Test credential lookup."""

    def test_authenticate(self, directory_file):
        """Test matching all three fields returns the user."""
        directory = UserDirectory.from_file(directory_file)
        user = directory.authenticate("ada", "s3cret", "Electrical")

        assert user.id == "7"
        assert user.department == "Electrical"
        assert user.email == "ada@example.com"
        assert not hasattr(user, "password")

    @pytest.mark.parametrize("username,password,department", [
        ("ada", "wrong", "Electrical"),
        ("ada", "s3cret", "Civil"),
        ("nobody", "s3cret", "Electrical"),
        ("ada", "s3cret", "Marketing"),
    ])
    def test_authenticate_failures(self, directory_file, username, password, department):
        """Test any mismatch is rejected with the same message."""
        directory = UserDirectory.from_file(directory_file)
        with pytest.raises(AuthenticationError, match=INVALID_CREDENTIALS):
            directory.authenticate(username, password, department)

    def test_len(self, directory_file):
        """Test the directory size."""
        assert len(UserDirectory.from_file(directory_file)) == 2

    def test_users_must_be_list(self, tmp_path):
        """Test a malformed directory is refused."""
        path = tmp_path / "users.yaml"
        path.write_text("users: ada\n")
        with pytest.raises(TypeError):
            UserDirectory.from_file(path)

    def test_entry_must_be_mapping(self, tmp_path):
        """Test a scalar entry is refused when the file is loaded."""
        path = tmp_path / "users.yaml"
        path.write_text("users:\n  - ada\n")
        with pytest.raises(TypeError, match="User entry 0"):
            UserDirectory.from_file(path)

    def test_entry_missing_fields(self, tmp_path):
        """Test an entry without an id is refused when the file is loaded."""
        path = tmp_path / "users.yaml"
        path.write_text(yaml.safe_dump({"users": [
            {"username": "ada", "password": "s3cret", "department": "Electrical"},
        ]}))
        with pytest.raises(ValueError, match="missing id"):
            UserDirectory.from_file(path)

    def test_missing_file(self, tmp_path):
        """Test a missing directory file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            UserDirectory.from_file(tmp_path / "missing.yaml")
