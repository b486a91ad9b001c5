"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, List

import httpx
import pytest

from projectreview.core.session import Session
from projectreview.schemas.users import User
from projectreview.services.client import FilesServiceClient

BASE_URL = "http://testserver/api"


def make_user(department: str, /, **overrides) -> User:
    data = {
        "id": f"user-{department.split()[0].lower()}",
        "username": department.split()[0].lower(),
        "department": department,
        "name": f"{department} Reviewer",
        "email": f"{department.split()[0].lower()}@example.com",
    }
    data.update(overrides)
    return User(**data)


class FakeFilesService:
    """In-memory stand-in for the remote files service.

    Stores ``approvalStatus`` as a JSON string, the way the real service
    returns it.
    """

    def __init__(self, files: List[Dict[str, Any]] = None):
        self.files = [dict(f) for f in (files or [])]
        self.requests: List[httpx.Request] = []
        self.fail_listing = False
        self.fail_approval = False
        self.fail_create = False
        self.fail_listing_after_approval = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/api/files":
            if self.fail_listing:
                return httpx.Response(500, json={"error": "Internal error"})
            return httpx.Response(200, json=self.files)

        if request.method == "POST" and path == "/api/files":
            if self.fail_create:
                return httpx.Response(500, json={"error": "Database unavailable"})
            body = json.loads(request.content)
            self.files.append(body)
            return httpx.Response(201, json=body)

        if request.method == "POST" and path.endswith("/approval"):
            if self.fail_approval:
                return httpx.Response(500, json={"error": "Database unavailable"})
            file_id = path.split("/")[-2]
            body = json.loads(request.content)
            for f in self.files:
                if str(f["id"]) == file_id:
                    f["approvalStatus"] = json.dumps(body["approval_status"])
                    if self.fail_listing_after_approval:
                        self.fail_listing = True
                    return httpx.Response(200, json={"success": True})
            return httpx.Response(404, json={"error": "File not found"})

        return httpx.Response(404, json={"error": "Not found"})

    def bodies(self, method: str, suffix: str) -> List[Dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path.endswith(suffix)
        ]


@pytest.fixture
def all_pending():
    return {
        "Environmental": "pending",
        "Electrical": "pending",
        "Civil": "pending",
        "Permitting": "pending",
    }


@pytest.fixture
def sample_files(all_pending):
    """Raw file records as returned by the service, oldest first."""
    return [
        {
            "id": "FILE_1",
            "filename": "site-layout.kmz",
            "uploaded_by": "user-solar",
            "uploadDate": "2024-01-01T10:00:00Z",
            "approvalStatus": json.dumps(all_pending),
        },
        {
            "id": "FILE_2",
            "filename": "budget.xlsx",
            "uploaded_by": "user-solar",
            "uploadDate": "2024-03-01T10:00:00Z",
            "approvalStatus": {**all_pending, "Civil": "rejected"},
        },
    ]


@pytest.fixture
def fake_service(sample_files):
    return FakeFilesService(sample_files)


@pytest.fixture
def client(fake_service):
    client = FilesServiceClient(BASE_URL, transport=httpx.MockTransport(fake_service.handler))
    yield client
    client.close()


@pytest.fixture
def electrical_user():
    return make_user("Electrical")


@pytest.fixture
def civil_user():
    return make_user("Civil")


@pytest.fixture
def environmental_user():
    return make_user("Environmental")


@pytest.fixture
def solar_user():
    return make_user("Solar and Wind")


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def user_factory():
    return make_user
