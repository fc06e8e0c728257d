"""
Karoli Portal - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from faker import Faker
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from jose import jwt

# Settings are read at import time
TEST_JWT_KEY = "test-identity-secret"
TEST_API_URL = "http://university-api.test"
os.environ['APP_ENV'] = 'test'
os.environ['UNIVERSITY_API_URL'] = TEST_API_URL
os.environ['IDENTITY_JWT_KEY'] = TEST_JWT_KEY
os.environ['IDENTITY_JWT_ALGORITHMS'] = '["HS256"]'

from karoli_portal.api.deps import get_university_client
from karoli_portal.core.security import CurrentUser, get_current_user
from karoli_portal.integrations.university.rest_client import UniversityRestClient
from karoli_portal.main import app

fake = Faker()


def envelope(data=None, success: bool = True, message: Optional[str] = None) -> dict:
    body = {"success": success, "data": data}
    if message:
        body["message"] = message
    return body


class FakeUniversityBackend:
    """
    Stands in for the remote REST backend.

    Responses are registered per (method, path); every request is recorded
    so tests can assert on query strings, headers and bodies.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Callable[[], httpx.Response]] = {}
        self.errors: Dict[Tuple[str, str], Exception] = {}
        self.requests: List[httpx.Request] = []

    def reply(self, method: str, path: str, data=None, status_code: int = 200,
              success: bool = True, message: Optional[str] = None) -> None:
        body = envelope(data, success=success, message=message)
        self.routes[(method, path)] = lambda: httpx.Response(status_code, json=body)

    def reply_raw(self, method: str, path: str, content: bytes, status_code: int = 200) -> None:
        self.routes[(method, path)] = lambda: httpx.Response(status_code, content=content)

    def fail(self, method: str, path: str, status_code: int = 500) -> None:
        self.routes[(method, path)] = lambda: httpx.Response(
            status_code, json={"success": False, "message": "Internal server error"}
        )

    def raise_error(self, method: str, path: str, error: Exception) -> None:
        self.errors[(method, path)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.errors:
            raise self.errors[key]
        if key in self.routes:
            return self.routes[key]()
        return httpx.Response(404, json={"success": False, "message": "Not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last(self, method: str, path: str) -> httpx.Request:
        for request in reversed(self.requests):
            if request.method == method and request.url.path == path:
                return request
        raise AssertionError(f"No {method} {path} request was sent")


def make_token(role: Optional[str] = None, **claims) -> str:
    payload = {
        "sub": f"user_{fake.uuid4()[:8]}",
        "email": fake.email(),
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
    }
    if role:
        payload["public_metadata"] = {"role": role}
    payload.update(claims)
    return jwt.encode(payload, TEST_JWT_KEY, algorithm="HS256")


def auth(role: Optional[str] = None, **claims) -> dict:
    return {"Authorization": f"Bearer {make_token(role, **claims)}"}


@pytest.fixture
def backend() -> FakeUniversityBackend:
    return FakeUniversityBackend()


@pytest.fixture
async def rest_client(backend: FakeUniversityBackend) -> AsyncGenerator[UniversityRestClient, None]:
    async with UniversityRestClient("test-token", transport=backend.transport) as client:
        yield client


@pytest.fixture
async def client(backend: FakeUniversityBackend) -> AsyncGenerator[AsyncClient, None]:
    """Portal test client whose upstream calls go to the fake backend"""

    async def override_university_client(user: CurrentUser = Depends(get_current_user)):
        async with UniversityRestClient(user.token, transport=backend.transport) as upstream:
            yield upstream

    app.dependency_overrides[get_university_client] = override_university_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def student_headers() -> dict:
    return auth("student")


@pytest.fixture
def faculty_headers() -> dict:
    return auth("faculty")


@pytest.fixture
def admin_headers() -> dict:
    return auth("admin")
