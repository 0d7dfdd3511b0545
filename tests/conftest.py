import json
import tempfile
from pathlib import Path
from typing import Any, Callable, List, Optional
from unittest.mock import Mock

import httpx
import pytest

from smartling_files.auth import AuthProvider
from smartling_files.client import FileApiClient


def success_envelope(data: Any = None) -> dict:
    response = {"code": "SUCCESS"}
    if data is not None:
        response["data"] = data
    return {"response": response}


def error_envelope(*messages: str, code: str = "VALIDATION_ERROR") -> dict:
    return {
        "response": {
            "code": code,
            "errors": [{"key": "error", "message": message} for message in messages],
        }
    }


class RecordingHandler:
    """MockTransport handler that answers with a canned response and keeps every request."""

    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self.body = success_envelope() if body is None else body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        body = self.body
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return httpx.Response(self.status_code, content=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


SMARTLING_ENV = (
    "SMARTLING_PROJECT_ID",
    "SMARTLING_USER_IDENTIFIER",
    "SMARTLING_USER_SECRET",
    "SMARTLING_BASE_URL",
    "SMARTLING_AUTH_URL",
    "SMARTLING_TIMEOUT",
    "SMARTLING_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the real environment and any .env file"""
    for name in SMARTLING_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_file(temp_dir):
    """Create a sample XML resource file"""
    path = temp_dir / "test.xml"
    path.write_text('<?xml version="1.0"?>\n<strings><string name="hello">Hello</string></strings>\n')
    return path


@pytest.fixture
def mock_auth():
    """Create a mock auth provider"""
    auth = Mock(spec=AuthProvider)
    auth.get_access_token.return_value = "test-token"
    auth.get_token_type.return_value = "Bearer"
    return auth


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def make_client(mock_auth) -> Callable[..., FileApiClient]:
    """Build a client whose HTTP traffic goes to the given handler"""
    clients = []

    def _make(handler: Callable, base_url: Optional[str] = None) -> FileApiClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return FileApiClient("p1", mock_auth, http_client, base_url=base_url)

    yield _make

    for http_client in clients:
        http_client.close()


@pytest.fixture
def client(make_client, handler):
    return make_client(handler)
