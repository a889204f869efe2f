# =============================================================================
# Shared fixtures — transport adapters that keep tests off the real network
# =============================================================================
#
# HttpClient opens a fresh requests.Session per call through its
# `session_factory`. The fixtures here hand it sessions with an adapter
# mounted on http://testserver so requests are served by:
#   - AppAdapter:     the FastAPI mock backend (tests/mock_backend.py)
#   - CannedAdapter:  one fixed response, for malformed/odd bodies
#   - RaisingAdapter: a transport exception, for failure classification
# =============================================================================

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter

from libs.http import HttpClient
from student_records.app.clients import StudentClient
from tests.mock_backend import create_app
from tests.transport import build_response

BASE = "http://testserver"


class AppAdapter(BaseAdapter):
    """Routes requests into an ASGI app through FastAPI's TestClient."""

    def __init__(self, app) -> None:
        super().__init__()
        self._client = TestClient(app)
        self.sent: List[requests.PreparedRequest] = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        r = self._client.request(
            request.method,
            request.url,
            content=request.body,
            headers={k: v for k, v in request.headers.items() if k.lower() != "connection"},
        )
        return build_response(request, r.status_code, r.content, dict(r.headers))

    def close(self) -> None:
        # shared across per-call sessions
        pass


class CannedAdapter(BaseAdapter):
    def __init__(self, status: int, content: bytes, headers: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        self.status = status
        self.content = content
        self.headers = headers or {}
        self.sent: List[requests.PreparedRequest] = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.timeout = kwargs.get("timeout")
        self.stream = kwargs.get("stream")
        return build_response(request, self.status, self.content, self.headers)

    def close(self) -> None:
        pass


class RaisingAdapter(BaseAdapter):
    def __init__(self, exc: Exception) -> None:
        super().__init__()
        self.exc = exc

    def send(self, request, **kwargs):
        raise self.exc

    def close(self) -> None:
        pass


def session_factory_for(adapter: BaseAdapter) -> Callable[[], requests.Session]:
    def factory() -> requests.Session:
        s = requests.Session()
        s.mount(BASE, adapter)
        return s
    return factory


@pytest.fixture
def backend_app():
    return create_app()


@pytest.fixture
def app_adapter(backend_app) -> AppAdapter:
    return AppAdapter(backend_app)


@pytest.fixture
def http(app_adapter) -> HttpClient:
    return HttpClient(f"{BASE}/api", timeout_ms=2_000, session_factory=session_factory_for(app_adapter))


@pytest.fixture
def students(http) -> StudentClient:
    return StudentClient(http)


@pytest.fixture
def canned():
    """Build an HttpClient whose every call returns one fixed response."""
    def _make(status: int, content: bytes, headers: Optional[Dict[str, str]] = None):
        adapter = CannedAdapter(status, content, headers)
        client = HttpClient(f"{BASE}/api", timeout_ms=1_500, session_factory=session_factory_for(adapter))
        return client, adapter
    return _make


@pytest.fixture
def raising():
    """Build an HttpClient whose transport raises `exc`."""
    def _make(exc: Exception) -> HttpClient:
        return HttpClient(f"{BASE}/api", timeout_ms=500, session_factory=session_factory_for(RaisingAdapter(exc)))
    return _make
