"""
Pytest configuration and fixtures
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.main import app
from app.services.provider_factory import reset_providers


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is awaited."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class RecordingTransport:
    """
    Wraps a request handler in an httpx.MockTransport and keeps every
    request it served.
    """

    def __init__(self, handler):
        self.requests = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def paths(self, method: str = None) -> list:
        return [r.url.path for r in self.requests if method is None or r.method == method]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the data store at a temp dir and clear environment credentials."""
    monkeypatch.setattr(settings, "DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setattr(settings, "ENCRYPTION_KEY", "test-encryption-key")
    monkeypatch.setattr(settings, "AUTO_IMPORT_API_KEYS", False)
    for env_key in ("OPENAI_API_KEY", "GOOGLE_API_KEY", "KLING_API_KEY", "SEEDREAM_API_KEY"):
        monkeypatch.setattr(settings, env_key, "")
    reset_providers()
    yield
    reset_providers()


@pytest.fixture
def client():
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport
