"""
Integration Tests for Platform Endpoints

Tests POST /api/platforms/{platform} action dispatch end to end: request
validation, provider calls through a mock transport, long-running video
polling and usage logging.
"""

import httpx
import pytest

from app.config import settings
from app.services import get_credential_resolver, set_platform_client
from app.services.kling_client import KlingClient
from app.services.openai_client import OpenAIClient
from app.services.veo_client import VeoClient
from job_engine import PollConfig

KLING_SUBMIT = "/api/kling/v1/video/text-to-video"
KLING_TASK = "/api/kling/v1/video/task/task-9"


def kling_provider(statuses, submit_response=None):
    remaining = list(statuses)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == KLING_SUBMIT:
            return submit_response or httpx.Response(200, json={"task_id": "task-9"})
        if request.url.path == KLING_TASK:
            return httpx.Response(200, json=remaining.pop(0))
        return httpx.Response(404, json={"message": "not found"})

    return handler


@pytest.fixture
def install_kling(fake_clock, recording_transport, monkeypatch):
    monkeypatch.setattr(settings, "KLING_API_KEY", "kling-env-key")

    def install(handler, max_attempts=60):
        transport = recording_transport(handler)
        set_platform_client(
            KlingClient(
                get_credential_resolver(),
                transport=transport.transport,
                sleep=fake_clock.sleep,
                clock=fake_clock,
                poll_config=PollConfig(interval_ms=5000, max_attempts=max_attempts),
            )
        )
        return transport

    return install


class TestActionValidation:
    """Request validation happens before any provider call."""

    def test_missing_action(self, client):
        response = client.post("/api/platforms/openai", json={"prompt": "hi"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Action is required"}

    def test_unknown_action(self, client):
        response = client.post("/api/platforms/kling", json={"action": "dance", "prompt": "hi"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid action"

    def test_action_from_another_platform(self, client):
        response = client.post("/api/platforms/veo", json={"action": "chat", "prompt": "hi"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid action"

    def test_missing_prompt(self, client):
        response = client.post("/api/platforms/openai", json={"action": "chat"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Invalid parameters")
        assert body["errorKind"] == "validation"

    def test_non_object_body(self, client):
        response = client.post("/api/platforms/gemini", json=["text"])

        assert response.status_code == 400

    def test_malformed_json(self, client):
        response = client.post(
            "/api/platforms/gemini",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_validation_failures_are_not_logged_as_usage(self, client):
        client.post("/api/platforms/openai", json={"action": "chat"})

        assert client.get("/api/usage").json()["data"] == []


class TestKlingVideoEndpoint:
    """Tests for the long-running Kling video action."""

    def test_video_completes_after_polling(self, client, install_kling):
        completed = {
            "task_id": "task-9",
            "status": "completed",
            "output": {"video_url": "https://cdn.example/kling.mp4"},
        }
        transport = install_kling(
            kling_provider(
                [
                    {"status": "pending"},
                    {"status": "processing"},
                    {"status": "pending"},
                    completed,
                ]
            )
        )

        response = client.post(
            "/api/platforms/kling",
            json={"action": "video", "prompt": "a cat surfing a wave"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": completed, "duration": 20000}
        assert transport.paths() == [KLING_SUBMIT] + [KLING_TASK] * 4

        logs = client.get("/api/usage", params={"platform": "kling"}).json()["data"]
        assert len(logs) == 1
        assert logs[0]["endpoint"] == "/v1/video/text-to-video"
        assert logs[0]["statusCode"] == 200
        assert logs[0]["success"] is True
        assert logs[0]["duration"] == 20000
        assert logs[0]["apiKeyId"] == "env"

    def test_rejected_submission(self, client, install_kling):
        transport = install_kling(
            kling_provider(
                [], submit_response=httpx.Response(401, json={"error": {"message": "Invalid API key"}})
            )
        )

        response = client.post("/api/platforms/kling", json={"action": "video", "prompt": "a cat"})

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "error": "Invalid API key",
            "errorKind": "submission",
            "duration": 0,
        }
        assert transport.paths() == [KLING_SUBMIT]

        log = client.get("/api/usage").json()["data"][0]
        assert log["statusCode"] == 401
        assert log["success"] is False
        assert log["errorMessage"] == "Invalid API key"

    def test_failure_with_numeric_message(self, client, install_kling):
        install_kling(kling_provider([{"status": "failed", "error": {"message": 4001}}]))

        response = client.post("/api/platforms/kling", json={"action": "video", "prompt": "a cat"})

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "error": "4001",
            "errorKind": "provider_failure",
            "duration": 5000,
        }
        logs = client.get("/api/usage").json()["data"]
        assert len(logs) == 1
        assert logs[0]["errorMessage"] == "4001"

    def test_timeout(self, client, install_kling):
        install_kling(kling_provider([{"status": "pending"}] * 2), max_attempts=2)

        response = client.post("/api/platforms/kling", json={"action": "video", "prompt": "a cat"})

        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Video generation timeout"
        assert body["errorKind"] == "timeout"
        assert body["duration"] == 10000

    def test_status_action(self, client, install_kling):
        transport = install_kling(kling_provider([{"task_id": "task-9", "status": "processing"}]))

        response = client.post("/api/platforms/kling", json={"action": "status", "taskId": "task-9"})

        assert response.json()["data"]["status"] == "processing"
        assert transport.paths() == [KLING_TASK]
        log = client.get("/api/usage").json()["data"][0]
        assert log["endpoint"] == "/v1/video/task/task-9"

    def test_not_configured(self, client, recording_transport, fake_clock):
        transport = recording_transport(kling_provider([]))
        set_platform_client(
            KlingClient(get_credential_resolver(), transport=transport.transport, sleep=fake_clock.sleep)
        )

        response = client.post("/api/platforms/kling", json={"action": "video", "prompt": "a cat"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["errorKind"] == "not_configured"
        assert transport.requests == []

        log = client.get("/api/usage").json()["data"][0]
        assert log["statusCode"] == 500
        assert log["apiKeyId"] == "default"


class TestVeoVideoEndpoint:
    @pytest.fixture
    def install_veo(self, fake_clock, recording_transport, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "google-env")

        def install(operations):
            remaining = list(operations)

            def handler(request: httpx.Request) -> httpx.Response:
                if request.method == "POST":
                    return httpx.Response(200, json={"name": "operations/op-1"})
                return httpx.Response(200, json=remaining.pop(0))

            transport = recording_transport(handler)
            set_platform_client(
                VeoClient(
                    get_credential_resolver(),
                    transport=transport.transport,
                    sleep=fake_clock.sleep,
                    clock=fake_clock,
                )
            )
            return transport

        return install

    def test_video_completes(self, client, install_veo):
        install_veo([{"done": False}, {"done": True, "response": {"generatedVideos": []}}])

        response = client.post(
            "/api/platforms/veo",
            json={"action": "video", "prompt": "sunrise", "resolution": "720p"},
        )

        assert response.json() == {
            "success": True,
            "data": {"generatedVideos": []},
            "duration": 10000,
        }
        log = client.get("/api/usage", params={"platform": "veo"}).json()["data"][0]
        assert log["model"] == "veo-3.1"

    def test_failure_with_numeric_message(self, client, install_veo):
        install_veo([{"done": True, "error": {"code": 13, "message": 500}}])

        response = client.post("/api/platforms/veo", json={"action": "video", "prompt": "sunrise"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "500"
        assert body["errorKind"] == "provider_failure"
        logs = client.get("/api/usage", params={"platform": "veo"}).json()["data"]
        assert len(logs) == 1
        assert logs[0]["endpoint"] == "/models/veo-3.1:generateVideo"


class TestOpenAIEndpoint:
    def _install(self, recording_transport, response):
        transport = recording_transport(lambda request: response)
        set_platform_client(OpenAIClient(get_credential_resolver(), transport=transport.transport))
        return transport

    def test_chat(self, client, recording_transport, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-env")
        body = {"choices": [{"message": {"content": "Hello"}}], "usage": {"total_tokens": 17}}
        self._install(recording_transport, httpx.Response(200, json=body))

        response = client.post("/api/platforms/openai", json={"action": "chat", "prompt": "Hi"})

        envelope = response.json()
        assert envelope["success"] is True
        assert envelope["data"] == body
        assert envelope["tokensUsed"] == 17
        assert isinstance(envelope["duration"], int)

        log = client.get("/api/usage").json()["data"][0]
        assert log["model"] == "gpt-4"
        assert log["tokensUsed"] == 17

    def test_upstream_error(self, client, recording_transport, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-env")
        self._install(
            recording_transport,
            httpx.Response(429, json={"error": {"message": "Rate limit reached"}}),
        )

        response = client.post("/api/platforms/openai", json={"action": "image", "prompt": "a dog"})

        assert response.status_code == 200
        envelope = response.json()
        assert envelope["success"] is False
        assert envelope["error"] == "Rate limit reached"
        assert envelope["errorKind"] == "upstream"
        assert client.get("/api/usage").json()["data"][0]["statusCode"] == 429


class TestPlatformCatalogEndpoint:
    def test_get_platforms(self, client):
        response = client.get("/api/platforms")

        assert response.status_code == 200
        platforms = {p["name"]: p for p in response.json()["platforms"]}
        assert set(platforms) == {"openai", "gemini", "veo", "kling", "seedream"}
        assert platforms["kling"]["actions"] == ["video", "status"]
        assert platforms["veo"]["category"] == "video"


class BrokenOpenAIClient(OpenAIClient):
    async def chat(self, request):
        raise RuntimeError("boom")


class TestUnhandledErrors:
    def test_unexpected_error_returns_500_envelope(self, client):
        set_platform_client(BrokenOpenAIClient(get_credential_resolver()))

        response = client.post("/api/platforms/openai", json={"action": "chat", "prompt": "Hi"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "boom"}
