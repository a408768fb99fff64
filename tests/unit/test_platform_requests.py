"""
Unit tests for platform request models and the action envelope.
"""

import pytest
from pydantic import ValidationError

from app.models.action_result import ActionResult
from app.models.platform_requests import (
    KlingStatusRequest,
    KlingVideoRequest,
    OpenAIChatRequest,
    OpenAIImageRequest,
    SeedreamUpscaleRequest,
    VeoVideoRequest,
)
from job_engine import (
    ErrorKind,
    Job,
    JobHandle,
    JobOutcome,
    NotConfiguredError,
)


class TestRequestModels:
    def test_blank_prompt_rejected(self):
        with pytest.raises(ValidationError):
            OpenAIChatRequest(prompt="   ")

    def test_missing_prompt_rejected(self):
        with pytest.raises(ValidationError):
            KlingVideoRequest.model_validate({"duration": 5})

    def test_camel_case_parameters(self):
        request = OpenAIChatRequest.model_validate({"prompt": "hi", "maxTokens": 50})
        assert request.to_wire()["max_tokens"] == 50

    def test_unknown_parameters_ignored(self):
        request = KlingVideoRequest.model_validate({"prompt": "hi", "fps": 60})
        assert "fps" not in request.to_wire()

    def test_status_request_has_no_body(self):
        with pytest.raises(NotImplementedError):
            KlingStatusRequest(taskId="task-1").to_wire()

    def test_kling_defaults(self):
        assert KlingVideoRequest(prompt="hi").to_wire() == {
            "prompt": "hi",
            "duration": 5,
            "aspect_ratio": "16:9",
            "mode": "standard",
        }

    def test_veo_defaults(self):
        assert VeoVideoRequest(prompt="hi").to_wire() == {
            "prompt": "hi",
            "videoConfig": {"duration": 10, "resolution": "1080p", "aspectRatio": "16:9"},
        }

    def test_invalid_aspect_ratio(self):
        with pytest.raises(ValidationError):
            VeoVideoRequest.model_validate({"prompt": "hi", "aspectRatio": "4:3"})

    def test_invalid_image_size(self):
        with pytest.raises(ValidationError):
            OpenAIImageRequest(prompt="hi", size="100x100")

    def test_upscale_requires_image(self):
        with pytest.raises(ValidationError):
            SeedreamUpscaleRequest.model_validate({"scaleFactor": 4})


class TestActionResult:
    def test_success_envelope_omits_empty_fields(self):
        envelope = ActionResult.ok({"id": 1}, duration=12, model="gpt-4").to_envelope()
        assert envelope == {"success": True, "data": {"id": 1}, "duration": 12}

    def test_error_envelope(self):
        result = ActionResult.from_error(NotConfiguredError("Kling AI client not configured."))

        assert result.to_envelope() == {
            "success": False,
            "error": "Kling AI client not configured.",
            "errorKind": "not_configured",
        }
        assert result.status_code == 500

    def test_from_timed_out_outcome(self):
        job = Job.from_handle(JobHandle(job_id="t-1", provider="kling"))
        job.time_out()

        result = ActionResult.from_outcome(JobOutcome.from_job(job, duration_ms=300_000))

        assert result.to_envelope() == {
            "success": False,
            "error": "Video generation timeout",
            "errorKind": ErrorKind.TIMEOUT.value,
            "duration": 300_000,
        }

    def test_tokens_used_alias(self):
        envelope = ActionResult.ok({}, tokens_used=42).to_envelope()
        assert envelope["tokensUsed"] == 42
