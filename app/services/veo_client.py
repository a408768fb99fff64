"""
VeoClient - Google Veo video generation.

The generate call returns a long-running operation ``name``; the
operation resource is polled until ``done`` is true. A finished
operation carries either ``response`` or ``error``.
"""

from typing import Any, Dict, Optional

from app.config import settings
from app.models.action_result import ActionResult
from app.models.platform_requests import VeoVideoRequest
from job_engine import JobAdapter, JobHandle, JobTracker, PollConfig, StatusCheck, SubmissionError
from .credential_resolver import Credential
from .platform_client import ActionSpec, PlatformClient, error_text


class VeoVideoJob(JobAdapter):
    """Submit/poll adapter for one Veo operation."""

    def __init__(self, client: "VeoClient"):
        self.client = client
        self.credential: Optional[Credential] = None

    @property
    def provider(self) -> str:
        return "veo"

    async def submit(self, request: VeoVideoRequest) -> JobHandle:
        self.credential = self.client.resolve_credential()
        data = await self.client.submit_json(
            f"{self.client.base_url}/models/{settings.VEO_MODEL}:generateVideo",
            self.client.auth_headers(self.credential.secret),
            request.to_wire(),
        )
        operation = data.get("name") if isinstance(data, dict) else None
        if not operation:
            raise SubmissionError("Veo response did not include an operation name", status_code=502)
        return JobHandle(job_id=str(operation), provider=self.provider)

    async def fetch_status(self, handle: JobHandle) -> Any:
        return await self.client.poll_json(
            f"{self.client.base_url}/{handle.job_id.lstrip('/')}",
            {"x-goog-api-key": self.credential.secret},
        )

    def classify_status(self, payload: Any) -> StatusCheck:
        if not isinstance(payload, dict) or not payload.get("done"):
            return StatusCheck.pending()

        error = payload.get("error")
        if error:
            return StatusCheck.failed(error_text(error) or self.default_failure_message)
        return StatusCheck.completed(payload.get("response"))


class VeoClient(PlatformClient):
    """Veo video generation. Authenticates with x-goog-api-key."""

    def __init__(self, *args, poll_config: Optional[PollConfig] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.poll_config = poll_config or PollConfig(
            interval_ms=settings.VEO_POLL_INTERVAL_MS,
            max_attempts=settings.VEO_MAX_ATTEMPTS,
        )

    @property
    def platform_name(self) -> str:
        return "veo"

    @property
    def base_url(self) -> str:
        return settings.VEO_BASE_URL.rstrip("/")

    @property
    def actions(self) -> Dict[str, ActionSpec]:
        endpoint = f"/models/{settings.VEO_MODEL}:generateVideo"
        return {"video": ActionSpec("video", endpoint, VeoVideoRequest, "generate_video")}

    def auth_headers(self, secret: str) -> Dict[str, str]:
        return {"x-goog-api-key": secret, "Content-Type": "application/json"}

    async def generate_video(self, request: VeoVideoRequest) -> ActionResult:
        adapter = VeoVideoJob(self)
        tracker = JobTracker(adapter, self.poll_config, sleep=self._sleep, clock=self._clock)
        outcome = await tracker.run(request)
        return ActionResult.from_outcome(
            outcome,
            model=settings.VEO_MODEL,
            api_key_id=adapter.credential.key_id if adapter.credential else None,
        )
