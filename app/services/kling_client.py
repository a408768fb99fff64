"""
KlingClient - Kling text-to-video through PiAPI.

Video generation is a long-running task: the create call returns a
``task_id`` and the task endpoint is polled until ``status`` is
``completed`` or ``failed``.
"""

from typing import Any, Dict, Optional

from app.config import settings
from app.models.action_result import ActionResult
from app.models.platform_requests import KlingStatusRequest, KlingVideoRequest
from job_engine import JobAdapter, JobHandle, JobTracker, PollConfig, StatusCheck, SubmissionError
from .credential_resolver import Credential
from .platform_client import ActionSpec, PlatformClient, error_text


class KlingVideoJob(JobAdapter):
    """Submit/poll adapter for one Kling video task."""

    def __init__(self, client: "KlingClient"):
        self.client = client
        self.credential: Optional[Credential] = None

    @property
    def provider(self) -> str:
        return "kling"

    async def submit(self, request: KlingVideoRequest) -> JobHandle:
        self.credential = self.client.resolve_credential()
        data = await self.client.submit_json(
            f"{self.client.base_url}/v1/video/text-to-video",
            self.client.auth_headers(self.credential.secret),
            request.to_wire(),
        )
        task_id = data.get("task_id") if isinstance(data, dict) else None
        if not task_id:
            raise SubmissionError("Kling response did not include a task_id", status_code=502)
        return JobHandle(job_id=str(task_id), provider=self.provider)

    async def fetch_status(self, handle: JobHandle) -> Any:
        return await self.client.poll_json(
            f"{self.client.base_url}/v1/video/task/{handle.job_id}",
            {"Authorization": f"Bearer {self.credential.secret}"},
        )

    def classify_status(self, payload: Any) -> StatusCheck:
        if not isinstance(payload, dict):
            return StatusCheck.pending()

        status = str(payload.get("status") or "").lower()
        if status == "completed":
            return StatusCheck.completed(payload)
        if status == "failed":
            return StatusCheck.failed(error_text(payload.get("error")) or self.default_failure_message)
        return StatusCheck.pending()


class KlingClient(PlatformClient):
    """Kling video generation and task status lookup."""

    _actions = {
        "video": ActionSpec("video", "/v1/video/text-to-video", KlingVideoRequest, "generate_video"),
        "status": ActionSpec("status", "/v1/video/task/{task_id}", KlingStatusRequest, "get_task_status"),
    }

    def __init__(self, *args, poll_config: Optional[PollConfig] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.poll_config = poll_config or PollConfig(
            interval_ms=settings.KLING_POLL_INTERVAL_MS,
            max_attempts=settings.KLING_MAX_ATTEMPTS,
        )

    @property
    def platform_name(self) -> str:
        return "kling"

    @property
    def base_url(self) -> str:
        return settings.KLING_BASE_URL.rstrip("/")

    @property
    def actions(self) -> Dict[str, ActionSpec]:
        return self._actions

    async def generate_video(self, request: KlingVideoRequest) -> ActionResult:
        adapter = KlingVideoJob(self)
        tracker = JobTracker(adapter, self.poll_config, sleep=self._sleep, clock=self._clock)
        outcome = await tracker.run(request)
        return ActionResult.from_outcome(
            outcome,
            api_key_id=adapter.credential.key_id if adapter.credential else None,
        )

    async def get_task_status(self, request: KlingStatusRequest) -> ActionResult:
        return await self.call("GET", f"/v1/video/task/{request.task_id}")
