"""
OpenAIClient - chat completions and image generation over the REST API.
"""

from typing import Dict

from app.config import settings
from app.models.action_result import ActionResult
from app.models.platform_requests import OpenAIChatRequest, OpenAIImageRequest
from .platform_client import ActionSpec, PlatformClient


class OpenAIClient(PlatformClient):
    """Single-request client for OpenAI chat and DALL-E image generation."""

    _actions = {
        "chat": ActionSpec("chat", "/chat/completions", OpenAIChatRequest, "chat"),
        "image": ActionSpec("image", "/images/generations", OpenAIImageRequest, "generate_image"),
    }

    @property
    def platform_name(self) -> str:
        return "openai"

    @property
    def base_url(self) -> str:
        return settings.OPENAI_BASE_URL.rstrip("/")

    @property
    def actions(self) -> Dict[str, ActionSpec]:
        return self._actions

    async def chat(self, request: OpenAIChatRequest) -> ActionResult:
        result = await self.call("POST", "/chat/completions", request.to_wire(), model=request.model)
        if result.success and isinstance(result.data, dict):
            result.tokens_used = (result.data.get("usage") or {}).get("total_tokens")
        return result

    async def generate_image(self, request: OpenAIImageRequest) -> ActionResult:
        return await self.call("POST", "/images/generations", request.to_wire(), model=request.model)
