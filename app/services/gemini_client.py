"""
GeminiClient - Gemini generateContent for text and image prompts.
"""

from typing import Any, Dict

from app.config import settings
from app.models.action_result import ActionResult
from app.models.platform_requests import GeminiTextRequest, GeminiVisionRequest
from .platform_client import ActionSpec, PlatformClient


def extract_text(response: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(response, dict):
        return ""
    candidates = response.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


class GeminiClient(PlatformClient):
    """Gemini text and vision generation. Authenticates with x-goog-api-key."""

    _actions = {
        "text": ActionSpec("text", "/generateContent", GeminiTextRequest, "generate_text"),
        "vision": ActionSpec("vision", "/generateContent", GeminiVisionRequest, "generate_text_with_image"),
    }

    @property
    def platform_name(self) -> str:
        return "gemini"

    @property
    def base_url(self) -> str:
        return settings.GEMINI_BASE_URL.rstrip("/")

    @property
    def actions(self) -> Dict[str, ActionSpec]:
        return self._actions

    def auth_headers(self, secret: str) -> Dict[str, str]:
        return {"x-goog-api-key": secret, "Content-Type": "application/json"}

    async def _generate(self, model: str, body: dict) -> ActionResult:
        result = await self.call("POST", f"/models/{model}:generateContent", body, model=model)
        if result.success:
            result.data = {"text": extract_text(result.data), "response": result.data}
        return result

    async def generate_text(self, request: GeminiTextRequest) -> ActionResult:
        return await self._generate(request.model, request.to_wire())

    async def generate_text_with_image(self, request: GeminiVisionRequest) -> ActionResult:
        return await self._generate(request.model, request.to_wire())
