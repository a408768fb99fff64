"""
SeedreamClient - Seedream 4.0 image generation and upscaling.
"""

from typing import Dict

from app.config import settings
from app.models.action_result import ActionResult
from app.models.platform_requests import SeedreamImageRequest, SeedreamUpscaleRequest
from .platform_client import ActionSpec, PlatformClient


class SeedreamClient(PlatformClient):
    _actions = {
        "image": ActionSpec("image", "/images/generations", SeedreamImageRequest, "generate_image"),
        "upscale": ActionSpec("upscale", "/seedream/upscale", SeedreamUpscaleRequest, "upscale_image"),
    }

    @property
    def platform_name(self) -> str:
        return "seedream"

    @property
    def base_url(self) -> str:
        return settings.SEEDREAM_BASE_URL.rstrip("/")

    @property
    def actions(self) -> Dict[str, ActionSpec]:
        return self._actions

    async def generate_image(self, request: SeedreamImageRequest) -> ActionResult:
        return await self.call("POST", "/images/generations", request.to_wire(), model=request.model)

    async def upscale_image(self, request: SeedreamUpscaleRequest) -> ActionResult:
        return await self.call("POST", "/seedream/upscale", request.to_wire())
