"""
Pydantic request models for platform actions.

Each model validates the caller's parameters and builds the wire payload
for the provider endpoint with ``to_wire()``, filling defaults for
omitted optional fields. Unknown parameters are ignored.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

AspectRatio = Literal["16:9", "9:16", "1:1"]


class PlatformRequest(BaseModel):
    """Base for all action request models."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def to_wire(self) -> dict[str, Any]:
        """
        Provider request body. Lookup requests such as KlingStatusRequest
        only fill the URL path and have no body.
        """
        raise NotImplementedError(f"{self.__class__.__name__} has no request body")


class PromptRequest(PlatformRequest):
    prompt: str = Field(..., description="Generation prompt")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


# OpenAI


class OpenAIChatRequest(PromptRequest):
    model: str = "gpt-4"
    max_tokens: int = Field(1000, alias="maxTokens", gt=0)
    temperature: float = Field(0.7, ge=0, le=2)

    def to_wire(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": self.prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


class OpenAIImageRequest(PromptRequest):
    model: Literal["dall-e-2", "dall-e-3"] = "dall-e-3"
    size: Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"] = "1024x1024"
    quality: Literal["standard", "hd"] = "standard"
    n: int = Field(1, ge=1, le=10)

    def to_wire(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.prompt,
            "size": self.size,
            "quality": self.quality,
            "n": self.n,
        }


# Gemini


class GeminiTextRequest(PromptRequest):
    model: str = "gemini-pro"
    temperature: Optional[float] = Field(None, ge=0, le=2)
    max_output_tokens: Optional[int] = Field(None, alias="maxOutputTokens", gt=0)

    def to_wire(self) -> dict[str, Any]:
        body: dict[str, Any] = {"contents": [{"parts": [{"text": self.prompt}]}]}
        generation_config = {}
        if self.temperature is not None:
            generation_config["temperature"] = self.temperature
        if self.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = self.max_output_tokens
        if generation_config:
            body["generationConfig"] = generation_config
        return body


class GeminiVisionRequest(PromptRequest):
    image_data: str = Field(..., alias="imageData", min_length=1, description="Base64 image")
    mime_type: str = Field("image/jpeg", alias="mimeType")
    model: str = "gemini-pro-vision"

    def to_wire(self) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": self.prompt},
                        {"inline_data": {"mime_type": self.mime_type, "data": self.image_data}},
                    ]
                }
            ]
        }


# Seedream


class SeedreamImageRequest(PromptRequest):
    """Only parameters the caller set are forwarded, besides model and prompt."""

    model: str = "seedream-4-0-250828"
    negative_prompt: Optional[str] = None
    image_url: Optional[list[str]] = None
    mask: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[str] = None
    aspect_ratio: Optional[str] = None
    num_images: Optional[int] = None
    guidance_scale: Optional[float] = None
    steps: Optional[int] = None
    seed: Optional[int] = None
    scheduler: Optional[str] = None
    style_strength: Optional[float] = None
    color_preserve: Optional[bool] = None
    contrast_enhance: Optional[bool] = None
    prompt_language: Optional[str] = None
    response_format: Optional[str] = None
    watermark: Optional[bool] = None
    output_type: Optional[str] = None
    enable_face_beautify: Optional[bool] = None
    enable_artifact_fix: Optional[bool] = None
    sequential_image_generation: Optional[str] = None
    stream: Optional[bool] = None
    metadata: Optional[Any] = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SeedreamUpscaleRequest(PlatformRequest):
    image_url: str = Field(..., alias="imageUrl", min_length=1)
    scale_factor: int = Field(2, alias="scaleFactor", ge=1)

    def to_wire(self) -> dict[str, Any]:
        return {"image_url": self.image_url, "scale_factor": self.scale_factor}


# Video (long-running jobs)


class KlingVideoRequest(PromptRequest):
    duration: int = Field(5, gt=0, description="Clip length in seconds (5 or 10)")
    aspect_ratio: AspectRatio = Field("16:9", alias="aspectRatio")
    mode: Literal["standard", "pro"] = "standard"

    def to_wire(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "duration": self.duration,
            "aspect_ratio": self.aspect_ratio,
            "mode": self.mode,
        }


class KlingStatusRequest(PlatformRequest):
    task_id: str = Field(..., alias="taskId", min_length=1)


class VeoVideoRequest(PromptRequest):
    duration: int = Field(10, gt=0, description="Clip length in seconds")
    resolution: Literal["720p", "1080p"] = "1080p"
    aspect_ratio: AspectRatio = Field("16:9", alias="aspectRatio")

    def to_wire(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "videoConfig": {
                "duration": self.duration,
                "resolution": self.resolution,
                "aspectRatio": self.aspect_ratio,
            },
        }
