"""Pydantic models for the platform catalog."""

from typing import Optional

from pydantic import BaseModel, Field


class PlatformInfo(BaseModel):
    """
    One supported platform as declared in platforms.yaml.
    """

    name: str = Field(..., description="Platform identifier (e.g., 'kling')")
    displayName: str = Field(..., description="Human-readable name for UI display")
    envKey: str = Field(..., description="Environment variable holding a fallback key")
    category: str = Field(..., description="text, image or video")
    actions: list[str] = Field(..., description="Actions accepted by the platform endpoint")
    description: Optional[str] = Field(None, description="Short summary")


class PlatformListResponse(BaseModel):
    """Response model for GET /api/platforms endpoint."""

    platforms: list[PlatformInfo] = Field(..., description="Supported platforms")


class ConnectionStatus(BaseModel):
    """Credential status for one platform."""

    platform: str
    connected: bool
    keyName: Optional[str] = None
    source: Optional[str] = Field(None, description="'database' or 'environment'")
