"""Pydantic models for API request/response schemas."""

from .action_result import ActionResult
from .api_key import ApiKey, ApiKeySummary, CreateKeyRequest, UpdateKeyRequest
from .platform_info import ConnectionStatus, PlatformInfo, PlatformListResponse
from .usage_log import UsageLog

__all__ = [
    "ActionResult",
    "ApiKey",
    "ApiKeySummary",
    "CreateKeyRequest",
    "UpdateKeyRequest",
    "ConnectionStatus",
    "PlatformInfo",
    "PlatformListResponse",
    "UsageLog",
]
