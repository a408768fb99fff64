"""Pydantic model for usage log entries."""

from typing import Optional

from pydantic import BaseModel, Field


class UsageLog(BaseModel):
    """
    One immutable usage record, written after every relayed call.

    Attributes:
        platform: Platform identifier
        api_key_id: Id of the stored key used, "env" for environment keys
        endpoint: Provider endpoint path
        method: HTTP method of the relayed call
        model: Model name, if the action has one
        status_code: Upstream status (200 on success)
        success: Whether the call succeeded
        error_message: Failure reason
        tokens_used: Token count reported by the provider
        cost: Reserved for provider cost reporting
        duration: Elapsed milliseconds
        created_at: ISO timestamp
    """

    id: str
    platform: str
    api_key_id: str = Field("default", alias="apiKeyId")
    endpoint: str
    method: str = "POST"
    model: Optional[str] = None
    status_code: int = Field(..., alias="statusCode")
    success: bool
    error_message: Optional[str] = Field(None, alias="errorMessage")
    tokens_used: Optional[int] = Field(None, alias="tokensUsed")
    cost: Optional[float] = None
    duration: Optional[int] = None
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}
