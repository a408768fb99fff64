"""Pydantic model for the normalized platform action envelope."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from job_engine import JobError, JobOutcome


class ActionResult(BaseModel):
    """
    Result of one platform action.

    Serialized by ``to_envelope()`` as
    ``{success, data?, error?, errorKind?, duration?, tokensUsed?}``.
    ``status_code`` and ``model`` are kept for usage logging only.

    Attributes:
        success: Whether the provider call succeeded
        data: Provider-shaped payload on success
        error: Failure reason
        error_kind: Failure classification (see job_engine.ErrorKind)
        duration: Elapsed milliseconds, when measurable
        tokens_used: Tokens reported by the provider
        status_code: Upstream status code for the usage log
        model: Model name for the usage log
        api_key_id: Stored key id (or "env") for the usage log
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    error_kind: Optional[str] = Field(None, alias="errorKind")
    duration: Optional[int] = None
    tokens_used: Optional[int] = Field(None, alias="tokensUsed")
    status_code: int = Field(200, exclude=True)
    model: Optional[str] = Field(None, exclude=True)
    api_key_id: Optional[str] = Field(None, exclude=True)

    model_config = {"populate_by_name": True}

    def to_envelope(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def ok(cls, data: Any, duration: Optional[int] = None, **kwargs) -> "ActionResult":
        return cls(success=True, data=data, duration=duration, **kwargs)

    @classmethod
    def from_error(cls, error: JobError, duration: Optional[int] = None, **kwargs) -> "ActionResult":
        return cls(
            success=False,
            error=error.message,
            error_kind=error.kind,
            duration=duration,
            status_code=error.status_code or 500,
            **kwargs,
        )

    @classmethod
    def from_outcome(cls, outcome: JobOutcome, **kwargs) -> "ActionResult":
        if outcome.success:
            return cls.ok(outcome.result, duration=outcome.duration_ms, **kwargs)
        return cls(
            success=False,
            error=outcome.error_message,
            error_kind=outcome.error_kind.value if outcome.error_kind else None,
            duration=outcome.duration_ms,
            status_code=outcome.status_code or 500,
            **kwargs,
        )
