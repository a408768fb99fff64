"""
Job state model for provider-side long-running operations.

A Job starts in ``pending`` and moves exactly once into one of the
terminal states. Nothing here is persisted; a job lives only as long as
the request that created it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from .exceptions import (
    InvalidTransitionError,
    JobError,
    NotConfiguredError,
    PollTimeoutError,
    ProviderFailure,
    SubmissionError,
)

DEFAULT_TIMEOUT_MESSAGE = "Video generation timeout"


class JobStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


TERMINAL_STATES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.TIMED_OUT})


class ErrorKind(str, Enum):
    """Classification attached to every unsuccessful outcome."""

    VALIDATION = "validation"
    NOT_CONFIGURED = "not_configured"
    SUBMISSION = "submission"
    UPSTREAM = "upstream"
    PROVIDER_FAILURE = "provider_failure"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class PollConfig:
    """
    Fixed-interval polling budget for one provider.

    Attributes:
        interval_ms: Wait before each status check
        max_attempts: Upper bound on status checks
        timeout_message: Error message used when the budget runs out
    """

    interval_ms: int = 5000
    max_attempts: int = 60
    timeout_message: str = DEFAULT_TIMEOUT_MESSAGE

    def __post_init__(self):
        if self.interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000

    @property
    def worst_case_ms(self) -> int:
        """Total wait before a forced timeout, ignoring request latency."""
        return self.interval_ms * self.max_attempts


@dataclass(frozen=True)
class JobHandle:
    """Provider-assigned job identifier returned by a successful submission."""

    job_id: str
    provider: str
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class StatusCheck:
    """Provider status response mapped onto the job state vocabulary."""

    status: JobStatus
    payload: Any = None
    error_message: Optional[str] = None

    @classmethod
    def pending(cls) -> "StatusCheck":
        return cls(JobStatus.PENDING)

    @classmethod
    def completed(cls, payload: Any) -> "StatusCheck":
        return cls(JobStatus.COMPLETED, payload=payload)

    @classmethod
    def failed(cls, message: str) -> "StatusCheck":
        return cls(JobStatus.FAILED, error_message=message)


@dataclass
class Job:
    """One provider operation tracked for the lifetime of a request."""

    job_id: str
    provider: str
    submitted_at: datetime
    status: JobStatus = JobStatus.PENDING
    result: Any = None
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    status_checks: int = 0

    @classmethod
    def from_handle(cls, handle: JobHandle) -> "Job":
        return cls(
            job_id=handle.job_id,
            provider=handle.provider,
            submitted_at=handle.submitted_at,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def complete(self, result: Any) -> None:
        self._finish(JobStatus.COMPLETED)
        self.result = result

    def fail(self, message: str, kind: ErrorKind = ErrorKind.PROVIDER_FAILURE) -> None:
        self._finish(JobStatus.FAILED)
        self.error_message = message
        self.error_kind = kind

    def time_out(self, message: str = DEFAULT_TIMEOUT_MESSAGE) -> None:
        self._finish(JobStatus.TIMED_OUT)
        self.error_message = message
        self.error_kind = ErrorKind.TIMEOUT

    def _finish(self, status: JobStatus) -> None:
        if self.status is not JobStatus.PENDING:
            raise InvalidTransitionError(
                f"Job {self.job_id} is already {self.status.value}, cannot move to {status.value}"
            )
        self.status = status


_KIND_EXCEPTIONS = {
    ErrorKind.NOT_CONFIGURED: NotConfiguredError,
    ErrorKind.SUBMISSION: SubmissionError,
    ErrorKind.PROVIDER_FAILURE: ProviderFailure,
    ErrorKind.TIMEOUT: PollTimeoutError,
}


@dataclass(frozen=True)
class JobOutcome:
    """
    Terminal result of a submit-and-poll run.

    ``job`` is None when the run never got past submission; in that case
    ``status_checks`` is always zero.
    """

    provider: str
    status: JobStatus
    duration_ms: int
    result: Any = None
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    status_code: Optional[int] = None
    job: Optional[Job] = None

    @property
    def success(self) -> bool:
        return self.status is JobStatus.COMPLETED

    @property
    def job_id(self) -> Optional[str]:
        return self.job.job_id if self.job else None

    @property
    def status_checks(self) -> int:
        return self.job.status_checks if self.job else 0

    @classmethod
    def from_job(cls, job: Job, duration_ms: int) -> "JobOutcome":
        return cls(
            provider=job.provider,
            status=job.status,
            duration_ms=duration_ms,
            result=job.result,
            error_message=job.error_message,
            error_kind=job.error_kind,
            job=job,
        )

    @classmethod
    def rejected(cls, provider: str, error: JobError, duration_ms: int) -> "JobOutcome":
        """Outcome for a run that failed before a job id was obtained."""
        return cls(
            provider=provider,
            status=JobStatus.FAILED,
            duration_ms=duration_ms,
            error_message=error.message,
            error_kind=ErrorKind(error.kind),
            status_code=error.status_code,
        )

    def raise_for_status(self) -> None:
        if self.success:
            return
        exc_class = _KIND_EXCEPTIONS.get(self.error_kind, JobError)
        raise exc_class(self.error_message or "Job failed", status_code=self.status_code)
