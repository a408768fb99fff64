"""Custom exceptions for the long-running job engine."""

from typing import Optional


class JobError(Exception):
    """Base exception for job submission and tracking errors."""

    kind = "upstream"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidRequestError(JobError):
    """Request is missing required fields or carries invalid values."""

    kind = "validation"


class NotConfiguredError(JobError):
    """No credential could be resolved for the platform."""

    kind = "not_configured"


class SubmissionError(JobError):
    """Provider rejected the job creation call."""

    kind = "submission"


class ProviderFailure(JobError):
    """Provider reported the job as failed."""

    kind = "provider_failure"


class PollTimeoutError(JobError):
    """Attempt budget exhausted before the job reached a terminal state."""

    kind = "timeout"


class TransientPollError(JobError):
    """Status check failed in a way that may succeed on the next attempt."""

    pass


class StatusCheckError(JobError):
    """Status check was rejected by the provider and will not be retried."""

    pass


class InvalidTransitionError(JobError):
    """Attempted to move a job out of a terminal state."""

    pass
