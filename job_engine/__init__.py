"""Long-running provider job engine: submit, poll until terminal, classify."""

from .adapter import JobAdapter
from .exceptions import (
    InvalidRequestError,
    InvalidTransitionError,
    JobError,
    NotConfiguredError,
    PollTimeoutError,
    ProviderFailure,
    StatusCheckError,
    SubmissionError,
    TransientPollError,
)
from .job import (
    DEFAULT_TIMEOUT_MESSAGE,
    ErrorKind,
    Job,
    JobHandle,
    JobOutcome,
    JobStatus,
    PollConfig,
    StatusCheck,
)
from .poller import poll_job
from .tracker import JobTracker

__all__ = [
    "JobAdapter",
    "JobTracker",
    "poll_job",
    "Job",
    "JobHandle",
    "JobOutcome",
    "JobStatus",
    "PollConfig",
    "StatusCheck",
    "ErrorKind",
    "DEFAULT_TIMEOUT_MESSAGE",
    "JobError",
    "InvalidRequestError",
    "NotConfiguredError",
    "SubmissionError",
    "ProviderFailure",
    "PollTimeoutError",
    "TransientPollError",
    "StatusCheckError",
    "InvalidTransitionError",
]
