"""
JobAdapter abstraction for provider-specific long-running operations.

An adapter supplies the three provider-specific pieces of the protocol:
how to submit, how to fetch status, and how to read the status payload.
The polling loop itself lives in :mod:`job_engine.poller`.
"""

from abc import ABC, abstractmethod
from typing import Any

from .job import JobHandle, StatusCheck


class JobAdapter(ABC):
    """
    Abstract base class for submit/poll provider adapters.

    Implementations:
    - KlingVideoJob: ``task_id`` + ``status`` string vocabulary
    - VeoVideoJob: operation ``name`` + ``done``/``error`` vocabulary
    """

    #: Label used in the default failure message ("<label> generation failed")
    action_label: str = "Video"

    @property
    @abstractmethod
    def provider(self) -> str:
        """Platform identifier, e.g. "kling"."""
        pass

    @abstractmethod
    async def submit(self, request: Any) -> JobHandle:
        """
        Issue the single create-job call.

        Raises:
            NotConfiguredError: If no credential can be resolved
            SubmissionError: If the provider rejects the request
        """
        pass

    @abstractmethod
    async def fetch_status(self, handle: JobHandle) -> Any:
        """
        Issue one status-check call and return the decoded body.

        Raises:
            TransientPollError: For errors worth another attempt
            StatusCheckError: For rejections that end the job
        """
        pass

    @abstractmethod
    def classify_status(self, payload: Any) -> StatusCheck:
        """Map the provider's status vocabulary onto a StatusCheck."""
        pass

    @property
    def default_failure_message(self) -> str:
        return f"{self.action_label} generation failed"
