"""
Submit-and-poll tracker for one long-running provider operation.
"""

import asyncio
import logging
import time
from typing import Any, Callable

from .adapter import JobAdapter
from .exceptions import NotConfiguredError, SubmissionError
from .job import Job, JobOutcome, PollConfig
from .poller import Sleep, poll_job

logger = logging.getLogger(__name__)


class JobTracker:
    """
    Runs one job through submission and polling and reports the outcome.

    Elapsed time is measured from the moment the submission is dispatched,
    so a rejected submission still reports how long the call took.
    """

    def __init__(
        self,
        adapter: JobAdapter,
        config: PollConfig,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.adapter = adapter
        self.config = config
        self._sleep = sleep
        self._clock = clock

    def _elapsed_ms(self, started: float) -> int:
        return int(round((self._clock() - started) * 1000))

    async def run(self, request: Any) -> JobOutcome:
        provider = self.adapter.provider
        started = self._clock()

        try:
            handle = await self.adapter.submit(request)
        except (NotConfiguredError, SubmissionError) as e:
            logger.error(f"{provider} submission failed: {e.message}")
            return JobOutcome.rejected(provider, e, self._elapsed_ms(started))

        logger.info(
            f"{provider} job submitted: {handle.job_id} "
            f"(interval={self.config.interval_ms}ms, max_attempts={self.config.max_attempts})"
        )

        job = Job.from_handle(handle)
        await poll_job(
            job,
            handle,
            self.adapter.fetch_status,
            self.adapter.classify_status,
            self.config,
            sleep=self._sleep,
            default_failure_message=self.adapter.default_failure_message,
        )
        return JobOutcome.from_job(job, self._elapsed_ms(started))
