"""
Fixed-interval status poller.

Drives a pending Job to a terminal state: wait, check, classify, repeat,
up to ``PollConfig.max_attempts`` status checks.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from .exceptions import StatusCheckError, TransientPollError
from .job import ErrorKind, Job, JobHandle, JobStatus, PollConfig, StatusCheck

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


async def poll_job(
    job: Job,
    handle: JobHandle,
    fetch_status: Callable[[JobHandle], Awaitable[Any]],
    classify: Callable[[Any], StatusCheck],
    config: PollConfig,
    sleep: Sleep = asyncio.sleep,
    default_failure_message: str = "Video generation failed",
) -> Job:
    """
    Poll until the job reaches a terminal state.

    Transient status-check errors use up an attempt and polling continues.
    A StatusCheckError ends the job as failed. Task cancellation is not
    caught here and propagates to the caller with the job still pending.

    Args:
        job: Pending job to drive
        handle: Handle passed to ``fetch_status``
        fetch_status: One status call against the provider
        classify: Maps the status payload to a StatusCheck
        config: Interval and attempt budget
        sleep: Awaitable sleep, injectable for tests
        default_failure_message: Used when the provider gives no reason

    Returns:
        Job: The same job, now terminal
    """
    try:
        for attempt in range(1, config.max_attempts + 1):
            await sleep(config.interval_seconds)

            job.status_checks += 1
            try:
                payload = await fetch_status(handle)
            except TransientPollError as e:
                logger.warning(
                    f"Transient status error for {job.provider} job {job.job_id} "
                    f"(attempt {attempt}/{config.max_attempts}): {e.message}"
                )
                continue
            except StatusCheckError as e:
                logger.error(f"Status check rejected for {job.provider} job {job.job_id}: {e.message}")
                job.fail(e.message, ErrorKind.PROVIDER_FAILURE)
                return job

            check = classify(payload)

            if check.status is JobStatus.COMPLETED:
                job.complete(check.payload)
                logger.info(
                    f"{job.provider} job {job.job_id} completed after {attempt} status check(s)"
                )
                return job

            if check.status is JobStatus.FAILED:
                job.fail(check.error_message or default_failure_message)
                logger.error(f"{job.provider} job {job.job_id} failed: {job.error_message}")
                return job

        job.time_out(config.timeout_message)
        logger.error(
            f"{job.provider} job {job.job_id} timed out after {config.max_attempts} status checks"
        )
        return job

    except asyncio.CancelledError:
        logger.warning(f"Polling cancelled for {job.provider} job {job.job_id}")
        raise
