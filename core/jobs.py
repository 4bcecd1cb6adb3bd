"""Submit and wait on long-running annotation operations.

The service writes the job's output to storage, so waiting only yields a
completion signal. A timeout is reported as JobState.TIMED_OUT rather
than raised, and the remote job is never cancelled.
"""

import concurrent.futures
import logging
import time

from google.api_core import exceptions as api_exceptions
from google.cloud import vision

from .config import DEFAULT_WAIT_TIMEOUT
from .errors import ServiceError
from .types import AsyncJobHandle, JobOutcome, JobState

logger = logging.getLogger(__name__)


def submit_async_job(
    client: vision.ImageAnnotatorClient,
    file_request: vision.AsyncAnnotateFileRequest,
) -> AsyncJobHandle:
    """Submit one asynchronous file request.

    Args:
        client: Open annotator client.
        file_request: Request built by to_file_request.

    Returns:
        AsyncJobHandle for the submitted operation.

    Raises:
        ServiceError: If the service rejects the submission.
    """
    try:
        operation = client.async_batch_annotate_files(requests=[file_request])
    except api_exceptions.GoogleAPIError as e:
        raise ServiceError(f"Failed to submit annotation job: {e}") from e

    name = getattr(getattr(operation, "operation", None), "name", "") or "<unnamed>"
    logger.info(f"Submitted annotation job {name}")
    return AsyncJobHandle(name=name, operation=operation)


def job_state(handle: AsyncJobHandle) -> JobState:
    """Poll once without blocking.

    Raises:
        ServiceError: If the status poll itself fails.
    """
    try:
        if not handle.operation.done():
            return JobState.PENDING
        failed = handle.operation.exception() is not None
    except api_exceptions.GoogleAPIError as e:
        raise ServiceError(f"Failed to poll job {handle.name}: {e}") from e
    return JobState.FAILED if failed else JobState.COMPLETED


def wait_for_job(handle: AsyncJobHandle, timeout: float = DEFAULT_WAIT_TIMEOUT) -> JobOutcome:
    """Block until the job completes, fails or the timeout elapses.

    Args:
        handle: Handle returned by submit_async_job.
        timeout: Seconds to wait; 0 checks the current state only.

    Returns:
        JobOutcome with COMPLETED, TIMED_OUT or FAILED.
    """
    if timeout <= 0:
        state = job_state(handle)
        if state is JobState.PENDING:
            logger.warning(f"Job {handle.name} not done and no wait allowed")
            return JobOutcome(JobState.TIMED_OUT, f"Job {handle.name} has not completed")
        if state is JobState.FAILED:
            return JobOutcome(JobState.FAILED, str(handle.operation.exception()))
        return JobOutcome(JobState.COMPLETED)

    started = time.monotonic()
    try:
        handle.operation.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        logger.warning(f"Job {handle.name} did not complete within {timeout}s")
        return JobOutcome(
            JobState.TIMED_OUT,
            f"Job {handle.name} did not complete within {timeout} seconds",
        )
    except api_exceptions.GoogleAPIError as e:
        logger.error(f"Job {handle.name} failed: {e}")
        return JobOutcome(JobState.FAILED, str(e))

    logger.info(f"Job {handle.name} completed in {time.monotonic() - started:.1f}s")
    return JobOutcome(JobState.COMPLETED)
