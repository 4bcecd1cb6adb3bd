"""Tests for core/jobs.py - long-running operation waiter."""

import concurrent.futures
from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as api_exceptions
from google.cloud import vision

from core.errors import JobFailedError, ServiceError, WaitTimeoutError
from core.jobs import job_state, submit_async_job, wait_for_job
from core.types import AsyncJobHandle, JobOutcome, JobState


def _operation(done: bool = True, exception=None) -> MagicMock:
    operation = MagicMock()
    operation.operation.name = "operations/123"
    operation.done.return_value = done
    operation.exception.return_value = exception
    operation.result.return_value = vision.AsyncBatchAnnotateFilesResponse()
    return operation


class TestSubmitAsyncJob:
    """Tests for submit_async_job."""

    def test_returns_handle(self):
        """Should wrap the operation in a named handle."""
        client = MagicMock()
        operation = _operation()
        client.async_batch_annotate_files.return_value = operation
        request = vision.AsyncAnnotateFileRequest()

        handle = submit_async_job(client, request)

        assert handle.name == "operations/123"
        assert handle.operation is operation
        client.async_batch_annotate_files.assert_called_once_with(requests=[request])

    def test_submission_failure(self):
        """A rejected submission should raise ServiceError."""
        client = MagicMock()
        client.async_batch_annotate_files.side_effect = api_exceptions.InvalidArgument("bad")

        with pytest.raises(ServiceError, match="bad"):
            submit_async_job(client, vision.AsyncAnnotateFileRequest())


class TestWaitForJob:
    """Tests for wait_for_job."""

    def test_completed(self):
        """A job finishing within the timeout should be COMPLETED."""
        operation = _operation()
        outcome = wait_for_job(AsyncJobHandle("op", operation), timeout=180)

        assert outcome.state is JobState.COMPLETED
        assert outcome.error is None
        operation.result.assert_called_once_with(timeout=180)

    def test_timeout_is_reported(self):
        """Exceeding the bound should be TIMED_OUT, not an exception."""
        operation = _operation(done=False)
        operation.result.side_effect = concurrent.futures.TimeoutError()

        outcome = wait_for_job(AsyncJobHandle("op", operation), timeout=1)

        assert outcome.state is JobState.TIMED_OUT
        assert "1 seconds" in outcome.error
        operation.cancel.assert_not_called()

    def test_zero_timeout_pending(self):
        """Timeout 0 against an unfinished job should be TIMED_OUT without blocking."""
        operation = _operation(done=False)

        outcome = wait_for_job(AsyncJobHandle("op", operation), timeout=0)

        assert outcome.state is JobState.TIMED_OUT
        operation.result.assert_not_called()

    def test_zero_timeout_done(self):
        """Timeout 0 against a finished job should be COMPLETED."""
        outcome = wait_for_job(AsyncJobHandle("op", _operation(done=True)), timeout=0)
        assert outcome.state is JobState.COMPLETED

    def test_zero_timeout_failed(self):
        """Timeout 0 against a failed job should be FAILED."""
        operation = _operation(done=True, exception=api_exceptions.InternalServerError("x"))
        outcome = wait_for_job(AsyncJobHandle("op", operation), timeout=0)
        assert outcome.state is JobState.FAILED

    def test_remote_failure(self):
        """A job finishing with an error should be FAILED with its message."""
        operation = _operation()
        operation.result.side_effect = api_exceptions.InternalServerError("backend exploded")

        outcome = wait_for_job(AsyncJobHandle("op", operation), timeout=10)

        assert outcome.state is JobState.FAILED
        assert "backend exploded" in outcome.error

    def test_retry_exhausted_is_failed(self):
        """A RetryError while waiting should be FAILED, not raised."""
        operation = _operation()
        operation.result.side_effect = api_exceptions.RetryError("Deadline exceeded", cause=None)

        outcome = wait_for_job(AsyncJobHandle("op", operation), timeout=10)

        assert outcome.state is JobState.FAILED
        assert "Deadline exceeded" in outcome.error


class TestJobState:
    """Tests for job_state and JobOutcome."""

    def test_pending(self):
        """Unfinished operations are PENDING."""
        assert job_state(AsyncJobHandle("op", _operation(done=False))) is JobState.PENDING

    def test_raise_for_state(self):
        """Only COMPLETED should pass raise_for_state."""
        completed = JobOutcome(JobState.COMPLETED)
        assert completed.raise_for_state() is completed

        with pytest.raises(WaitTimeoutError):
            JobOutcome(JobState.TIMED_OUT, "slow").raise_for_state()
        with pytest.raises(JobFailedError, match="broken"):
            JobOutcome(JobState.FAILED, "broken").raise_for_state()

    def test_poll_failure_raises(self):
        """A failed status poll should raise ServiceError, not escape raw."""
        operation = _operation()
        operation.done.side_effect = api_exceptions.RetryError("Deadline exceeded", cause=None)

        with pytest.raises(ServiceError, match="Deadline exceeded"):
            job_state(AsyncJobHandle("op", operation))
        with pytest.raises(ServiceError):
            wait_for_job(AsyncJobHandle("op", operation), timeout=0)
