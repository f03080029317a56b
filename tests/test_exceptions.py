"""Tests for sumosearch.exceptions module."""

import pytest

from sumosearch.exceptions import (
    SumoSearchError,
    AuthenticationError,
    RequestRejectedError,
    JobNotFoundError,
    RequestFailedError,
    RateLimitError,
)


class TestExceptionHierarchy:
    """Tests for exception inheritance and attributes."""

    def test_all_exceptions_inherit_from_sumosearch_error(self):
        """All custom exceptions inherit from SumoSearchError."""
        exceptions = [
            AuthenticationError,
            RequestRejectedError,
            JobNotFoundError,
            RequestFailedError,
            RateLimitError,
        ]
        for exc_class in exceptions:
            assert issubclass(exc_class, SumoSearchError)

    def test_failure_kinds_are_distinct(self):
        """Only RateLimitError is a kind of RequestFailedError."""
        for exc_class in (AuthenticationError, RequestRejectedError, JobNotFoundError):
            assert not issubclass(exc_class, RequestFailedError)
        assert issubclass(RateLimitError, RequestFailedError)

    def test_catching_base_catches_all(self):
        """Catching SumoSearchError catches all derived exceptions."""
        with pytest.raises(SumoSearchError):
            raise AuthenticationError("auth failed")

        with pytest.raises(SumoSearchError):
            raise JobNotFoundError("job-1")


class TestRequestRejectedError:
    """Tests for RequestRejectedError attributes."""

    def test_stores_code_and_message(self):
        exc = RequestRejectedError("X", "Y")
        assert exc.code == "X"
        assert exc.message == "Y"
        assert "X" in str(exc)
        assert "Y" in str(exc)


class TestJobNotFoundError:
    """Tests for JobNotFoundError attributes."""

    def test_stores_job_id(self):
        exc = JobNotFoundError("job-123")
        assert exc.job_id == "job-123"
        assert "job-123" in str(exc)


class TestRequestFailedError:
    """Tests for RequestFailedError attributes."""

    def test_stores_status_and_cause(self):
        cause = ValueError("bad json")
        exc = RequestFailedError("decode failed", status_code=200, cause=cause)
        assert exc.status_code == 200
        assert exc.cause is cause
        assert str(exc) == "decode failed"

    def test_defaults_to_none(self):
        exc = RequestFailedError("connection refused")
        assert exc.status_code is None
        assert exc.cause is None


class TestRateLimitError:
    """Tests for RateLimitError attributes."""

    def test_stores_retry_after(self):
        exc = RateLimitError("Too many requests", retry_after=120)
        assert exc.retry_after == 120
        assert exc.status_code == 429
        assert str(exc) == "Too many requests"

    def test_retry_after_defaults_to_60(self):
        exc = RateLimitError("Too many requests")
        assert exc.retry_after == 60
