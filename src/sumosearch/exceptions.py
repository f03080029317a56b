"""Exception hierarchy for sumosearch."""

from typing import Optional


class SumoSearchError(Exception):
    """Base exception for all sumosearch errors."""
    pass


class AuthenticationError(SumoSearchError):
    """
    The search service rejected the Basic-auth credential (HTTP 401).

    Not retryable as-is. Common causes:
    - SUMO_API_ACCESS_BASE64 is not base64 of access_id:access_key
    - The access key was revoked or disabled
    - The endpoint belongs to a different deployment than the key
    """
    pass


class RequestRejectedError(SumoSearchError):
    """
    The search service rejected the request as malformed (HTTP 400).

    The server-provided code and message are kept verbatim on the
    exception. Change the query or time range before resubmitting.
    """

    def __init__(self, code: str, message: str):
        super().__init__(f"Search request rejected: {code}: {message}")
        self.code = code
        self.message = message


class JobNotFoundError(SumoSearchError):
    """
    The search job ID is unknown to the server (HTTP 404).

    Either the ID is wrong or the job expired server-side. Submit a new
    search; the same handle will keep failing.
    """

    def __init__(self, job_id: str):
        super().__init__(f"Search job {job_id} not found")
        self.job_id = job_id


class RequestFailedError(SumoSearchError):
    """
    Any other non-success response or transport failure.

    Covers unexpected status codes, connection errors, timeouts and
    undecodable response bodies. status_code is None when no response
    was received; cause holds the underlying exception, if any.
    Whether to retry is up to the caller.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class RateLimitError(RequestFailedError):
    """
    API rate limit exceeded (HTTP 429).

    The retry_after attribute carries the server's Retry-After hint in
    seconds. The client never waits or retries on its own.
    """

    def __init__(self, message: str, retry_after: int = 60):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after
