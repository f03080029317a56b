"""SearchClient - main entry point for sumosearch."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, NoReturn, Optional, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from sumosearch.auth import build_headers, capture_cookies, cookieless_jar
from sumosearch.config import SumoSettings
from sumosearch.endpoint import resolve_url
from sumosearch.exceptions import (
    AuthenticationError,
    JobNotFoundError,
    RateLimitError,
    RequestFailedError,
    RequestRejectedError,
)
from sumosearch.job import JobHandle, JobState, JobStatus, SearchRequest
from sumosearch.results import ResultPage

logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class _SubmitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    status: int = 202
    code: str = ""
    message: str = ""


class _ErrorBody(BaseModel):
    code: str = ""
    message: str = ""


# -----------------------------------------------------------------------------
# Response handling
# -----------------------------------------------------------------------------

async def _send(
    http: httpx.AsyncClient,
    method: str,
    url: str,
    headers: dict,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> httpx.Response:
    """Issue one request, mapping transport failures to RequestFailedError."""
    if timeout is not None:
        kwargs["timeout"] = timeout
    logger.debug("%s %s", method, url)
    try:
        response = await http.request(method, url, headers=headers, **kwargs)
    except httpx.RequestError as e:
        raise RequestFailedError(f"{method} {url} failed: {e!r}", cause=e) from e
    logger.debug("%s %s -> %d", method, url, response.status_code)
    return response


def _decode(response: httpx.Response, model: type[ModelT]) -> ModelT:
    """Validate a JSON response body, mapping decode errors to RequestFailedError."""
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        raise RequestFailedError(
            f"Could not decode {model.__name__.lstrip('_')} from response: {e}",
            status_code=response.status_code,
            cause=e,
        ) from e


def _retry_after(response: httpx.Response) -> int:
    try:
        return int(response.headers.get("Retry-After", 60))
    except ValueError:
        # HTTP-date form
        return 60


def _raise_for_status(response: httpx.Response, job_id: Optional[str] = None) -> NoReturn:
    """
    Raise the error matching an unexpected response status.

    Args:
        response: Response that did not have the expected success status
        job_id: Job the request addressed; 404 becomes JobNotFoundError when set

    Raises:
        JobNotFoundError: On 404 for a job-addressed request
        RateLimitError: On 429
        RequestFailedError: On anything else
    """
    status = response.status_code
    if status == 404 and job_id is not None:
        raise JobNotFoundError(job_id)
    if status == 429:
        raise RateLimitError("Rate limit exceeded", retry_after=_retry_after(response))
    raise RequestFailedError(
        f"Unexpected HTTP status {status}: {response.text[:200]}",
        status_code=status,
    )


# -----------------------------------------------------------------------------
# Search job operations
# -----------------------------------------------------------------------------

async def submit_search(
    http: httpx.AsyncClient,
    endpoint: str,
    access_token: str,
    request: SearchRequest,
    timeout: Optional[float] = None,
) -> JobHandle:
    """
    Submit a search and return a handle to the new job.

    Args:
        http: httpx.AsyncClient used for the request
        endpoint: API base URL
        access_token: Pre-encoded base64 of "access_id:access_key"
        request: Query and time range to search
        timeout: Optional seconds bounding this call

    Returns:
        JobHandle holding the job ID and its session cookies

    Raises:
        AuthenticationError: If the credential is rejected (401)
        RequestRejectedError: If the request is malformed (400)
        RateLimitError: If the rate limit is exceeded (429)
        RequestFailedError: On any other status, transport or decode failure
    """
    url = resolve_url(endpoint, "search/jobs")
    response = await _send(
        http,
        "POST",
        url,
        build_headers(access_token),
        timeout=timeout,
        json=request.to_payload(),
    )

    if response.status_code == 202:
        body = _decode(response, _SubmitResponse)
        job = JobHandle(
            id=body.id,
            endpoint=endpoint,
            access_token=SecretStr(access_token),
            cookies=capture_cookies(response),
            status=body.status,
            code=body.code,
            message=body.message,
        )
        logger.info("Submitted search job %s", job.id)
        return job

    if response.status_code == 401:
        raise AuthenticationError(f"Credential rejected by {url}")

    if response.status_code == 400:
        error = _decode(response, _ErrorBody)
        raise RequestRejectedError(error.code, error.message)

    _raise_for_status(response)


async def fetch_status(
    http: httpx.AsyncClient,
    job: JobHandle,
    timeout: Optional[float] = None,
) -> JobStatus:
    """
    Poll a job once and return its decoded status.

    Side-effect free; call it as often as the caller's loop needs.

    Args:
        http: httpx.AsyncClient used for the request
        job: Handle returned by submit_search
        timeout: Optional seconds bounding this call

    Returns:
        JobStatus for this poll

    Raises:
        JobNotFoundError: If the server does not know the job (404)
        RateLimitError: If the rate limit is exceeded (429)
        RequestFailedError: On any other status, transport or decode failure
    """
    response = await _send(http, "GET", job.url(), job.headers(), timeout=timeout)

    if response.status_code != 200:
        _raise_for_status(response, job_id=job.id)

    status = _decode(response, JobStatus)
    if status.state is JobState.UNRECOGNIZED:
        logger.warning("Job %s reported unrecognized state %r", job.id, status.raw_state)
    logger.debug(
        "Job %s: %s (%d messages, %d records)",
        job.id, status.raw_state, status.message_count, status.record_count,
    )
    return status


async def fetch_results(
    http: httpx.AsyncClient,
    job: JobHandle,
    offset: int,
    limit: int,
    timeout: Optional[float] = None,
) -> ResultPage:
    """
    Fetch one page of messages from a job.

    Works whether or not the job is finished; a running job returns the
    messages gathered so far. offset and limit are sent as given.

    Args:
        http: httpx.AsyncClient used for the request
        job: Handle returned by submit_search
        offset: Zero-based index of the first message
        limit: Maximum number of messages to return
        timeout: Optional seconds bounding this call

    Returns:
        ResultPage with the field list and messages in server order

    Raises:
        RateLimitError: If the rate limit is exceeded (429)
        RequestFailedError: On any other status, transport or decode failure
    """
    response = await _send(
        http,
        "GET",
        job.url("messages"),
        job.headers(),
        timeout=timeout,
        params={"offset": offset, "limit": limit},
    )

    if response.status_code != 200:
        _raise_for_status(response)

    return _decode(response, ResultPage)


class SearchClient:
    """
    Client for the Sumo Logic Search Job API.

    Reads configuration from environment variables (SUMO_*) automatically.
    Provides both sync and async interfaces. The client never polls in a
    loop: callers decide how often to check a job and when to stop.

    Example:
        client = SearchClient()
        job = client.submit(SearchRequest(
            query="_sourceCategory=prod/app error",
            from_time="2024-01-01T00:00:00",
            to_time="2024-01-01T01:00:00",
        ))
        while not client.get_status(job).is_terminal:
            time.sleep(5)
        page = client.get_results(job, offset=0, limit=100)

    Async Example:
        async with SearchClient() as client:
            job = await client.submit_async(request)
            status = await client.get_status_async(job)
            page = await client.get_results_async(job, 0, 100)

    Attributes:
        settings: SumoSettings instance with API configuration
    """

    def __init__(self, settings: Optional[SumoSettings] = None):
        """
        Initialize the search client.

        Args:
            settings: Optional SumoSettings instance. If not provided,
                     settings are loaded from environment variables.
        """
        self.settings = settings or SumoSettings()
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "SearchClient":
        """Async context manager entry."""
        self._client = self._new_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the pooled connection, if one is open."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.timeout, cookies=cookieless_jar())

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create httpx client."""
        if self._client is None:
            self._client = self._new_client()
        return self._client

    def _run(self, call: Callable[[httpx.AsyncClient], Awaitable[T]]) -> T:
        """Run one call on its own event loop with a short-lived client."""
        async def _once() -> T:
            async with self._new_client() as http:
                return await call(http)
        return asyncio.run(_once())

    # -------------------------------------------------------------------------
    # Public API: Sync methods (convenience wrappers)
    # -------------------------------------------------------------------------

    def submit(self, request: SearchRequest, timeout: Optional[float] = None) -> JobHandle:
        """
        Submit a search and return a JobHandle for tracking.

        Args:
            request: Query, time range and time zone
            timeout: Optional seconds bounding this call

        Returns:
            JobHandle for polling and fetching results

        Example:
            job = client.submit(SearchRequest("error", "2024-01-01T00:00:00", "2024-01-01T00:15:00"))
            print(job.id)
        """
        return self._run(lambda http: self._submit(http, request, timeout))

    def get_status(self, job: JobHandle, timeout: Optional[float] = None) -> JobStatus:
        """
        Poll a job once.

        Args:
            job: Handle returned by submit()
            timeout: Optional seconds bounding this call

        Returns:
            JobStatus with state and progress counters
        """
        return self._run(lambda http: fetch_status(http, job, timeout))

    def get_results(
        self,
        job: JobHandle,
        offset: int,
        limit: int,
        timeout: Optional[float] = None,
    ) -> ResultPage:
        """
        Fetch one page of messages.

        Args:
            job: Handle returned by submit()
            offset: Zero-based index of the first message
            limit: Maximum number of messages to return
            timeout: Optional seconds bounding this call

        Returns:
            ResultPage with fields and messages
        """
        return self._run(lambda http: fetch_results(http, job, offset, limit, timeout))

    # -------------------------------------------------------------------------
    # Public API: Async methods
    # -------------------------------------------------------------------------

    async def submit_async(
        self,
        request: SearchRequest,
        timeout: Optional[float] = None,
    ) -> JobHandle:
        """Async version of submit()."""
        return await self._submit(self._get_client(), request, timeout)

    async def get_status_async(
        self,
        job: JobHandle,
        timeout: Optional[float] = None,
    ) -> JobStatus:
        """Async version of get_status()."""
        return await fetch_status(self._get_client(), job, timeout)

    async def get_results_async(
        self,
        job: JobHandle,
        offset: int,
        limit: int,
        timeout: Optional[float] = None,
    ) -> ResultPage:
        """Async version of get_results()."""
        return await fetch_results(self._get_client(), job, offset, limit, timeout)

    async def _submit(
        self,
        http: httpx.AsyncClient,
        request: SearchRequest,
        timeout: Optional[float],
    ) -> JobHandle:
        return await submit_search(
            http,
            self.settings.endpoint_url,
            self.settings.api_access_base64.get_secret_value(),
            request,
            timeout=timeout,
        )
