"""
sumosearch - Run Sumo Logic Search Job API searches from Python.

Quick Start
-----------
    import time
    from sumosearch import SearchClient, SearchRequest

    client = SearchClient()
    job = client.submit(SearchRequest(
        query="_sourceCategory=prod/app error",
        from_time="2024-01-01T00:00:00",
        to_time="2024-01-01T01:00:00",
        time_zone="UTC",
    ))

    status = client.get_status(job)
    while not status.is_terminal:
        time.sleep(5)
        status = client.get_status(job)

    page = client.get_results(job, offset=0, limit=100)
    df = page.to_dataframe()

Configuration
-------------
Set these environment variables (or use a .env file):

    SUMO_API_ACCESS_BASE64  - base64 of "access_id:access_key"
    SUMO_API_HOST           - API endpoint for your deployment
    SUMO_TIMEOUT            - Default request timeout in seconds (optional)

Job Lifecycle
-------------
    NOT_STARTED -> GATHERING_RESULTS -> DONE_GATHERING_RESULTS
    GATHERING_RESULTS -> FORCE_PAUSED
    any non-terminal state -> CANCELED

The client polls exactly once per get_status() call; the caller owns the
loop, the delay between polls and when to give up.

Exceptions
----------
    AuthenticationError   - Credential rejected
    RequestRejectedError  - Malformed query or parameters (see code/message)
    JobNotFoundError      - Job ID unknown or expired
    RequestFailedError    - Any other status, transport or decode failure
    RateLimitError        - Too many requests (see retry_after)
"""

__version__ = "0.1.0"

# Enable nested asyncio event loops (required for Jupyter notebooks)
import nest_asyncio
nest_asyncio.apply()

from sumosearch.client import SearchClient
from sumosearch.config import SumoSettings
from sumosearch.job import HistogramBucket, JobHandle, JobState, JobStatus, SearchRequest
from sumosearch.results import ResultField, ResultMessage, ResultPage
from sumosearch.exceptions import (
    SumoSearchError,
    AuthenticationError,
    RequestRejectedError,
    JobNotFoundError,
    RequestFailedError,
    RateLimitError,
)

__all__ = [
    "SearchClient",
    "SumoSettings",
    "SearchRequest",
    "JobHandle",
    "JobState",
    "JobStatus",
    "HistogramBucket",
    "ResultField",
    "ResultMessage",
    "ResultPage",
    "SumoSearchError",
    "AuthenticationError",
    "RequestRejectedError",
    "JobNotFoundError",
    "RequestFailedError",
    "RateLimitError",
    "__version__",
]
