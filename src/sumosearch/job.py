"""Search job handle, request and status types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr

from sumosearch.auth import Cookies, build_headers
from sumosearch.endpoint import job_path, normalize_endpoint, resolve_url


class JobState(str, Enum):
    """
    Lifecycle states of a search job.

    The server moves a job NOT_STARTED -> GATHERING_RESULTS and then to
    one of the terminal states. Anything the server reports that is not
    one of these five is UNRECOGNIZED; the verbatim string stays on
    JobStatus.raw_state.

    Attributes:
        NOT_STARTED: Job accepted, not yet running
        GATHERING_RESULTS: Search in progress, partial results available
        FORCE_PAUSED: Stopped at the result volume limit (terminal)
        DONE_GATHERING_RESULTS: Whole time range covered (terminal)
        CANCELED: Aborted by the caller or the system (terminal)
        UNRECOGNIZED: State string not known to this client
    """
    NOT_STARTED = "NOT STARTED"
    GATHERING_RESULTS = "GATHERING RESULTS"
    FORCE_PAUSED = "FORCE PAUSED"
    DONE_GATHERING_RESULTS = "DONE GATHERING RESULTS"
    CANCELED = "CANCELED"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def parse(cls, raw: str) -> "JobState":
        """Classify a wire state string, falling back to UNRECOGNIZED."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNRECOGNIZED

    @property
    def is_terminal(self) -> bool:
        """True once the job will not gather any more results."""
        return self in _TERMINAL_STATES

    @property
    def is_done(self) -> bool:
        """True when the entire requested time range was searched."""
        return self is JobState.DONE_GATHERING_RESULTS

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_TERMINAL_STATES = frozenset({
    JobState.FORCE_PAUSED,
    JobState.DONE_GATHERING_RESULTS,
    JobState.CANCELED,
})

_DESCRIPTIONS = {
    JobState.NOT_STARTED: "Search job has not been started yet.",
    JobState.GATHERING_RESULTS: (
        "Search job is still gathering more results, "
        "however results might already be available."
    ),
    JobState.FORCE_PAUSED: (
        "Query paused by the system at the result limit. Applies to "
        "non-aggregate queries only; the limit varies per account."
    ),
    JobState.DONE_GATHERING_RESULTS: (
        "Search job is done gathering results; "
        "the entire specified time range has been covered."
    ),
    JobState.CANCELED: "The search job has been canceled.",
    JobState.UNRECOGNIZED: "The server reported a state this client does not know.",
}


def _format_time(value: Union[str, datetime]) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class SearchRequest:
    """
    A search query over a time range.

    Attributes:
        query: Search query text, passed through unchanged
        from_time: Start of the range (ISO-8601 string, epoch millis or datetime)
        to_time: End of the range (same formats as from_time)
        time_zone: Time zone identifier, e.g. "UTC" or "PST"

    Example:
        request = SearchRequest(
            query="_sourceCategory=prod/app error",
            from_time="2024-01-01T00:00:00",
            to_time="2024-01-01T01:00:00",
            time_zone="UTC",
        )
    """

    query: str
    from_time: Union[str, datetime]
    to_time: Union[str, datetime]
    time_zone: str = "UTC"

    def to_payload(self) -> dict:
        """JSON body for the job submission request."""
        return {
            "query": self.query,
            "from": _format_time(self.from_time),
            "to": _format_time(self.to_time),
            "timeZone": self.time_zone,
        }


@dataclass(frozen=True)
class JobHandle:
    """
    A submitted search job.

    Carries everything needed to talk to the job again: its ID, the API
    endpoint and credential it was submitted with, and the session
    cookies from the submission response. Handles are immutable, so one
    handle can be polled and fetched from concurrently.

    Attributes:
        id: Job identifier assigned by the server
        endpoint: API base URL the job lives on
        cookies: Session cookies that route calls to the job's backend
        status: Status field of the submission response body
        code: Code field of the submission response body
        message: Message field of the submission response body
    """

    id: str
    endpoint: str
    access_token: SecretStr = field(repr=False)
    cookies: Cookies = ()
    status: int = 202
    code: str = ""
    message: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("JobHandle requires a non-empty job id")
        object.__setattr__(self, "endpoint", normalize_endpoint(self.endpoint))
        if isinstance(self.access_token, str):
            object.__setattr__(self, "access_token", SecretStr(self.access_token))

    def url(self, *parts: str) -> str:
        """Absolute URL of this job, or of a sub-resource of it."""
        return resolve_url(self.endpoint, job_path(self.id, *parts))

    def headers(self) -> dict:
        """Auth headers plus this job's session cookies."""
        return build_headers(self.access_token.get_secret_value(), self.cookies)


class HistogramBucket(BaseModel):
    """One fixed-width time bucket of the job's message histogram."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    length: int
    count: int
    start_timestamp: datetime = Field(
        validation_alias=AliasChoices("startTimestamp", "startTimeStamp", "start_timestamp"),
    )


class JobStatus(BaseModel):
    """
    One decoded status response.

    Built fresh on every poll; nothing is merged across polls. Unknown
    fields in the response are ignored.

    Attributes:
        raw_state: State string exactly as the server sent it
        message_count: Messages found so far
        record_count: Aggregate records produced so far
        histogram_buckets: Message counts per time bucket
        pending_warnings: Warnings not yet reported to this caller
        pending_errors: Errors not yet reported to this caller
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    raw_state: str = Field(alias="state")
    message_count: int = Field(0, alias="messageCount")
    record_count: int = Field(0, alias="recordCount")
    histogram_buckets: list[HistogramBucket] = Field(
        default_factory=list,
        validation_alias=AliasChoices("histogramBuckets", "histogram_buckets"),
    )
    pending_warnings: list[str] = Field(default_factory=list, alias="pendingWarnings")
    pending_errors: list[str] = Field(default_factory=list, alias="pendingErrors")

    @property
    def state(self) -> JobState:
        """The lifecycle state, or UNRECOGNIZED for an unknown string."""
        return JobState.parse(self.raw_state)

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal
