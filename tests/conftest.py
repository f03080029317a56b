"""Shared pytest fixtures for sumosearch tests."""

import pytest

from sumosearch.config import SumoSettings
from sumosearch.job import JobHandle, SearchRequest

BASE_URL = "https://api.sumologic.test/api/v1/"


@pytest.fixture
def base_url():
    """Base URL for mocked API."""
    return BASE_URL


@pytest.fixture
def mock_settings():
    """Return test settings that don't require real credentials."""
    return SumoSettings(
        api_access_base64="dGVzdC1pZDp0ZXN0LWtleQ==",
        api_host="https://api.sumologic.test/api/v1",
    )


@pytest.fixture
def search_request():
    """A typical one-hour search."""
    return SearchRequest(
        query="_sourceCategory=test/sumo error",
        from_time="2024-01-01T00:00:00",
        to_time="2024-01-01T01:00:00",
        time_zone="PST",
    )


@pytest.fixture
def job():
    """A handle as returned by a successful submission."""
    return JobHandle(
        id="job-123",
        endpoint=BASE_URL,
        access_token="dGVzdC1pZDp0ZXN0LWtleQ==",
        cookies=(("AWSELB", "node7"), ("JSESSIONID", "abc123")),
    )
