"""Build absolute request URLs from the configured API endpoint."""

from urllib.parse import quote

import httpx


def normalize_endpoint(base: str) -> str:
    """
    Return the base endpoint with exactly one trailing slash.

    Relative references resolve against the last path segment's parent,
    so "https://host/api/v1" would otherwise lose "v1" when joined.

    Raises:
        ValueError: If base is not an absolute http(s) URL
    """
    url = httpx.URL(base.strip())
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"API endpoint must be an absolute http(s) URL, got {base!r}")
    return str(url.copy_with(path=url.path.rstrip("/") + "/"))


def resolve_url(base: str, path: str) -> str:
    """
    Join a relative resource path onto the API base endpoint.

    Args:
        base: Base endpoint, e.g. "https://api.sumologic.com/api/v1"
        path: Resource path relative to the base, e.g. "search/jobs"

    Returns:
        Absolute URL string

    Example:
        resolve_url("https://api.sumologic.com/api/v1", "search/jobs")
        # 'https://api.sumologic.com/api/v1/search/jobs'
    """
    return str(httpx.URL(normalize_endpoint(base)).join(path.lstrip("/")))


def job_path(job_id: str, *parts: str) -> str:
    """Relative path for a job resource; the ID is encoded as one segment."""
    return "/".join(["search/jobs", quote(job_id, safe=""), *parts])
