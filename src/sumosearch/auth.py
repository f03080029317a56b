"""Basic-auth headers and session-cookie handling for search requests."""

from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Iterable

import httpx

# (name, value) pairs as captured from Set-Cookie response headers.
Cookies = tuple[tuple[str, str], ...]


def build_headers(access_token: str, cookies: Iterable[tuple[str, str]] = ()) -> dict:
    """
    Return the headers every search API request carries.

    Args:
        access_token: Pre-encoded base64 of "access_id:access_key"
        cookies: Session cookies captured when the job was submitted

    Returns:
        Header dict with Authorization, Content-Type, Accept and, when
        cookies are given, Cookie.
    """
    headers = {
        "Authorization": f"Basic {access_token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    cookie_header = format_cookie_header(cookies)
    if cookie_header:
        headers["Cookie"] = cookie_header
    return headers


def format_cookie_header(cookies: Iterable[tuple[str, str]]) -> str:
    """Render cookie pairs as a Cookie header value."""
    return "; ".join(f"{name}={value}" for name, value in cookies)


def capture_cookies(response: httpx.Response) -> Cookies:
    """
    Extract the session cookies a response set.

    The search service pins a job to one backend replica through these
    cookies; they must be replayed on every later call for the same job.
    Every Set-Cookie header is kept, in the order received, whatever its
    Domain, Path or Expires attributes say.

    Args:
        response: Response to the job submission request

    Returns:
        Tuple of (name, value) pairs
    """
    cookies = []
    for header in response.headers.get_list("set-cookie"):
        pair = header.split(";", 1)[0]
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        cookies.append((name, value.strip().strip('"')))
    return tuple(cookies)


def cookieless_jar() -> CookieJar:
    """
    A cookie jar that never stores or sends anything.

    The pooled transport is shared by every job the client submits; each
    job's cookies travel on its own handle instead.
    """
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
