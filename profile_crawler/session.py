"""
HTTP session creation and the fetch capability used by the crawler.

Provides sessions with:
* Automatic retry logic on 5xx errors
* Randomised User-Agent
* A connection pool sized to the number of crawl workers
"""

import random
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from profile_crawler.config import MAX_RETRIES, REQUEST_TIMEOUT, USER_AGENTS
from profile_crawler.errors import PageDecodeError, TransportError


def build_session(verify_ssl: bool = True, pool_size: int = 20) -> requests.Session:
    """Return a ``requests.Session`` with retry logic, keep-alive and a
    randomised User-Agent.  *pool_size* should cover every thread that
    shares the session."""
    session = requests.Session()
    retry = Retry(
        total=MAX_RETRIES,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
    )
    adapter = HTTPAdapter(
        max_retries=retry,
        pool_connections=pool_size,
        pool_maxsize=pool_size,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session


def _get(session: requests.Session, url: str, **kwargs: Any) -> requests.Response:
    try:
        resp = session.get(url, timeout=REQUEST_TIMEOUT, allow_redirects=True, **kwargs)
    except requests.RequestException as exc:
        raise TransportError(f"request failed for {url}: {exc}") from exc
    if not resp.ok:
        resp.close()
        raise TransportError(
            f"HTTP {resp.status_code} for {url}", status_code=resp.status_code
        )
    return resp


def fetch_text(session: requests.Session, url: str) -> str:
    """GET *url* and return the decoded body.

    Raises :class:`TransportError` when the request fails or the server
    answers with a non-2xx status.
    """
    return _get(session, url).text


def fetch_json(session: requests.Session, url: str) -> Any:
    """GET *url* and return the parsed JSON body.

    Transport problems raise :class:`TransportError`; a body that is not
    JSON raises :class:`PageDecodeError`.
    """
    resp = _get(session, url, headers={"Accept": "application/json"})
    try:
        return resp.json()
    except ValueError as exc:
        raise PageDecodeError(f"response from {url} is not JSON") from exc


def stream_get(session: requests.Session, url: str) -> requests.Response:
    """Open a streaming GET for a binary download (caller closes it)."""
    return _get(session, url, stream=True)
