"""
HTTP fetching for feeds and article pages.

Both feed and page requests go through a shared httpx.AsyncClient so the
topic processor can bound outbound connections. Page fetches retry
transient failures with a fixed delay; authorization failures are terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
import asyncio

import httpx

from ..config import FetchConfig


# Statuses worth another attempt; any other 4xx is permanent for this run.
RETRYABLE_STATUS = {408, 429}
AUTH_STATUS = {401, 403}


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either body will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        body: The raw response body, or None on error
        error: Error message if fetch failed, None on success
        attempts: Number of requests made
    """
    url: str
    status_code: int | None
    body: bytes | None
    error: str | None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.body is not None

    @property
    def text(self) -> str | None:
        if self.body is None:
            return None
        return self.body.decode("utf-8", errors="replace")


def build_headers(cfg: FetchConfig, accept: str) -> dict[str, str]:
    return {
        "User-Agent": cfg.user_agent,
        "Accept": accept,
        "Accept-Language": cfg.accept_language,
    }


def build_client(
    cfg: FetchConfig,
    max_connections: int,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the AsyncClient shared by one topic's fetches.

    Args:
        cfg: Fetch configuration
        max_connections: Upper bound on concurrent connections
        transport: Optional transport override (tests use httpx.MockTransport)
    """
    return httpx.AsyncClient(
        follow_redirects=True,
        trust_env=cfg.trust_env,
        limits=httpx.Limits(max_connections=max_connections),
        transport=transport,
    )


def is_retryable(status_code: int) -> bool:
    return status_code >= 500 or status_code in RETRYABLE_STATUS


async def fetch_once(
    client: httpx.AsyncClient,
    url: str,
    timeout: float,
    headers: dict[str, str],
) -> FetchResult:
    """Fetch a URL exactly once.

    Any failure, a malformed URL included, is reported as an error on the
    result instead of raised.
    """
    try:
        resp = await client.get(url, headers=headers, timeout=timeout)
    except httpx.TimeoutException as exc:
        return FetchResult(url=url, status_code=None, body=None, error=f"TimeoutError: {exc}")
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return FetchResult(url=url, status_code=None, body=None, error=f"{type(exc).__name__}: {exc}")

    if not resp.is_success:
        return FetchResult(
            url=url,
            status_code=resp.status_code,
            body=None,
            error=f"HTTP Error: {resp.status_code}",
        )
    return FetchResult(url=url, status_code=resp.status_code, body=resp.content, error=None)


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    cfg: FetchConfig,
    headers: dict[str, str],
) -> FetchResult:
    """Fetch a URL with bounded retry and a fixed delay between attempts.

    Authorization failures (401/403) and other non-transient 4xx responses
    return immediately without consuming the retry budget.

    Args:
        client: Shared async client
        url: The URL to fetch
        cfg: Fetch configuration (timeout, retries, delay)
        headers: Request headers

    Returns:
        FetchResult with the body on success or the last error on failure
    """
    result = FetchResult(url=url, status_code=None, body=None, error="not attempted", attempts=0)

    for attempt in range(cfg.retries + 1):
        result = await fetch_once(client, url, cfg.page_timeout_seconds, headers)
        result.attempts = attempt + 1
        if result.ok:
            return result
        if result.status_code is not None and not is_retryable(result.status_code):
            return result
        if attempt < cfg.retries and cfg.retry_delay_seconds > 0:
            await asyncio.sleep(cfg.retry_delay_seconds)

    return result
