r"""Fetch a URL with automatic retry.

This module shows how an operation classifies its failures for the
retry engine: network errors and 5xx responses are transient and
wrapped in ``RetryableError``, 2xx responses are successes, and any
other status is fatal.

Example:
    ```pycon
    >>> from aretry.fetch import fetch_with_retry
    >>> response = fetch_with_retry("https://example.com")  # doctest: +SKIP
    Sleeping 1.02s then retrying

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_FETCH_LIMIT",
    "DEFAULT_TIMEOUT",
    "HttpStatusError",
    "default_fetch_delay",
    "fetch_url",
    "fetch_url_async",
    "fetch_with_retry",
    "fetch_with_retry_async",
]

import logging
from typing import TYPE_CHECKING

import httpx

from aretry.backoff import exponential, log, rand
from aretry.exceptions import RetryableError
from aretry.run import run, run_async

if TYPE_CHECKING:
    from aretry.backoff.base import DelayStrategy
    from aretry.cancellation import CancellationToken

logger: logging.Logger = logging.getLogger(__name__)

# Default timeout in seconds for each HTTP request
DEFAULT_TIMEOUT = 10.0

# Default number of retries after the first request
DEFAULT_FETCH_LIMIT = 5


class HttpStatusError(Exception):
    """Raised when a response has an unexpected status code.

    Args:
        url: The requested URL.
        status_code: The HTTP status code of the response.
    """

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"http status code: {status_code}")
        self.url = url
        self.status_code = status_code


def default_fetch_delay() -> DelayStrategy:
    """Create the delay strategy used by ``fetch_with_retry``.

    Returns:
        An exponential delay with 10% jitter, logged to stdout.
    """
    return log(rand(exponential(1.0)))


def _classify(url: str, response: httpx.Response) -> httpx.Response:
    status_code = response.status_code
    if 500 <= status_code < 600:
        logger.debug(f"GET {url} returned retryable status {status_code}")
        raise RetryableError(HttpStatusError(url, status_code))
    if 200 <= status_code < 300:
        return response
    logger.debug(f"GET {url} returned non-retryable status {status_code}")
    raise HttpStatusError(url, status_code)


def fetch_url(token: CancellationToken, url: str, client: httpx.Client) -> httpx.Response:
    """Fetch a URL once, classifying failures for the retry engine.

    Args:
        token: The cancellation token of the run.
        url: The URL to fetch.
        client: The HTTP client used to send the request.

    Returns:
        The response, for 2xx status codes.

    Raises:
        RetryableError: For network errors and 5xx status codes.
        HttpStatusError: For any other status code.
        CancellationError: If the token is already cancelled.
    """
    token.raise_if_cancelled()
    try:
        response = client.get(url)
    except httpx.RequestError as exc:
        logger.debug(f"GET {url} failed with {type(exc).__name__}: {exc}")
        raise RetryableError(exc) from exc
    return _classify(url, response)


async def fetch_url_async(
    token: CancellationToken, url: str, client: httpx.AsyncClient
) -> httpx.Response:
    """Fetch a URL once with an async client.

    Args:
        token: The cancellation token of the run.
        url: The URL to fetch.
        client: The async HTTP client used to send the request.

    Returns:
        The response, for 2xx status codes.

    Raises:
        RetryableError: For network errors and 5xx status codes.
        HttpStatusError: For any other status code.
        CancellationError: If the token is already cancelled.
    """
    token.raise_if_cancelled()
    try:
        response = await client.get(url)
    except httpx.RequestError as exc:
        logger.debug(f"GET {url} failed with {type(exc).__name__}: {exc}")
        raise RetryableError(exc) from exc
    return _classify(url, response)


def fetch_with_retry(
    url: str,
    *,
    limit: int = DEFAULT_FETCH_LIMIT,
    delay: DelayStrategy | None = None,
    token: CancellationToken | None = None,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.Response:
    """Fetch a URL, retrying on network errors and 5xx responses.

    Args:
        url: The URL to fetch.
        limit: Maximum number of retries after the first request.
        delay: Optional delay strategy. Defaults to
            ``default_fetch_delay()``.
        token: Optional cancellation token.
        client: Optional HTTP client. If ``None``, a client is created
            for the call and closed afterwards.
        timeout: Request timeout in seconds, used only when the client is
            created here.

    Returns:
        The successful response.
    """
    if delay is None:
        delay = default_fetch_delay()
    if client is not None:
        return run(token, limit, delay, lambda tok: fetch_url(tok, url, client))
    with httpx.Client(timeout=timeout) as owned_client:
        return run(token, limit, delay, lambda tok: fetch_url(tok, url, owned_client))


async def fetch_with_retry_async(
    url: str,
    *,
    limit: int = DEFAULT_FETCH_LIMIT,
    delay: DelayStrategy | None = None,
    token: CancellationToken | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.Response:
    """Fetch a URL asynchronously, retrying on network errors and 5xx
    responses.

    Args:
        url: The URL to fetch.
        limit: Maximum number of retries after the first request.
        delay: Optional delay strategy. Defaults to
            ``default_fetch_delay()``.
        token: Optional cancellation token.
        client: Optional async HTTP client. If ``None``, a client is
            created for the call and closed afterwards.
        timeout: Request timeout in seconds, used only when the client is
            created here.

    Returns:
        The successful response.
    """
    if delay is None:
        delay = default_fetch_delay()
    if client is not None:
        return await run_async(token, limit, delay, lambda tok: fetch_url_async(tok, url, client))
    async with httpx.AsyncClient(timeout=timeout) as owned_client:
        return await run_async(
            token, limit, delay, lambda tok: fetch_url_async(tok, url, owned_client)
        )
