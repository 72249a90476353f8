r"""Unit tests for the httpx-based sample operation."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from aretry.backoff import LoggingDelay, NoDelay
from aretry.cancellation import CancellationToken, OperationCancelledError
from aretry.exceptions import RetryableError
from aretry.fetch import (
    DEFAULT_FETCH_LIMIT,
    HttpStatusError,
    default_fetch_delay,
    fetch_url,
    fetch_url_async,
    fetch_with_retry,
    fetch_with_retry_async,
)

TEST_URL = "https://api.example.com/data"



def make_response(status_code: int) -> httpx.Response:
    return Mock(spec=httpx.Response, status_code=status_code)


######################################
#     Tests for fetch_url            #
######################################


@pytest.mark.parametrize("status_code", [200, 201, 204, 299])
def test_fetch_url_success(token: CancellationToken, status_code: int) -> None:
    response = make_response(status_code)
    client = Mock(spec=httpx.Client, get=Mock(return_value=response))
    assert fetch_url(token, TEST_URL, client) is response
    client.get.assert_called_once_with(TEST_URL)


@pytest.mark.parametrize("status_code", [500, 502, 503, 504, 599])
def test_fetch_url_server_error_is_retryable(token: CancellationToken, status_code: int) -> None:
    client = Mock(spec=httpx.Client, get=Mock(return_value=make_response(status_code)))
    with pytest.raises(RetryableError) as exc_info:
        fetch_url(token, TEST_URL, client)
    error = exc_info.value.unwrap()
    assert isinstance(error, HttpStatusError)
    assert error.status_code == status_code
    assert error.url == TEST_URL
    assert str(exc_info.value) == f"http status code: {status_code}"


@pytest.mark.parametrize("status_code", [301, 400, 401, 404, 429])
def test_fetch_url_other_status_is_fatal(token: CancellationToken, status_code: int) -> None:
    client = Mock(spec=httpx.Client, get=Mock(return_value=make_response(status_code)))
    with pytest.raises(HttpStatusError, match=rf"http status code: {status_code}"):
        fetch_url(token, TEST_URL, client)


def test_fetch_url_network_error_is_retryable(token: CancellationToken) -> None:
    error = httpx.ConnectError("connection refused")
    client = Mock(spec=httpx.Client, get=Mock(side_effect=error))
    with pytest.raises(RetryableError) as exc_info:
        fetch_url(token, TEST_URL, client)
    assert exc_info.value.unwrap() is error


def test_fetch_url_cancelled_token(token: CancellationToken, mock_client: httpx.Client) -> None:
    token.cancel()
    with pytest.raises(OperationCancelledError):
        fetch_url(token, TEST_URL, mock_client)
    mock_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_url_async_success(
    token: CancellationToken, mock_async_client: httpx.AsyncClient, mock_response: httpx.Response
) -> None:
    assert await fetch_url_async(token, TEST_URL, mock_async_client) is mock_response


@pytest.mark.asyncio
async def test_fetch_url_async_network_error(token: CancellationToken) -> None:
    error = httpx.ReadTimeout("timed out")
    client = Mock(spec=httpx.AsyncClient, get=AsyncMock(side_effect=error))
    with pytest.raises(RetryableError) as exc_info:
        await fetch_url_async(token, TEST_URL, client)
    assert exc_info.value.unwrap() is error


@pytest.mark.asyncio
async def test_fetch_url_async_fatal_status(token: CancellationToken) -> None:
    client = Mock(spec=httpx.AsyncClient, get=AsyncMock(return_value=make_response(404)))
    with pytest.raises(HttpStatusError):
        await fetch_url_async(token, TEST_URL, client)


######################################
#     Tests for fetch_with_retry     #
######################################


def test_default_fetch_delay() -> None:
    assert isinstance(default_fetch_delay(), LoggingDelay)


def test_fetch_with_retry_recovers_from_server_errors() -> None:
    ok = make_response(200)
    client = Mock(
        spec=httpx.Client,
        get=Mock(side_effect=[make_response(503), httpx.ConnectError("refused"), ok]),
    )
    assert fetch_with_retry(TEST_URL, delay=NoDelay(), client=client) is ok
    assert client.get.call_count == 3


def test_fetch_with_retry_exhaustion_raises_last_error() -> None:
    client = Mock(spec=httpx.Client, get=Mock(return_value=make_response(500)))
    with pytest.raises(HttpStatusError) as exc_info:
        fetch_with_retry(TEST_URL, limit=2, delay=NoDelay(), client=client)
    assert exc_info.value.status_code == 500
    assert client.get.call_count == 3


def test_fetch_with_retry_default_limit() -> None:
    client = Mock(spec=httpx.Client, get=Mock(return_value=make_response(502)))
    with pytest.raises(HttpStatusError):
        fetch_with_retry(TEST_URL, delay=NoDelay(), client=client)
    assert client.get.call_count == DEFAULT_FETCH_LIMIT + 1


def test_fetch_with_retry_fatal_status_not_retried() -> None:
    client = Mock(spec=httpx.Client, get=Mock(return_value=make_response(404)))
    with pytest.raises(HttpStatusError):
        fetch_with_retry(TEST_URL, delay=NoDelay(), client=client)
    client.get.assert_called_once()


def test_fetch_with_retry_creates_and_closes_client(mock_response: httpx.Response) -> None:
    with patch("aretry.fetch.httpx.Client") as client_cls:
        client = client_cls.return_value.__enter__.return_value
        client.get.return_value = mock_response
        assert fetch_with_retry(TEST_URL, delay=NoDelay(), timeout=3.0) is mock_response
    client_cls.assert_called_once_with(timeout=3.0)
    client_cls.return_value.__exit__.assert_called_once()


@pytest.mark.asyncio
async def test_fetch_with_retry_async_recovers() -> None:
    ok = make_response(200)
    client = Mock(
        spec=httpx.AsyncClient,
        get=AsyncMock(side_effect=[httpx.ConnectTimeout("slow"), make_response(500), ok]),
    )
    assert await fetch_with_retry_async(TEST_URL, delay=NoDelay(), client=client) is ok
    assert client.get.await_count == 3


@pytest.mark.asyncio
async def test_fetch_with_retry_async_creates_client(mock_response: httpx.Response) -> None:
    with patch("aretry.fetch.httpx.AsyncClient") as client_cls:
        client = client_cls.return_value.__aenter__.return_value
        client.get = AsyncMock(return_value=mock_response)
        result = await fetch_with_retry_async(TEST_URL, delay=NoDelay(), timeout=3.0)
    assert result is mock_response
    client_cls.assert_called_once_with(timeout=3.0)
