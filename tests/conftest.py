from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from aretry.cancellation import CancellationToken, with_cancel

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def token() -> CancellationToken:
    """Create a live cancellation token for testing."""
    return with_cancel()


@pytest.fixture
def recording_delay() -> Mock:
    """Create a delay strategy recording its calls and never waiting."""
    return Mock(return_value=0.0)


@pytest.fixture
def cancel_on_iteration(token: CancellationToken) -> Callable[[int], Mock]:
    """Build a delay strategy cancelling ``token`` when it is consulted
    for a given iteration.

    The strategy returns no delay before that iteration and a long one on
    it, so the run can only move on if the token is cancelled.
    """

    def _factory(iteration: int) -> Mock:
        def _delay(current: int) -> float:
            if current == iteration:
                token.cancel()
                return 60.0
            return 0.0

        return Mock(side_effect=_delay)

    return _factory


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a mock httpx.Response for testing."""
    return Mock(spec=httpx.Response, status_code=200)


@pytest.fixture
def mock_client(mock_response: httpx.Response) -> httpx.Client:
    """Create a mock httpx.Client returning ``mock_response``."""
    return Mock(spec=httpx.Client, get=Mock(return_value=mock_response))


@pytest.fixture
def mock_async_client(mock_response: httpx.Response) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient returning ``mock_response``."""
    return Mock(spec=httpx.AsyncClient, get=AsyncMock(return_value=mock_response))
