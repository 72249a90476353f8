r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs a coroutine
operation with the same retry semantics as RetryExecutor, without
blocking the event loop while waiting between attempts.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.cancellation import background
from aretry.exceptions import RetryableError
from aretry.limit import within_limit
from aretry.retry.core import compute_sleep_time, exhausted_error

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.cancellation import CancellationToken
    from aretry.retry.config import RetryConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


async def wait_cancelled(token: CancellationToken, timeout: float) -> bool:
    """Wait until a token is cancelled or a timeout elapses.

    The token's done signal and the timer race; the first ready wins.
    A token that is already cancelled always wins, even with a zero
    timeout.

    Args:
        token: The cancellation token.
        timeout: Maximum time to wait in seconds.

    Returns:
        ``True`` if the token is cancelled.
    """
    if token.cancelled:
        return True

    loop = asyncio.get_running_loop()
    done: asyncio.Future[None] = loop.create_future()

    def _set_done() -> None:
        if not done.done():
            done.set_result(None)

    remove = token.add_done_callback(lambda: loop.call_soon_threadsafe(_set_done))
    try:
        await asyncio.wait({done}, timeout=timeout)
    finally:
        remove()
        if not done.done():
            done.cancel()
    return token.cancelled


class AsyncRetryExecutor:
    """Executes a coroutine operation with automatic retry logic.

    The operation is an async callable taking the cancellation token.
    Returning a value ends the run successfully, raising
    ``RetryableError`` asks for another attempt, and raising anything
    else is fatal.

    Attributes:
        config: Retry configuration containing the budget and the delay
            strategy.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.backoff import NoDelay
        >>> from aretry.retry import AsyncRetryExecutor, RetryConfig
        >>> async def operation(token):
        ...     return 42
        ...
        >>> executor = AsyncRetryExecutor(RetryConfig(limit=2, delay=NoDelay()))
        >>> asyncio.run(executor.execute(operation))
        42

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    async def execute(
        self,
        operation: Callable[[CancellationToken], Awaitable[T]],
        token: CancellationToken | None = None,
    ) -> T:
        """Execute a coroutine operation with automatic retry logic.

        Args:
            operation: Async callable taking the cancellation token.
            token: Optional cancellation token. The never-cancelled
                background token is used if ``None``.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            BaseException: The token's reason if it is cancelled during a
                wait, any non-retryable exception raised by the
                operation, or the exception wrapped by the last
                ``RetryableError`` once the budget is exhausted.
            TooManyRetriesError: If the budget is exhausted without any
                retryable error recorded.
        """
        if token is None:
            token = background()

        last_error: RetryableError | None = None
        iteration = 0
        while within_limit(self.config.limit, iteration):
            if iteration > 0:
                sleep_time = compute_sleep_time(self.config.delay, iteration)
                if await wait_cancelled(token, sleep_time):
                    logger.debug(f"Cancelled before retry {iteration}: {token.reason!r}")
                    raise token.reason

            try:
                result = await operation(token)
            except RetryableError as exc:
                logger.debug(f"Attempt {iteration + 1} failed with retryable error: {exc}")
                last_error = exc
                iteration += 1
                continue

            logger.debug(f"Attempt {iteration + 1} succeeded")
            return result

        logger.debug(f"Retry limit exceeded after {iteration} attempts")
        raise exhausted_error(last_error)
