r"""Entry points running an operation with retries.

``run`` and ``run_async`` take the retry budget and delay strategy per
call and delegate to the executors of ``aretry.retry``.
"""

from __future__ import annotations

__all__ = ["run", "run_async"]

from typing import TYPE_CHECKING, TypeVar

from aretry.retry import AsyncRetryExecutor, RetryConfig, RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.backoff.base import DelayStrategy
    from aretry.cancellation import CancellationToken

T = TypeVar("T")


def run(
    token: CancellationToken | None,
    limit: int,
    delay: DelayStrategy,
    operation: Callable[[CancellationToken], T],
) -> T:
    """Run an operation, retrying it whenever it raises a
    ``RetryableError``.

    The operation is retried until it returns, raises a non-retryable
    exception, the retry budget runs out (the error wrapped by the last
    ``RetryableError`` is then raised), or the token is cancelled during
    a wait (the token's reason is then raised).

    Args:
        token: Optional cancellation token. ``None`` means the run can
            never be cancelled.
        limit: Maximum number of retries after the first attempt.
            ``RETRY_FOREVER`` (or any negative value) retries forever.
        delay: Delay strategy called with the retry iteration (1, 2, ...)
            before each retry.
        operation: Callable taking the cancellation token.

    Returns:
        The value returned by the operation.

    Example:
        ```pycon
        >>> from aretry import RetryableError, no_delay, run
        >>> calls = []
        >>> def flaky(token):
        ...     calls.append(1)
        ...     if len(calls) == 1:
        ...         raise RetryableError(ConnectionError("reset"))
        ...     return "ok"
        ...
        >>> run(None, 2, no_delay(), flaky)
        'ok'
        >>> len(calls)
        2

        ```
    """
    executor = RetryExecutor(RetryConfig(limit=limit, delay=delay))
    return executor.execute(operation, token=token)


async def run_async(
    token: CancellationToken | None,
    limit: int,
    delay: DelayStrategy,
    operation: Callable[[CancellationToken], Awaitable[T]],
) -> T:
    """Run a coroutine operation with retries.

    Same semantics as ``run``, waiting between attempts without blocking
    the event loop.

    Args:
        token: Optional cancellation token.
        limit: Maximum number of retries after the first attempt.
        delay: Delay strategy called before each retry.
        operation: Async callable taking the cancellation token.

    Returns:
        The value returned by the operation.
    """
    executor = AsyncRetryExecutor(RetryConfig(limit=limit, delay=delay))
    return await executor.execute(operation, token=token)
