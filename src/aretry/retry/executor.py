r"""Synchronous retry executor.

This module provides the RetryExecutor class that runs an operation
until it succeeds, fails fatally, exhausts its retry budget, or is
cancelled.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.cancellation import background
from aretry.exceptions import RetryableError
from aretry.limit import within_limit
from aretry.retry.core import compute_sleep_time, exhausted_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.cancellation import CancellationToken
    from aretry.retry.config import RetryConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes an operation with automatic retry logic.

    The executor runs the retry loop for synchronous operations. An
    operation is a callable taking the cancellation token and either
    returning a value (success), raising ``RetryableError`` (try again
    if the budget allows), or raising any other exception (fatal).

    The executor keeps no state between calls to ``execute``, so one
    instance can serve several threads, as long as its delay strategy
    is stateless.

    Attributes:
        config: Retry configuration containing the budget and the delay
            strategy.

    Example:
        ```pycon
        >>> from aretry.backoff import NoDelay
        >>> from aretry.exceptions import RetryableError
        >>> from aretry.retry import RetryConfig, RetryExecutor
        >>> attempts = []
        >>> def operation(token):
        ...     attempts.append(len(attempts))
        ...     if len(attempts) < 3:
        ...         raise RetryableError(ConnectionError("flaky"))
        ...     return "done"
        ...
        >>> executor = RetryExecutor(RetryConfig(limit=5, delay=NoDelay()))
        >>> executor.execute(operation)
        'done'
        >>> len(attempts)
        3

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    def execute(
        self,
        operation: Callable[[CancellationToken], T],
        token: CancellationToken | None = None,
    ) -> T:
        """Execute an operation with automatic retry logic.

        The operation is attempted up to ``limit + 1`` times (forever if
        the limit is negative). Before each retry, the delay strategy is
        called with the retry iteration (1, 2, ...) and the executor
        waits that long, unless the token is cancelled first.

        Args:
            operation: Callable taking the cancellation token.
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
                if token.wait(sleep_time):
                    logger.debug(f"Cancelled before retry {iteration}: {token.reason!r}")
                    raise token.reason

            try:
                result = operation(token)
            except RetryableError as exc:
                logger.debug(f"Attempt {iteration + 1} failed with retryable error: {exc}")
                last_error = exc
                iteration += 1
                continue

            logger.debug(f"Attempt {iteration + 1} succeeded")
            return result

        logger.debug(f"Retry limit exceeded after {iteration} attempts")
        raise exhausted_error(last_error)
