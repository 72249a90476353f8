r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and
asynchronous retry executors.
"""

from __future__ import annotations

__all__ = ["compute_sleep_time", "exhausted_error"]

import logging
from typing import TYPE_CHECKING

from aretry.exceptions import TooManyRetriesError

if TYPE_CHECKING:
    from aretry.backoff.base import DelayStrategy
    from aretry.exceptions import RetryableError

logger: logging.Logger = logging.getLogger(__name__)


def compute_sleep_time(delay: DelayStrategy, iteration: int) -> float:
    """Compute the time to wait before a retry.

    Args:
        delay: The delay strategy.
        iteration: The retry iteration (1-indexed).

    Returns:
        The delay in seconds, never negative.
    """
    sleep_time = max(0.0, delay(iteration))
    logger.debug(f"Waiting {sleep_time:.2f}s before retry {iteration}")
    return sleep_time


def exhausted_error(last_error: RetryableError | None) -> BaseException:
    """Create the error raised when the retry budget is exhausted.

    Args:
        last_error: The last retryable error raised by the operation, if
            any.

    Returns:
        The exception wrapped by ``last_error``, or a
        ``TooManyRetriesError`` if no retryable error was recorded.
    """
    if last_error is None:
        return TooManyRetriesError()
    return last_error.unwrap()
