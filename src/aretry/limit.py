r"""Retry budget constants.

A retry budget (or limit) is a plain ``int``. A non-negative value ``N``
allows up to ``N`` retries after the first attempt, so ``N + 1``
attempts in total. Any negative value means the operation is retried
until it succeeds, fails fatally, or is cancelled.
"""

from __future__ import annotations

__all__ = ["DEFAULT_RETRY_LIMIT", "RETRY_FOREVER", "RETRY_ONCE", "is_unlimited", "within_limit"]

# Exactly one attempt and no retry. The name is historical.
RETRY_ONCE = 0

# Sentinel for an unlimited number of retries
RETRY_FOREVER = -1

# Default retry budget used by RetryConfig
# Total attempts = DEFAULT_RETRY_LIMIT + 1 (initial attempt)
DEFAULT_RETRY_LIMIT = 3


def is_unlimited(limit: int) -> bool:
    """Indicate whether a retry budget is unlimited.

    Args:
        limit: The retry budget.

    Returns:
        ``True`` if ``limit`` is negative.

    Example:
        ```pycon
        >>> from aretry.limit import RETRY_FOREVER, is_unlimited
        >>> is_unlimited(RETRY_FOREVER)
        True
        >>> is_unlimited(3)
        False

        ```
    """
    return limit < 0


def within_limit(limit: int, iteration: int) -> bool:
    """Indicate whether an iteration is allowed by a retry budget.

    Iterations are 0-indexed: iteration 0 is the initial attempt and
    iteration ``limit`` is the last retry.

    Args:
        limit: The retry budget.
        iteration: The iteration about to run (0-indexed).

    Returns:
        ``True`` if the iteration may run.

    Example:
        ```pycon
        >>> from aretry.limit import RETRY_ONCE, within_limit
        >>> within_limit(RETRY_ONCE, 0)
        True
        >>> within_limit(RETRY_ONCE, 1)
        False
        >>> within_limit(-1, 1000)
        True

        ```
    """
    return is_unlimited(limit) or iteration <= limit
