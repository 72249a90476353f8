r"""Parameter validation utilities.

This module provides validation functions for delay strategy and retry
parameters so that invalid values are rejected when objects are built
rather than in the middle of a retry loop.
"""

from __future__ import annotations

__all__ = ["validate_delay_strategy", "validate_limit", "validate_non_negative"]

from typing import Any


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a numeric parameter is non-negative.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.

    Raises:
        ValueError: If ``value`` is negative.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_non_negative
        >>> validate_non_negative("delay", 1.0)
        >>> validate_non_negative("delay", -1.0)
        Traceback (most recent call last):
        ...
        ValueError: delay must be non-negative, got -1.0

        ```
    """
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)


def validate_limit(limit: Any) -> None:
    """Validate a retry budget.

    Any integer is accepted: negative values mean "retry forever".

    Args:
        limit: The retry budget to check.

    Raises:
        TypeError: If ``limit`` is not an ``int`` or is a ``bool``.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_limit
        >>> validate_limit(3)
        >>> validate_limit(-1)
        >>> validate_limit(2.5)
        Traceback (most recent call last):
        ...
        TypeError: limit must be an int, got float

        ```
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        msg = f"limit must be an int, got {type(limit).__name__}"
        raise TypeError(msg)


def validate_delay_strategy(name: str, delay: Any) -> None:
    """Validate that a delay strategy is callable.

    Args:
        name: The parameter name, used in the error message.
        delay: The delay strategy to check.

    Raises:
        TypeError: If ``delay`` is not callable.
    """
    if not callable(delay):
        msg = f"{name} must be callable, got {type(delay).__name__}"
        raise TypeError(msg)
