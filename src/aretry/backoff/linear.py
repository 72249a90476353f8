r"""Linear delay strategy."""

from __future__ import annotations

__all__ = ["LinearDelay"]

from aretry.backoff.base import BaseDelayStrategy
from aretry.utils.validation import validate_non_negative


class LinearDelay(BaseDelayStrategy):
    """Linear delay strategy.

    Calculates delay as: base * iteration, which gives the sequence
    ``[1, 2, 3, 4, 5, ...]`` times ``base``.

    This strategy provides evenly spaced retry delays, which can be useful
    for services that recover quickly or when you want predictable timing.

    Args:
        base: The base delay in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import LinearDelay
        >>> strategy = LinearDelay(base=0.5)
        >>> strategy(1)
        0.5
        >>> strategy(2)
        1.0
        >>> strategy(3)
        1.5

        ```
    """

    def __init__(self, base: float) -> None:
        validate_non_negative("base", base)
        self.base = base

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base={self.base})"

    def calculate(self, iteration: int) -> float:
        """Calculate linear delay.

        Args:
            iteration: The retry iteration (1-indexed).

        Returns:
            The calculated delay: base * iteration.
        """
        return self.base * iteration
