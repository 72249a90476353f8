r"""Fibonacci delay strategy."""

from __future__ import annotations

__all__ = ["FibonacciDelay"]

from aretry.backoff.base import BaseDelayStrategy
from aretry.utils.validation import validate_non_negative


class FibonacciDelay(BaseDelayStrategy):
    """Fibonacci delay strategy.

    Calculates delay as: base * fibonacci(iteration), following the
    sequence ``[1, 1, 2, 3, 5, 8, ...]`` times ``base``.

    This strategy provides a middle ground between linear and exponential
    delays, starting slow and ramping up gradually.

    Warning:
        The strategy is stateful. Each call past the second iteration
        advances an internal pair of Fibonacci numbers, and iterations are
        expected in increasing order starting from 1. Create a new
        instance (or call ``reset``) for every retry run, and never share
        an instance between concurrent runs.

    Args:
        base: The base delay in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import FibonacciDelay
        >>> strategy = FibonacciDelay(base=1.0)
        >>> [strategy(i) for i in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]

        ```
    """

    def __init__(self, base: float) -> None:
        validate_non_negative("base", base)
        self.base = base
        self._before_previous = 1
        self._previous = 1

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base={self.base})"

    def reset(self) -> None:
        """Restart the sequence from its beginning."""
        self._before_previous = 1
        self._previous = 1

    def _next_fibonacci(self, iteration: int) -> int:
        if iteration <= 2:
            return 1
        current = self._before_previous + self._previous
        self._before_previous, self._previous = self._previous, current
        return current

    def calculate(self, iteration: int) -> float:
        """Calculate Fibonacci delay.

        Args:
            iteration: The retry iteration (1-indexed). Must follow the
                previous call's iteration.

        Returns:
            The calculated delay: base * fibonacci(iteration).
        """
        return self.base * self._next_fibonacci(iteration)
