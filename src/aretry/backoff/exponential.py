r"""Exponential delay strategy."""

from __future__ import annotations

__all__ = ["ExponentialDelay"]

from aretry.backoff.base import BaseDelayStrategy
from aretry.utils.validation import validate_non_negative

# Unit multiplied by the powers of two, in seconds.
EXPONENTIAL_UNIT = 1.0
# Largest power of two used; later iterations repeat this delay.
MAX_EXPONENT = 62


class ExponentialDelay(BaseDelayStrategy):
    """Exponential delay strategy.

    Doubles the delay on every retry, following the sequence
    ``[1, 2, 4, 8, 16, ...]`` seconds. The exponent stops growing at
    ``MAX_EXPONENT`` so very long runs keep a finite delay.

    Note:
        The sequence is always scaled from a one second unit. ``base`` is
        accepted, validated and stored, but does not change the returned
        values. Existing callers rely on this, so it is kept as is.

    Args:
        base: The nominal base delay in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialDelay
        >>> strategy = ExponentialDelay(base=0.1)
        >>> [strategy(i) for i in range(1, 5)]
        [1.0, 2.0, 4.0, 8.0]

        ```
    """

    def __init__(self, base: float = 1.0) -> None:
        validate_non_negative("base", base)
        self.base = base

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base={self.base})"

    def calculate(self, iteration: int) -> float:
        """Calculate exponential delay.

        Args:
            iteration: The retry iteration (1-indexed).

        Returns:
            The calculated delay: 1s * (2 ** min(iteration - 1, MAX_EXPONENT)).
        """
        return EXPONENTIAL_UNIT * (2 ** min(iteration - 1, MAX_EXPONENT))
