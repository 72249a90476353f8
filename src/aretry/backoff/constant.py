r"""Constant delay strategy."""

from __future__ import annotations

__all__ = ["ConstantDelay", "NoDelay"]

from aretry.backoff.base import BaseDelayStrategy
from aretry.utils.validation import validate_non_negative


class ConstantDelay(BaseDelayStrategy):
    """Constant/fixed delay strategy.

    Returns the same delay for every retry iteration, regardless of the
    iteration number: ``[1, 1, 1, 1, ...]`` times ``delay``.

    Args:
        delay: The fixed delay in seconds to use for all retries.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantDelay
        >>> strategy = ConstantDelay(delay=2.5)
        >>> strategy(1)
        2.5
        >>> strategy(10)
        2.5

        ```
    """

    def __init__(self, delay: float) -> None:
        validate_non_negative("delay", delay)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, iteration: int) -> float:  # noqa: ARG002
        return self.delay


class NoDelay(ConstantDelay):
    """Delay strategy that retries immediately.

    Example:
        ```pycon
        >>> from aretry.backoff import NoDelay
        >>> NoDelay()(3)
        0.0

        ```
    """

    def __init__(self) -> None:
        super().__init__(delay=0.0)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
