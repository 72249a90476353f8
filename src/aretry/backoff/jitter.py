r"""Random jitter decorator for delay strategies."""

from __future__ import annotations

__all__ = ["RandomJitter"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseDelayStrategy
from aretry.utils.duration import SECOND
from aretry.utils.rand import rand_duration
from aretry.utils.validation import validate_delay_strategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import DelayStrategy


class RandomJitter(BaseDelayStrategy):
    """Apply a random offset of up to 10% to another delay strategy.

    For an inner delay ``d``, the maximum offset is ``d / 10`` computed
    with integer division on whole nanoseconds, so delays below 10ns get
    no jitter. The offset is drawn uniformly in
    ``[-max_offset, max_offset]`` on every call, and the result is never
    negative.

    Args:
        delay: The inner delay strategy.
        source: Optional random source returning an integer in
            ``[0, 2**63 - 1]``. Defaults to a cryptographically strong
            source.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantDelay, RandomJitter
        >>> strategy = RandomJitter(ConstantDelay(10.0))
        >>> 9.0 <= strategy(1) <= 11.0
        True

        ```
    """

    def __init__(self, delay: DelayStrategy, source: Callable[[], int] | None = None) -> None:
        validate_delay_strategy("delay", delay)
        self.delay = delay
        self.source = source

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay!r})"

    def calculate(self, iteration: int) -> float:
        sleep_time = self.delay(iteration)
        max_offset = (round(sleep_time * SECOND) // 10) / SECOND
        return max(0.0, sleep_time + rand_duration(max_offset, source=self.source))
