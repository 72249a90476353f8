r"""Abstract base class for delay strategies."""

from __future__ import annotations

__all__ = ["BaseDelayStrategy", "DelayStrategy"]

from abc import ABC, abstractmethod
from collections.abc import Callable

# Anything mapping a 1-based iteration to a delay in seconds.
DelayStrategy = Callable[[int], float]


class BaseDelayStrategy(ABC):
    """Abstract base class for delay strategies.

    A delay strategy determines how long to wait before retrying a failed
    operation. Strategies are callables: ``strategy(iteration)`` returns
    the delay in seconds to wait before the given iteration. Iterations
    are 1-indexed, iteration 1 being the first retry.

    Plain functions with the same signature can be used wherever a
    strategy is expected; subclassing adds iteration validation.
    """

    def __call__(self, iteration: int) -> float:
        if iteration < 1:
            msg = f"iteration must be >= 1, got {iteration}"
            raise ValueError(msg)
        return self.calculate(iteration)

    @abstractmethod
    def calculate(self, iteration: int) -> float:
        """Calculate the delay before a given retry iteration.

        Args:
            iteration: The iteration about to be waited before
                (1-indexed). For example, iteration=1 is the first retry,
                iteration=2 is the second retry, etc.

        Returns:
            The delay in seconds before the retry.
        """
