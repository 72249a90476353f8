r"""Delay strategies and decorators for retry waits.

This package provides delay strategies computing how long to wait before
each retry (constant, linear, exponential and Fibonacci), and decorators
wrapping another strategy to add random jitter or logging. Every
strategy is a callable ``strategy(iteration) -> seconds``, so strategies
compose freely:

Example:
    ```pycon
    >>> from io import StringIO
    >>> from aretry.backoff import constant, log_with_options, rand
    >>> out = StringIO()
    >>> strategy = log_with_options(rand(constant(0.0)), out, lambda d: f"wait {d}")
    >>> strategy(1)
    0.0
    >>> out.getvalue()
    'wait 0.0\n'

    ```
"""

from __future__ import annotations

__all__ = [
    "BaseDelayStrategy",
    "ConstantDelay",
    "DelayStrategy",
    "ExponentialDelay",
    "FibonacciDelay",
    "LinearDelay",
    "LoggingDelay",
    "NoDelay",
    "RandomJitter",
    "constant",
    "exponential",
    "fibonacci",
    "linear",
    "log",
    "log_with_options",
    "no_delay",
    "rand",
]

from typing import TYPE_CHECKING, TextIO

from aretry.backoff.base import BaseDelayStrategy, DelayStrategy
from aretry.backoff.constant import ConstantDelay, NoDelay
from aretry.backoff.exponential import ExponentialDelay
from aretry.backoff.fibonacci import FibonacciDelay
from aretry.backoff.jitter import RandomJitter
from aretry.backoff.linear import LinearDelay
from aretry.backoff.logged import LoggingDelay

if TYPE_CHECKING:
    from collections.abc import Callable


def constant(delay: float) -> ConstantDelay:
    """Create a strategy always waiting ``delay`` seconds."""
    return ConstantDelay(delay)


def no_delay() -> NoDelay:
    """Create a strategy that does not wait at all."""
    return NoDelay()


def linear(base: float) -> LinearDelay:
    """Create a strategy waiting ``base * iteration`` seconds."""
    return LinearDelay(base)


def exponential(base: float) -> ExponentialDelay:
    """Create a strategy waiting ``1, 2, 4, 8, ...`` seconds.

    ``base`` is accepted for symmetry with the other constructors but
    does not scale the sequence.
    """
    return ExponentialDelay(base)


def fibonacci(base: float) -> FibonacciDelay:
    """Create a strategy waiting ``base`` times the Fibonacci sequence.

    The returned strategy is stateful: build a new one for every run.
    """
    return FibonacciDelay(base)


def rand(delay: DelayStrategy) -> RandomJitter:
    """Wrap ``delay`` with a random offset of up to 10%."""
    return RandomJitter(delay)


def log(delay: DelayStrategy) -> LoggingDelay:
    """Wrap ``delay`` so each computed delay is printed to stdout."""
    return LoggingDelay(delay)


def log_with_options(
    delay: DelayStrategy,
    out: TextIO,
    formatter: Callable[[float], str],
) -> LoggingDelay:
    """Wrap ``delay`` so each computed delay is written to ``out`` using
    ``formatter``."""
    return LoggingDelay(delay, out=out, formatter=formatter)
