r"""Unit tests for FibonacciDelay strategy."""

from __future__ import annotations

import pytest

from aretry.backoff import FibonacciDelay, fibonacci


def test_fibonacci_delay_basic() -> None:
    """Test Fibonacci delay over the first iterations."""
    strategy = FibonacciDelay(base=1.0)
    assert [strategy(i) for i in range(1, 8)] == [1.0, 1.0, 2.0, 3.0, 5.0, 8.0, 13.0]


def test_fibonacci_delay_scales_with_base() -> None:
    strategy = FibonacciDelay(base=0.5)
    assert [strategy(i) for i in range(1, 7)] == [0.5, 0.5, 1.0, 1.5, 2.5, 4.0]


def test_fibonacci_delay_is_stateful() -> None:
    """Test that a used instance does not restart the sequence."""
    strategy = FibonacciDelay(base=1.0)
    for i in range(1, 5):
        strategy(i)
    # A second run sharing the instance continues from the old state.
    assert strategy(1) == 1.0
    assert strategy(2) == 1.0
    assert strategy(3) == 5.0


def test_fibonacci_delay_fresh_instances_are_independent() -> None:
    first = FibonacciDelay(base=1.0)
    for i in range(1, 6):
        first(i)
    second = FibonacciDelay(base=1.0)
    assert [second(i) for i in range(1, 7)] == [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]


def test_fibonacci_delay_reset() -> None:
    """Test that reset restarts the sequence."""
    strategy = FibonacciDelay(base=1.0)
    for i in range(1, 6):
        strategy(i)
    strategy.reset()
    assert [strategy(i) for i in range(1, 7)] == [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]


def test_fibonacci_delay_zero_base() -> None:
    strategy = FibonacciDelay(base=0.0)
    assert [strategy(i) for i in range(1, 5)] == [0.0, 0.0, 0.0, 0.0]


def test_fibonacci_delay_invalid_base() -> None:
    """Test that negative base raises ValueError."""
    with pytest.raises(ValueError, match=r"base must be non-negative"):
        FibonacciDelay(base=-1.0)


def test_fibonacci_factory_returns_fresh_instances() -> None:
    first = fibonacci(1.0)
    second = fibonacci(1.0)
    assert isinstance(first, FibonacciDelay)
    assert first is not second
