r"""Utility functions shared by the delay strategies and the retry
engine.

This package provides duration formatting, the random source used for
jitter, and parameter validation helpers.
"""

from __future__ import annotations

__all__ = [
    "format_duration",
    "rand_duration",
    "rand_positive_int64",
    "validate_delay_strategy",
    "validate_limit",
    "validate_non_negative",
]

from aretry.utils.duration import format_duration
from aretry.utils.rand import rand_duration, rand_positive_int64
from aretry.utils.validation import (
    validate_delay_strategy,
    validate_limit,
    validate_non_negative,
)
