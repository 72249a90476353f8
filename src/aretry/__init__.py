r"""aretry - Composable retry and backoff for cancellable operations.

This package runs a fallible operation again and again until it
succeeds, fails with a non-retryable error, exhausts its retry budget,
or is cancelled. Waits between attempts are computed by delay
strategies that compose through plain function wrapping.

Key Features:
    - Retry budget per call, including unlimited retries
    - Delay strategies: Constant, Linear, Exponential and Fibonacci
    - Decorators adding random jitter or logging to any strategy
    - Explicit classification of retryable errors with ``RetryableError``
    - Cancellation tokens with explicit cancellation and deadlines
    - Synchronous and asyncio executors with the same semantics

Example:
    ```pycon
    >>> from aretry import RETRY_FOREVER, RetryableError, constant, log, rand, run
    >>> def operation(token):
    ...     return "hello"
    ...
    >>> run(None, RETRY_FOREVER, log(rand(constant(0.1))), operation)
    'hello'

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_FOREVER",
    "RETRY_ONCE",
    "AsyncRetryExecutor",
    "CancellationError",
    "CancellationToken",
    "DeadlineExceededError",
    "OperationCancelledError",
    "RetryConfig",
    "RetryExecutor",
    "RetryableError",
    "TooManyRetriesError",
    "__version__",
    "background",
    "constant",
    "exponential",
    "fibonacci",
    "linear",
    "log",
    "log_with_options",
    "no_delay",
    "rand",
    "retry_err",
    "run",
    "run_async",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.backoff import (
    constant,
    exponential,
    fibonacci,
    linear,
    log,
    log_with_options,
    no_delay,
    rand,
)
from aretry.cancellation import (
    CancellationError,
    CancellationToken,
    DeadlineExceededError,
    OperationCancelledError,
    background,
    with_cancel,
    with_deadline,
    with_timeout,
)
from aretry.exceptions import RetryableError, TooManyRetriesError, retry_err
from aretry.limit import RETRY_FOREVER, RETRY_ONCE
from aretry.retry import AsyncRetryExecutor, RetryConfig, RetryExecutor
from aretry.run import run, run_async

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
