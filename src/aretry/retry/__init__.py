r"""Retry engine.

Public API:
    - RetryConfig: Configuration for retry behavior
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "RetryConfig", "RetryExecutor"]

from aretry.retry.config import RetryConfig
from aretry.retry.executor import RetryExecutor
from aretry.retry.executor_async import AsyncRetryExecutor
