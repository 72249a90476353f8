r"""Configuration dataclass for retry behavior."""

from __future__ import annotations

__all__ = ["RetryConfig"]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.backoff.exponential import ExponentialDelay
from aretry.limit import DEFAULT_RETRY_LIMIT
from aretry.utils.validation import validate_delay_strategy, validate_limit

if TYPE_CHECKING:
    from aretry.backoff.base import DelayStrategy


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Args:
        limit: Retry budget: the maximum number of retries after the first
            attempt. Negative values retry forever.
        delay: Delay strategy called with the 1-based retry iteration to
            get the time to wait before that retry.

    Example:
        ```pycon
        >>> from aretry.backoff import NoDelay
        >>> from aretry.retry import RetryConfig
        >>> config = RetryConfig(limit=5, delay=NoDelay())
        >>> config.limit
        5
        >>> config.merge(limit=1).limit
        1
        >>> config.limit
        5

        ```
    """

    limit: int = DEFAULT_RETRY_LIMIT
    delay: DelayStrategy = field(default_factory=ExponentialDelay)

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            TypeError: If ``limit`` is not an int or ``delay`` is not
                callable.
        """
        validate_limit(self.limit)
        validate_delay_strategy("delay", self.delay)

    def merge(self, **overrides: Any) -> RetryConfig:
        """Return a copy of the configuration with some fields replaced.

        Args:
            **overrides: Fields to replace.

        Returns:
            A new validated configuration.
        """
        return replace(self, **overrides)
