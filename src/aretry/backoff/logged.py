r"""Logging decorator for delay strategies."""

from __future__ import annotations

__all__ = ["LoggingDelay", "default_formatter"]

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from aretry.backoff.base import BaseDelayStrategy
from aretry.utils.duration import format_duration
from aretry.utils.validation import validate_delay_strategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import DelayStrategy

logger: logging.Logger = logging.getLogger(__name__)


def default_formatter(sleep_time: float) -> str:
    """Format the message written before sleeping.

    Args:
        sleep_time: The delay in seconds.

    Returns:
        The message, without trailing newline.

    Example:
        ```pycon
        >>> from aretry.backoff.logged import default_formatter
        >>> default_formatter(2.0)
        'Sleeping 2s then retrying'

        ```
    """
    return f"Sleeping {format_duration(sleep_time)} then retrying"


class LoggingDelay(BaseDelayStrategy):
    r"""Write a message every time a delay is computed.

    The inner delay is returned unchanged. Each call writes
    ``formatter(delay) + "\n"`` to ``out``.

    Args:
        delay: The inner delay strategy.
        out: Optional text stream receiving the messages. Defaults to the
            current ``sys.stdout``, looked up on every call.
        formatter: Optional callable turning a delay into a message.
            Defaults to ``default_formatter``.

    Example:
        ```pycon
        >>> from io import StringIO
        >>> from aretry.backoff import ConstantDelay, LoggingDelay
        >>> out = StringIO()
        >>> strategy = LoggingDelay(ConstantDelay(0.5), out=out)
        >>> strategy(1)
        0.5
        >>> out.getvalue()
        'Sleeping 500ms then retrying\n'

        ```
    """

    def __init__(
        self,
        delay: DelayStrategy,
        out: TextIO | None = None,
        formatter: Callable[[float], str] | None = None,
    ) -> None:
        validate_delay_strategy("delay", delay)
        self.delay = delay
        self.out = out
        self.formatter = formatter or default_formatter

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay!r})"

    def calculate(self, iteration: int) -> float:
        sleep_time = self.delay(iteration)
        message = self.formatter(sleep_time)
        logger.debug(message)
        out = self.out if self.out is not None else sys.stdout
        out.write(message + "\n")
        out.flush()
        return sleep_time
