r"""Random source used to compute jitter offsets.

Random values come from ``secrets`` when the operating system provides
a strong entropy source, and from ``random`` otherwise.
"""

from __future__ import annotations

__all__ = ["MAX_INT64", "rand_duration", "rand_positive_int64"]

import logging
import random
import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

MAX_INT64 = 2**63 - 1


def rand_positive_int64() -> int:
    """Draw a uniformly distributed integer in ``[0, MAX_INT64)``.

    Returns:
        A non-negative random integer.
    """
    try:
        value = secrets.randbelow(MAX_INT64)
    except (NotImplementedError, OSError) as exc:
        logger.debug(f"Strong random source unavailable ({exc}), using random")
        value = random.getrandbits(63)  # noqa: S311
    return abs(value)


def rand_duration(max_offset: float, source: Callable[[], int] | None = None) -> float:
    """Draw a random offset uniformly distributed in
    ``[-max_offset, max_offset]``.

    A magnitude ``raw`` is drawn from ``source``, mapped to
    ``u = raw / MAX_INT64`` in ``[0, 1]``, then to the signed range with
    ``max_offset * (2u - 1)``.

    Args:
        max_offset: The maximum absolute offset in seconds.
        source: Optional callable returning a random integer in
            ``[0, MAX_INT64]``. Defaults to ``rand_positive_int64``.

    Returns:
        The signed offset in seconds.

    Example:
        ```pycon
        >>> from aretry.utils.rand import MAX_INT64, rand_duration
        >>> rand_duration(0.1, source=lambda: MAX_INT64)
        0.1
        >>> rand_duration(0.1, source=lambda: 0)
        -0.1

        ```
    """
    raw = abs((source or rand_positive_int64)())
    unit = raw / MAX_INT64
    return max_offset * (unit * 2 - 1)
