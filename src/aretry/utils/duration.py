r"""Human readable formatting of durations.

Durations are expressed in seconds as ``float`` everywhere in the
package. This module renders them in the compact form popularised by
Go's ``time.Duration`` (``"500ms"``, ``"1.5s"``, ``"1m30s"``).
"""

from __future__ import annotations

__all__ = ["format_duration"]

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE


def format_duration(seconds: float) -> str:
    """Format a duration in seconds.

    Sub-second durations use the largest fitting unit among ``ns``,
    ``µs`` and ``ms``. Longer durations are split into hours, minutes
    and seconds. Fractions are printed without trailing zeros.

    Args:
        seconds: The duration in seconds.

    Returns:
        The formatted duration.

    Example:
        ```pycon
        >>> from aretry.utils.duration import format_duration
        >>> format_duration(0)
        '0s'
        >>> format_duration(0.25)
        '250ms'
        >>> format_duration(1.5)
        '1.5s'
        >>> format_duration(90)
        '1m30s'
        >>> format_duration(3600)
        '1h0m0s'

        ```
    """
    ns = round(seconds * SECOND)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < MICROSECOND:
        return f"{sign}{ns}ns"
    if ns < MILLISECOND:
        return f"{sign}{_fraction(ns, MICROSECOND)}µs"
    if ns < SECOND:
        return f"{sign}{_fraction(ns, MILLISECOND)}ms"

    hours, ns = divmod(ns, HOUR)
    minutes, ns = divmod(ns, MINUTE)
    secs = _fraction(ns, SECOND)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def _fraction(value: int, unit: int) -> str:
    """Render ``value / unit`` without trailing zeros.

    Args:
        value: The value in nanoseconds.
        unit: The unit in nanoseconds (a power of ten).

    Returns:
        The decimal representation.
    """
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")
