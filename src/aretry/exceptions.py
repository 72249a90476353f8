r"""Exception types used to classify operation failures.

An operation signals that a failure is transient by raising
``RetryableError`` around the original exception. Any other exception
is fatal and stops the retry loop immediately.
"""

from __future__ import annotations

__all__ = ["RetryableError", "TooManyRetriesError", "is_retryable", "retry_err"]


class RetryableError(Exception):
    """Wrap an exception to mark it as eligible for another attempt.

    The wrapper is stripped by the retry engine before the error reaches
    the caller: when the retry budget runs out, the wrapped exception is
    raised, not the wrapper.

    Args:
        error: The underlying exception.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryableError
        >>> error = RetryableError(ConnectionError("connection reset"))
        >>> str(error)
        'connection reset'
        >>> error.unwrap()
        ConnectionError('connection reset')

        ```
    """

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return str(self.error)

    def unwrap(self) -> BaseException:
        """Return the wrapped exception.

        Returns:
            The exception passed to the constructor.
        """
        return self.error


class TooManyRetriesError(Exception):
    """Raised when the retry budget is exhausted and no retryable error
    was recorded.

    In practice the engine always records the error that made it retry,
    so this error only shows up in contrived configurations. Catch it by
    class to tell "gave up" apart from other failures.
    """

    def __init__(self, message: str = "exceeded retry limit") -> None:
        super().__init__(message)


def retry_err(error: BaseException) -> RetryableError:
    """Wrap an exception as a retryable error.

    Args:
        error: The exception to wrap.

    Returns:
        The retryable wrapper, ready to be raised.

    Example:
        ```pycon
        >>> from aretry.exceptions import retry_err
        >>> err = ValueError("boom")
        >>> retry_err(err).unwrap() is err
        True

        ```
    """
    return RetryableError(error)


def is_retryable(error: BaseException | None) -> bool:
    """Indicate whether an exception is tagged as retryable.

    Args:
        error: The exception to check, or ``None``.

    Returns:
        ``True`` if ``error`` is a ``RetryableError``.
    """
    return isinstance(error, RetryableError)
