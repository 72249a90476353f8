r"""Cancellation tokens observed by the retry engine.

A cancellation token carries a "done" signal and, once done, the reason
why. The retry engine waits on the token between attempts, and
operations receive the token so they can stop early on their own.

Example:
    ```pycon
    >>> from aretry.cancellation import with_cancel
    >>> token = with_cancel()
    >>> token.cancelled
    False
    >>> token.cancel()
    True
    >>> token.reason
    OperationCancelledError('operation cancelled')

    ```
"""

from __future__ import annotations

__all__ = [
    "CancellationError",
    "CancellationToken",
    "DeadlineExceededError",
    "OperationCancelledError",
    "background",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]

import logging
import threading
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class CancellationError(Exception):
    """Base class of the reasons a token can be cancelled with."""


class OperationCancelledError(CancellationError):
    """Raised when a token was cancelled explicitly."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(CancellationError, TimeoutError):
    """Raised when a token was cancelled because its deadline passed."""

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message)


class CancellationToken:
    """Signal that a caller wants an operation abandoned.

    A token starts live and becomes done the first time ``cancel`` is
    called, either by user code, by a parent token, or by a deadline
    timer. It is safe to use from several threads and from asyncio
    event loops through ``add_done_callback``.

    Args:
        parent: Optional parent token. The new token is cancelled with
            the parent's reason when the parent is cancelled.
    """

    def __init__(self, parent: CancellationToken | None = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: BaseException | None = None
        self._callbacks: list[Callable[[], None]] = []
        self._timer: threading.Timer | None = None
        self._detach_parent: Callable[[], None] | None = None
        if parent is not None:
            self._detach_parent = parent.add_done_callback(
                lambda: self.cancel(parent.reason)
            )

    def __repr__(self) -> str:
        state = f"cancelled, reason={self._reason!r}" if self.cancelled else "live"
        return f"{self.__class__.__qualname__}({state})"

    @property
    def cancelled(self) -> bool:
        """``True`` once the token has been cancelled."""
        return self._event.is_set()

    @property
    def reason(self) -> BaseException | None:
        """The cancellation reason, or ``None`` while the token is live."""
        return self._reason

    def cancel(self, reason: BaseException | None = None) -> bool:
        """Cancel the token.

        Only the first call has an effect.

        Args:
            reason: Optional exception describing why the token was
                cancelled. Defaults to ``OperationCancelledError()``.

        Returns:
            ``True`` if this call cancelled the token, ``False`` if it was
            already cancelled.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason if reason is not None else OperationCancelledError()
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
            timer, self._timer = self._timer, None
            detach, self._detach_parent = self._detach_parent, None

        logger.debug(f"Token cancelled: {self._reason!r}")
        if timer is not None:
            timer.cancel()
        if detach is not None:
            detach()
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception(f"Exception calling done callback of {self!r}")
        return True

    def close(self) -> None:
        """Release the resources held by a live token.

        The token is detached from its parent and its deadline timer, if
        any, is stopped. The token is not cancelled: it stays live unless
        ``cancel`` is called. Closing a cancelled token is a no-op.
        """
        with self._lock:
            timer, self._timer = self._timer, None
            detach, self._detach_parent = self._detach_parent, None
        if timer is not None:
            timer.cancel()
        if detach is not None:
            detach()

    def __enter__(self) -> CancellationToken:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the token is cancelled or ``timeout`` elapses.

        Args:
            timeout: Maximum time to wait in seconds. ``None`` waits
                forever.

        Returns:
            ``True`` if the token is cancelled.
        """
        if timeout is not None:
            timeout = min(max(0.0, timeout), threading.TIMEOUT_MAX)
        return self._event.wait(timeout)

    def add_done_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run once when the token is cancelled.

        The callback runs immediately, in the calling thread, if the
        token is already cancelled. Otherwise it runs in the thread that
        cancels the token.

        Args:
            callback: Callable taking no argument.

        Returns:
            A callable removing the callback. Calling it after the
            callback ran is a no-op.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)
        callback()
        return lambda: None

    def raise_if_cancelled(self) -> None:
        """Raise the cancellation reason if the token is cancelled."""
        if self._reason is not None:
            raise self._reason

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _arm_deadline(self, timeout: float) -> None:
        timeout = min(max(0.0, timeout), threading.TIMEOUT_MAX)
        timer = threading.Timer(timeout, self.cancel, args=(DeadlineExceededError(),))
        timer.daemon = True
        with self._lock:
            if self._event.is_set():
                return
            self._timer = timer
        timer.start()


class _BackgroundToken(CancellationToken):
    """Token that is never cancelled."""

    def __repr__(self) -> str:
        return "background()"

    def cancel(self, reason: BaseException | None = None) -> bool:  # noqa: ARG002
        return False

    def add_done_callback(self, callback: Callable[[], None]) -> Callable[[], None]:  # noqa: ARG002
        return lambda: None


_BACKGROUND = _BackgroundToken()


def background() -> CancellationToken:
    """Return the shared token that is never cancelled.

    Returns:
        The background token. Calling ``cancel`` on it has no effect.
    """
    return _BACKGROUND


def with_cancel(parent: CancellationToken | None = None) -> CancellationToken:
    """Create a token cancelled explicitly or with its parent.

    A child token stays registered on its parent until it is cancelled or
    closed. Use it as a context manager, or call ``close``, to release it.

    Args:
        parent: Optional parent token.

    Returns:
        A new live token (already cancelled if the parent is).
    """
    return CancellationToken(parent)


def with_deadline(parent: CancellationToken | None, deadline: float) -> CancellationToken:
    """Create a token cancelled at a point in time.

    The deadline timer and the link to the parent are released when the
    token is cancelled or closed.

    Args:
        parent: Optional parent token.
        deadline: The deadline as a ``time.monotonic()`` timestamp.

    Returns:
        A new token cancelled with ``DeadlineExceededError`` at
        ``deadline``, or earlier with its parent.
    """
    token = CancellationToken(parent)
    token._arm_deadline(deadline - time.monotonic())
    return token


def with_timeout(parent: CancellationToken | None, timeout: float) -> CancellationToken:
    """Create a token cancelled after a timeout.

    The deadline timer and the link to the parent are released when the
    token is cancelled or closed.

    Args:
        parent: Optional parent token.
        timeout: The timeout in seconds.

    Returns:
        A new token cancelled with ``DeadlineExceededError`` after
        ``timeout`` seconds, or earlier with its parent.

    Example:
        ```pycon
        >>> from aretry.cancellation import with_timeout
        >>> token = with_timeout(None, 0.01)
        >>> token.wait(1.0)
        True
        >>> token.reason
        DeadlineExceededError('deadline exceeded')

        ```
    """
    return with_deadline(parent, time.monotonic() + timeout)
