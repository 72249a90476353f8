r"""Unit tests for cancellation tokens."""

from __future__ import annotations

import logging
import threading
import time
from unittest.mock import Mock

import pytest

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


def test_token_starts_live(token: CancellationToken) -> None:
    assert not token.cancelled
    assert token.reason is None
    token.raise_if_cancelled()


def test_token_cancel_default_reason(token: CancellationToken) -> None:
    assert token.cancel()
    assert token.cancelled
    assert isinstance(token.reason, OperationCancelledError)
    assert str(token.reason) == "operation cancelled"


def test_token_cancel_custom_reason(token: CancellationToken) -> None:
    reason = RuntimeError("shutting down")
    token.cancel(reason)
    assert token.reason is reason


def test_token_first_cancel_wins(token: CancellationToken) -> None:
    first = RuntimeError("first")
    assert token.cancel(first)
    assert not token.cancel(RuntimeError("second"))
    assert token.reason is first


def test_token_raise_if_cancelled(token: CancellationToken) -> None:
    token.cancel()
    with pytest.raises(OperationCancelledError):
        token.raise_if_cancelled()


def test_token_wait_times_out(token: CancellationToken) -> None:
    assert not token.wait(0.01)


def test_token_wait_negative_timeout(token: CancellationToken) -> None:
    assert not token.wait(-1.0)


def test_token_wait_returns_when_cancelled(token: CancellationToken) -> None:
    token.cancel()
    assert token.wait(0)


def test_token_wait_wakes_up_on_cancel_from_thread(token: CancellationToken) -> None:
    timer = threading.Timer(0.01, token.cancel)
    timer.start()
    start = time.monotonic()
    assert token.wait(10.0)
    assert time.monotonic() - start < 5.0
    timer.join()


def test_token_done_callback_runs_once(token: CancellationToken) -> None:
    callback = Mock()
    token.add_done_callback(callback)
    token.cancel()
    token.cancel()
    callback.assert_called_once_with()


def test_token_done_callback_on_cancelled_token_runs_immediately(
    token: CancellationToken,
) -> None:
    token.cancel()
    callback = Mock()
    token.add_done_callback(callback)
    callback.assert_called_once_with()


def test_token_remove_done_callback(token: CancellationToken) -> None:
    callback = Mock()
    remove = token.add_done_callback(callback)
    remove()
    token.cancel()
    callback.assert_not_called()


def test_token_repr(token: CancellationToken) -> None:
    assert repr(token) == "CancellationToken(live)"
    token.cancel()
    assert repr(token).startswith("CancellationToken(cancelled")


def test_background_is_never_cancelled() -> None:
    token = background()
    assert token is background()
    assert not token.cancel()
    assert not token.cancelled
    assert not token.wait(0)


def test_with_cancel_follows_parent(token: CancellationToken) -> None:
    child = with_cancel(token)
    reason = RuntimeError("parent stopped")
    token.cancel(reason)
    assert child.cancelled
    assert child.reason is reason


def test_with_cancel_parent_already_cancelled(token: CancellationToken) -> None:
    token.cancel()
    child = with_cancel(token)
    assert child.cancelled
    assert child.reason is token.reason


def test_with_cancel_child_does_not_cancel_parent(token: CancellationToken) -> None:
    child = with_cancel(token)
    child.cancel()
    assert not token.cancelled


def test_with_timeout_expires() -> None:
    token = with_timeout(None, 0.01)
    assert token.wait(5.0)
    assert isinstance(token.reason, DeadlineExceededError)
    assert isinstance(token.reason, TimeoutError)
    assert isinstance(token.reason, CancellationError)


def test_with_timeout_cancelled_before_deadline() -> None:
    token = with_timeout(None, 60.0)
    token.cancel()
    assert isinstance(token.reason, OperationCancelledError)


def test_with_timeout_follows_parent(token: CancellationToken) -> None:
    child = with_timeout(token, 60.0)
    token.cancel()
    assert child.cancelled
    assert isinstance(child.reason, OperationCancelledError)


def test_with_deadline_in_the_past() -> None:
    token = with_deadline(None, time.monotonic() - 1.0)
    assert token.wait(5.0)
    assert isinstance(token.reason, DeadlineExceededError)


def test_token_failing_callback_does_not_stop_others(
    token: CancellationToken, caplog: pytest.LogCaptureFixture
) -> None:
    failing = Mock(side_effect=RuntimeError("boom"))
    token.add_done_callback(failing)
    child = with_cancel(token)
    callback = Mock()
    token.add_done_callback(callback)
    with caplog.at_level(logging.ERROR, logger="aretry.cancellation"):
        assert token.cancel()
    failing.assert_called_once_with()
    callback.assert_called_once_with()
    assert child.cancelled
    assert "Exception calling done callback" in caplog.text


def test_token_close_detaches_from_parent(token: CancellationToken) -> None:
    children = [with_cancel(token) for _ in range(100)]
    assert len(token._callbacks) == 100
    for child in children:
        child.close()
    assert len(token._callbacks) == 0
    token.cancel()
    assert not any(child.cancelled for child in children)


def test_token_context_manager_detaches_from_parent(token: CancellationToken) -> None:
    with with_cancel(token) as child:
        assert len(token._callbacks) == 1
        assert not child.cancelled
    assert len(token._callbacks) == 0
    assert not child.cancelled


def test_token_cancel_detaches_from_parent(token: CancellationToken) -> None:
    child = with_cancel(token)
    child.cancel()
    assert len(token._callbacks) == 0


def test_token_close_stops_deadline_timer() -> None:
    token = with_timeout(None, 0.05)
    timer = token._timer
    token.close()
    assert token._timer is None
    timer.join(5.0)
    assert not timer.is_alive()
    assert not token.wait(0.1)


def test_token_close_cancelled_token(token: CancellationToken) -> None:
    token.cancel()
    token.close()
    assert token.cancelled


def test_token_wait_huge_timeout_on_cancelled_token(token: CancellationToken) -> None:
    token.cancel()
    assert token.wait(1e300)
