"""Tests for the cancellation context."""

from unittest.mock import patch

import pytest

from idcloudhost import restapi


def test_background_context_is_never_cancelled():
    ctx = restapi.Context.background()
    assert not ctx.cancelled
    assert ctx.remaining() is None
    ctx.check()


def test_cancel_marks_context_cancelled():
    ctx = restapi.Context.background()
    ctx.cancel()
    ctx.cancel()
    assert ctx.cancelled
    with pytest.raises(restapi.ContextCancelledError, match="cancelled"):
        ctx.check()


def test_negative_timeout_rejected():
    with pytest.raises(ValueError, match="negative"):
        restapi.Context(timeout=-1.0)


@patch("idcloudhost.restapi.context.time")
def test_remaining_counts_down_to_zero(mock_time):
    mock_time.monotonic.side_effect = [100.0, 104.0, 200.0]
    ctx = restapi.Context.with_timeout(10.0)

    assert ctx.remaining() == pytest.approx(6.0)
    assert ctx.remaining() == 0.0


@patch("idcloudhost.restapi.context.time")
def test_deadline_exceeded(mock_time):
    mock_time.monotonic.side_effect = [100.0, 105.0, 111.0, 111.0]
    ctx = restapi.Context.with_timeout(10.0)

    assert not ctx.cancelled
    assert ctx.cancelled
    with pytest.raises(restapi.ContextCancelledError, match="deadline"):
        ctx.check()


def test_cancelled_error_is_a_transport_error():
    assert issubclass(restapi.ContextCancelledError, restapi.TransportError)
