"""Cancellation context passed to every network call.

A Context carries an optional deadline and an explicit cancellation flag.
It is the only way to bound how long a request may take: the remaining
time until the deadline becomes the request timeout, and explicit
cancellation is honoured before the request is sent and between chunks of
the response body.
"""

import threading
import time

from .errors import ContextCancelledError


class Context:
    """Cancellation handle with an optional deadline.

    Thread-safe: ``cancel()`` may be called from any thread while another
    thread is executing a request with this context.

    The deadline bounds each network phase separately rather than the call
    as a whole: the time remaining when a request starts becomes the
    httpx connect, write, read and pool timeout. Until the response headers
    arrive, a request can therefore take up to about three times the
    remaining time. Once the body is being read, the deadline is checked
    between chunks. ``cancel()`` cannot interrupt a phase that is already
    blocked; it takes effect at the next check.
    """

    def __init__(self, timeout: float | None = None):
        """Initialize the context.

        Args:
            timeout: Seconds from now until the deadline, or None for no
                deadline.

        Raises:
            ValueError: If timeout is negative.
        """
        if timeout is not None and timeout < 0:
            msg = "timeout cannot be negative"
            raise ValueError(msg)
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "Context":
        """Context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, timeout: float) -> "Context":
        """Context whose deadline is ``timeout`` seconds from now."""
        return cls(timeout=timeout)

    def cancel(self) -> None:
        """Cancel the context. Idempotent."""
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left until the deadline, None without a deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    @property
    def cancelled(self) -> bool:
        """Whether the context was cancelled or its deadline has passed."""
        if self._cancelled.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self) -> None:
        """Raise if the context is no longer usable.

        Raises:
            ContextCancelledError: If cancelled or past the deadline.
        """
        if self._cancelled.is_set():
            msg = "context cancelled"
            raise ContextCancelledError(msg)
        if self._deadline is not None and time.monotonic() >= self._deadline:
            msg = "context deadline exceeded"
            raise ContextCancelledError(msg)
