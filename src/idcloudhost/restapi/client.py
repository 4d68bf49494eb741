"""IDCloudHost REST API client.

Provides the shared HTTP client used by every resource wrapper: static API
key authentication, form-encoded request bodies, caller-controlled
cancellation and typed decoding of JSON responses using Pydantic.
"""

import json
import os
import threading
import time
from dataclasses import dataclass
from typing import Any

import httpx
import pydantic
import structlog

from .context import Context
from .errors import (
    ApiError,
    ContextCancelledError,
    DecodeError,
    IdCloudHostError,
    InvalidApiKeyError,
    MissingContextError,
    TransportError,
)
from .request import RequestConfig, validate_method

logger = structlog.get_logger(__name__)

API_KEY_ENV_VAR = "IDCLOUDHOST_API_KEY"

DEFAULT_BASE_URL = "https://api.idcloudhost.com"

DEFAULT_TIMEOUT = 30.0

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class Response:
    """Outcome of a single ``form_request`` call.

    Either ``body`` holds the complete response body and ``error`` is None,
    or ``body`` is None and ``error`` describes what went wrong.
    ``status_code`` is None when no HTTP response was received.
    """

    body: bytes | None = None
    error: IdCloudHostError | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        """Whether a 2xx response was received."""
        return (
            self.error is None
            and self.status_code is not None
            and 200 <= self.status_code < 300  # noqa: PLR2004
        )


class Client:
    """HTTP client for the IDCloudHost REST API.

    Holds the API key, base URL and transport shared by all resource
    wrappers. Safe to share between threads as long as ``set_api_key`` is
    not called concurrently with requests.

    When no ``http_client`` is supplied, each thread lazily gets its own
    httpx.Client. A supplied ``http_client`` is owned by the caller and is
    never closed by this class. Can be used as a context manager.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the API client.

        Args:
            api_key: Value sent in the ``apikey`` header of every request.
            base_url: Base URL of the API (e.g., "https://api.idcloudhost.com").
            http_client: Transport to use instead of the default one.
            timeout: Timeout in seconds of the default transport.

        Raises:
            ValueError: If base_url is empty or timeout is not positive.
        """
        if not base_url:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.api_key = api_key
        self.base_url = base_url
        self._http_client = http_client
        self._timeout = timeout
        self._local = threading.local()

    def set_api_key(self, api_key: str) -> "Client":
        """Replace the API key in place and return this same client."""
        self.api_key = api_key
        return self

    @property
    def http_client(self) -> httpx.Client:
        """Get the supplied transport, or create a thread-local one.

        Returns:
            httpx.Client used to execute requests.
        """
        if self._http_client is not None:
            return self._http_client
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(timeout=self._timeout)
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open."""
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    def form_request(self, ctx: Context | None, cfg: RequestConfig) -> Response:
        """Execute one HTTP round trip described by ``cfg``.

        Sends ``cfg.data`` as a form-urlencoded body and the API key in the
        ``apikey`` header. The body is returned verbatim whatever the status
        code; interpreting it is left to the caller (see :func:`decode`).

        Args:
            ctx: Cancellation context. Its remaining deadline is used as the
                timeout of each httpx phase (connect, write, read, pool), so
                the whole call may exceed the deadline before the response
                headers arrive.
            cfg: Request to perform.

        Returns:
            Response with either ``body`` or ``error`` set. Errors are never
            raised from here.
        """
        if ctx is None:
            return Response(error=MissingContextError("a context is required"))
        try:
            validate_method(cfg.method)
        except IdCloudHostError as e:
            return Response(error=e)
        # httpx encodes header values as ASCII
        if not self.api_key.isascii():
            msg = "API key must contain only ASCII characters"
            return Response(error=InvalidApiKeyError(msg))

        headers = {"apikey": self.api_key}
        body = cfg.body()
        if body:
            headers["Content-Type"] = FORM_CONTENT_TYPE

        remaining = ctx.remaining()
        timeout = remaining if remaining is not None else httpx.USE_CLIENT_DEFAULT

        start_time = time.time()
        try:
            ctx.check()
            request = self.http_client.build_request(
                cfg.method,
                cfg.url(self.base_url),
                content=body,
                headers=headers,
                timeout=timeout,
            )
            logger.debug("Making API request", method=cfg.method, path=cfg.path)
            response = self.http_client.send(request, stream=True)
            try:
                chunks = []
                for chunk in response.iter_bytes():
                    ctx.check()
                    chunks.append(chunk)
            finally:
                response.close()
        except ContextCancelledError as e:
            logger.warning("API request cancelled", method=cfg.method, path=cfg.path)
            return Response(error=e)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            duration = time.time() - start_time
            logger.warning(
                "API request failed",
                method=cfg.method,
                path=cfg.path,
                duration_seconds=round(duration, 3),
                error=str(e),
            )
            return Response(error=_transport_error(ctx, e))

        duration = time.time() - start_time
        logger.debug(
            "API request completed",
            method=cfg.method,
            path=cfg.path,
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )
        return Response(body=b"".join(chunks), status_code=response.status_code)


def _transport_error(ctx: Context, exc: Exception) -> TransportError:
    """Wrap an httpx failure, chaining the original exception."""
    if isinstance(exc, httpx.TimeoutException) and ctx.cancelled:
        error: TransportError = ContextCancelledError("context deadline exceeded")
    else:
        error = TransportError(str(exc) or type(exc).__name__)
    error.__cause__ = exc
    return error


def _error_message(body: bytes) -> str:
    """Extract a human readable message from a JSON error body, if any."""
    try:
        data = json.loads(body)
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    message = data.get("message") or data.get("error") or data.get("errors") or ""
    return message if isinstance(message, str) else json.dumps(message)


def decode(response: Response, result_type: Any) -> Any:
    """Validate a response and decode its JSON body into ``result_type``.

    Args:
        response: Outcome of ``Client.form_request``.
        result_type: Pydantic model or any type understood by
            ``pydantic.TypeAdapter`` (e.g., ``list[Disk]``).

    Returns:
        Decoded and validated result.

    Raises:
        IdCloudHostError: The error carried by the response, if any.
        ApiError: If the status code is not 2xx.
        DecodeError: If the body is not valid JSON for ``result_type``.
    """
    if response.error is not None:
        raise response.error

    body = response.body or b""
    if not response.ok:
        error = ApiError(response.status_code or 0, body, _error_message(body))
        logger.error(
            "API error response",
            status_code=error.status_code,
            error_message=error.message,
        )
        raise error

    try:
        return pydantic.TypeAdapter(result_type).validate_json(body)
    except pydantic.ValidationError as e:
        msg = f"unexpected response body: {e}"
        raise DecodeError(msg) from e


def new_client() -> Client:
    """Create a client using the API key from the environment.

    The key is read from ``IDCLOUDHOST_API_KEY`` at call time; an unset
    variable yields an empty key. Use ``Client.set_api_key`` to override it.
    """
    return Client(api_key=os.environ.get(API_KEY_ENV_VAR, ""))
