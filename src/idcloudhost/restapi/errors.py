"""Exception hierarchy for the IDCloudHost API client."""


class IdCloudHostError(Exception):
    """Base class for every error raised or returned by this package."""


class MissingContextError(IdCloudHostError):
    """Raised when a request is attempted without a cancellation context."""


class InvalidMethodError(IdCloudHostError):
    """Raised when the HTTP method is not a valid RFC 7230 token."""


class InvalidApiKeyError(IdCloudHostError):
    """Raised when the API key cannot be sent as an HTTP header value."""


class TransportError(IdCloudHostError):
    """Raised when the HTTP round trip itself fails."""


class ContextCancelledError(TransportError):
    """Raised when the context was cancelled or its deadline passed."""


class ApiError(IdCloudHostError):
    """Raised when the API answers with a non-2xx status code."""

    def __init__(self, status_code: int, body: bytes, message: str = ""):
        self.status_code = status_code
        self.body = body
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"API returned HTTP {status_code}{detail}")


class DecodeError(IdCloudHostError):
    """Raised when a response body does not match the expected result type."""


class NotFoundError(IdCloudHostError):
    """Raised when a lookup helper finds no matching resource."""
