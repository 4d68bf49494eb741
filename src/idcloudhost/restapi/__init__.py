"""IDCloudHost REST API client package.

Provides the shared HTTP client that every resource wrapper executes its
requests through, together with the request description, cancellation
context, error hierarchy and Pydantic response types.

Exports:
    Client: HTTP client with API key authentication.
    new_client: Client factory reading the API key from the environment.
    RequestConfig: Description of one HTTP call.
    Context: Cancellation handle with optional deadline.
    Response: Outcome of ``Client.form_request``.
    decode: Response validation and typed JSON decoding.
    types: Module containing Pydantic models for API responses.
"""

from . import types
from .client import (
    API_KEY_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    FORM_CONTENT_TYPE,
    Client,
    Response,
    decode,
    new_client,
)
from .context import Context
from .errors import (
    ApiError,
    ContextCancelledError,
    DecodeError,
    IdCloudHostError,
    InvalidApiKeyError,
    InvalidMethodError,
    MissingContextError,
    NotFoundError,
    TransportError,
)
from .request import RequestConfig, validate_method

__all__ = [
    "API_KEY_ENV_VAR",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "FORM_CONTENT_TYPE",
    "ApiError",
    "Client",
    "Context",
    "ContextCancelledError",
    "DecodeError",
    "IdCloudHostError",
    "InvalidApiKeyError",
    "InvalidMethodError",
    "MissingContextError",
    "NotFoundError",
    "RequestConfig",
    "Response",
    "TransportError",
    "decode",
    "new_client",
    "types",
    "validate_method",
]
