"""Request description and URL construction."""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

import httpx

from .errors import InvalidMethodError

Params: TypeAlias = (
    httpx.QueryParams
    | Mapping[str, str | Sequence[str]]
    | Sequence[tuple[str, str]]
    | None
)

# RFC 7230 section 3.2.6 "token"
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def validate_method(method: str) -> None:
    """Check that method is a syntactically valid HTTP method token.

    Raises:
        InvalidMethodError: If method is empty or contains characters
            outside the RFC 7230 token set.
    """
    if not _METHOD_TOKEN.fullmatch(method):
        msg = f"invalid HTTP method: {method!r}"
        raise InvalidMethodError(msg)


@dataclass
class RequestConfig:
    """Description of one HTTP call before execution.

    ``query`` and ``data`` are ordered multi-maps: any mapping, sequence of
    key/value pairs or ``httpx.QueryParams`` is accepted and normalized to
    ``httpx.QueryParams``, which keeps insertion order and repeated keys.
    """

    method: str = "GET"
    path: str = ""
    query: Params = field(default_factory=httpx.QueryParams)
    data: Params = field(default_factory=httpx.QueryParams)

    def __post_init__(self):
        self.query = httpx.QueryParams(self.query if self.query is not None else {})
        self.data = httpx.QueryParams(self.data if self.data is not None else {})

    def url(self, base_url: str) -> str:
        """Build the absolute URL for this request.

        All leading slashes of ``path`` collapse into the single separator
        placed after ``base_url``; the query string is appended when set.
        """
        target = f"{base_url}/{self.path.lstrip('/')}"
        if self.query:
            target = f"{target}?{self.query}"
        return target

    def body(self) -> bytes:
        """Form-urlencoded request body, empty when there is no data."""
        if not self.data:
            return b""
        return str(self.data).encode("ascii")
