"""Shared fixtures: an API client wired to an in-memory recording server."""

from collections.abc import Callable, Iterator

import httpx
import pytest
from mock_server import TEST_API_KEY, TEST_BASE_URL, Handler, RecordingServer

from idcloudhost import restapi

ClientServerFactory = Callable[..., tuple[restapi.Client, RecordingServer]]


@pytest.fixture
def mock_client_server() -> Iterator[ClientServerFactory]:
    """Factory returning a (client, server) pair sharing a mock transport."""
    http_clients: list[httpx.Client] = []

    def factory(handler: Handler | None = None):
        server = RecordingServer(handler)
        http_client = httpx.Client(transport=httpx.MockTransport(server))
        http_clients.append(http_client)
        api = restapi.Client(
            api_key=TEST_API_KEY,
            base_url=TEST_BASE_URL,
            http_client=http_client,
        )
        return api, server

    yield factory

    for http_client in http_clients:
        http_client.close()


@pytest.fixture
def ctx() -> restapi.Context:
    """Background context without deadline."""
    return restapi.Context.background()
