import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from mcp_relay.client.streamable_http import StreamableHttpTransport

SERVER_URL = "http://example.com/api"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingServer:
    """Answers transport requests from a handler and keeps every request it saw."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def payload(self, index: int) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def sse_body(*events: dict[str, str]) -> str:
    """Encode events as an SSE body, one blank line after each."""
    return "".join("".join(f"{key}: {value}\n" for key, value in event.items()) + "\n" for event in events)


@pytest.fixture
def make_transport() -> Iterator[Callable[..., tuple[StreamableHttpTransport, RecordingServer]]]:
    clients: list[httpx.Client] = []

    def _make(handler: Handler, **config: Any) -> tuple[StreamableHttpTransport, RecordingServer]:
        config.setdefault("url", SERVER_URL)
        server = RecordingServer(handler)
        client = httpx.Client(transport=httpx.MockTransport(server))
        clients.append(client)
        return StreamableHttpTransport(config, http_client=client), server

    yield _make

    for client in clients:
        client.close()


@pytest.fixture(name="sse_body")
def sse_body_fixture() -> Callable[..., str]:
    return sse_body
