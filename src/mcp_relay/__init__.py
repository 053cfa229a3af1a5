"""A synchronous client transport for the [Model Context Protocol (MCP)](https://modelcontextprotocol.io).

Requests are JSON-RPC 2.0 messages sent with HTTP POST; responses may arrive as
a single JSON document or as a Server-Sent Events stream.

## Example

```python
from mcp_relay import StreamableHttpTransport, TransportError

with StreamableHttpTransport({"url": "http://localhost:8000/mcp"}) as transport:
    try:
        tools = transport.send_request("tools/list")
    except TransportError as exc:
        print(exc.kind, exc.message)
```
"""

from mcp_relay.client import StreamableHttpTransport, Transport, TransportConfig, create_transport
from mcp_relay.shared.exceptions import (
    ConfigurationError,
    HandshakeFailedError,
    HttpError,
    InvalidEnvelopeError,
    NoMatchingResponseError,
    RpcError,
    TransportError,
    TransportErrorKind,
    UnexpectedError,
)
from mcp_relay.types import ErrorData

__all__ = [
    "ConfigurationError",
    "ErrorData",
    "HandshakeFailedError",
    "HttpError",
    "InvalidEnvelopeError",
    "NoMatchingResponseError",
    "RpcError",
    "StreamableHttpTransport",
    "Transport",
    "TransportConfig",
    "TransportError",
    "TransportErrorKind",
    "UnexpectedError",
    "create_transport",
]
