"""Transport implementations for MCP clients.

- StreamableHttpTransport: JSON-RPC over HTTP POST with JSON or SSE responses

Example:
    ```python
    from mcp_relay.client.transports import create_transport

    transport = create_transport({"url": "http://localhost:8000/mcp", "api_key": "secret"})
    transport.start()
    result = transport.send_request("tools/call", {"name": "my_tool", "arguments": {}})
    transport.close()
    ```
"""

from collections.abc import Mapping
from typing import Any

from mcp_relay.client.config import TransportConfig
from mcp_relay.client.streamable_http import StreamableHttpTransport
from mcp_relay.client.transports.base import Transport


def create_transport(config: TransportConfig | Mapping[str, Any]) -> Transport:
    """Create the transport for a server configuration.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    if isinstance(config, Mapping):
        config = dict(config)
    return StreamableHttpTransport(config)


__all__ = [
    "StreamableHttpTransport",
    "Transport",
    "create_transport",
]
