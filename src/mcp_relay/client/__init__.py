"""MCP Client module."""

from mcp_relay.client.config import TransportConfig, load_transport_config
from mcp_relay.client.streamable_http import StreamableHttpTransport
from mcp_relay.client.transports import Transport, create_transport

__all__ = ["StreamableHttpTransport", "Transport", "TransportConfig", "create_transport", "load_transport_config"]
