"""Tests for the transport protocol and factory."""

import pytest

from mcp_relay.client.streamable_http import StreamableHttpTransport
from mcp_relay.client.transports import Transport, create_transport
from mcp_relay.shared.exceptions import ConfigurationError


def test_create_transport_from_mapping():
    transport = create_transport({"url": "http://example.com/api", "api_key": "k"})

    assert isinstance(transport, StreamableHttpTransport)
    assert transport.config.api_key == "k"


def test_streamable_http_transport_satisfies_protocol():
    transport = StreamableHttpTransport({"url": "http://example.com/api"})

    assert isinstance(transport, Transport)


def test_create_transport_rejects_invalid_config():
    with pytest.raises(ConfigurationError):
        create_transport({"timeout": 10})


def test_new_transport_holds_no_state():
    transport = create_transport({"url": "http://example.com/api"})

    assert isinstance(transport, StreamableHttpTransport)
    assert transport.session_id is None
    assert transport.request_id == 0
    assert not transport.is_active
    assert transport.initialize_result is None
