"""Utilities for creating standardized httpx Client instances."""

from typing import Any, Protocol

import httpx

__all__ = ["create_mcp_http_client"]

DEFAULT_TIMEOUT_SECONDS = 30.0


class McpHttpClientFactory(Protocol):
    def __call__(self, **kwargs: Any) -> httpx.Client: ...


def create_mcp_http_client(**kwargs: Any) -> httpx.Client:
    """Create a standardized httpx Client with MCP defaults.

    This function provides the defaults used by the transports:
    - follow_redirects=True (always enabled)
    - Default timeout of 30 seconds if not specified
    - You can pass any keyword argument accepted by httpx.Client

    Args:
        Any keyword argument supported by httpx.Client (e.g. headers, timeout, auth, verify, transport, etc).
        MCP defaults are applied unless overridden, except ``follow_redirects``.

    Returns:
        Configured httpx.Client instance with MCP defaults.

    Note:
        The returned Client should be closed (or used as a context manager) to
        release its connections.

    Examples:
        # Basic usage with MCP defaults
        with create_mcp_http_client() as client:
            response = client.get("https://api.example.com")

        # With a per-client timeout
        with create_mcp_http_client(timeout=httpx.Timeout(60.0)) as client:
            response = client.post("https://api.example.com/mcp", json={...})
    """
    default_kwargs: dict[str, Any] = {
        "timeout": httpx.Timeout(DEFAULT_TIMEOUT_SECONDS),
    }
    default_kwargs.update(kwargs)
    default_kwargs["follow_redirects"] = True
    return httpx.Client(**default_kwargs)
