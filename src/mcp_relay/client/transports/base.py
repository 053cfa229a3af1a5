"""Base transport protocol for MCP clients."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Protocol for MCP client transports.

    A transport carries one JSON-RPC request at a time to an MCP server and
    returns the matching result. Callers depend on this protocol only, so other
    wire bindings can be swapped in without changing them.

    Example:
        ```python
        class MyTransport:
            def start(self) -> None:
                # Connect and run any handshake...

            def send_request(self, method, params=None):
                # Send and wait for the matching response...
                return {}

            def close(self) -> None:
                # Drop session state...
        ```
    """

    def start(self) -> None:
        """Prepare the transport for requests, running any handshake it needs."""
        ...

    def send_request(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a request and return the ``result`` of the matching response.

        Raises:
            TransportError: If the request fails for any reason.
        """
        ...

    def close(self) -> None:
        """Release session state. Safe to call more than once."""
        ...
