from enum import Enum

from mcp_relay.types import ErrorData


class TransportErrorKind(str, Enum):
    """Categories of failure reported by a transport."""

    HTTP_ERROR = "http_error"
    INVALID_ENVELOPE = "invalid_envelope"
    NO_MATCHING_RESPONSE = "no_matching_response"
    RPC_ERROR = "rpc_error"
    HANDSHAKE_FAILED = "handshake_failed"
    UNEXPECTED = "unexpected"


class TransportError(Exception):
    """Base exception for every failure surfaced by a transport.

    Attributes:
        kind: The failure category
        message: Human-readable description of the failure
        cause: The underlying exception, when this error wraps another one
    """

    kind: TransportErrorKind = TransportErrorKind.UNEXPECTED

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class HttpError(TransportError):
    """The server answered with a non-2xx HTTP status."""

    kind = TransportErrorKind.HTTP_ERROR

    def __init__(self, status_code: int):
        super().__init__(f"HTTP request failed with status code: {status_code}")
        self.status_code = status_code


class InvalidEnvelopeError(TransportError):
    """The response body is not a JSON-RPC 2.0 response to the outstanding request."""

    kind = TransportErrorKind.INVALID_ENVELOPE

    def __init__(self, message: str = "Invalid JSON-RPC 2.0 response received", cause: BaseException | None = None):
        super().__init__(message, cause)


class NoMatchingResponseError(TransportError):
    """An SSE stream ended without an event answering the outstanding request."""

    kind = TransportErrorKind.NO_MATCHING_RESPONSE

    def __init__(self, request_id: str):
        super().__init__(f"No response found for request ID: {request_id}")
        self.request_id = request_id


class RpcError(TransportError):
    """The server returned a JSON-RPC error object.

    Attributes:
        error: The error object received from the server
    """

    kind = TransportErrorKind.RPC_ERROR

    def __init__(self, message: str, error: ErrorData):
        super().__init__(message)
        self.error = error


class HandshakeFailedError(TransportError):
    """The initialize handshake did not complete."""

    kind = TransportErrorKind.HANDSHAKE_FAILED


class UnexpectedError(TransportError):
    """Any failure outside the protocol taxonomy, such as a network error."""

    kind = TransportErrorKind.UNEXPECTED


class ConfigurationError(ValueError):
    """Transport configuration is missing or invalid."""
