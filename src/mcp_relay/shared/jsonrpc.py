"""Validation of JSON-RPC 2.0 responses and mapping of JSON-RPC errors."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from mcp_relay.shared.exceptions import InvalidEnvelopeError, RpcError
from mcp_relay.types import JSONRPC_VERSION, ErrorData, JSONRPCResponse, RequestId

logger = logging.getLogger(__name__)

# JSON encodings of error data that are not worth reporting.
_EMPTY_DATA_ENCODINGS = frozenset({"", "0", "false", "null"})


def ids_match(received: Any, expected: RequestId) -> bool:
    """Compare request ids the way servers echo them: as strings."""
    return received is not None and _coerce_id(received) == _coerce_id(expected)


def _coerce_id(value: Any) -> str:
    # Floats such as 1.0 are echoed by some servers for integer ids.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_error_message(error: ErrorData) -> str:
    """Render a JSON-RPC error as ``JSON-RPC error: <message> (code: <code>)``.

    The encoded ``data`` member is appended as ``Details: <json>`` unless it is
    missing or encodes to an empty or false-like value.
    """
    message = f"JSON-RPC error: {error.message} (code: {error.code})"
    if error.data is None:
        return message

    encoded = json.dumps(error.data, separators=(",", ":"))
    if encoded in _EMPTY_DATA_ENCODINGS:
        return message
    return f"{message} Details: {encoded}"


def validate_response(envelope: Any, expected_id: RequestId) -> JSONRPCResponse:
    """Check that ``envelope`` is a JSON-RPC 2.0 response to ``expected_id``.

    Raises:
        InvalidEnvelopeError: If the version, the id or the overall shape is wrong.
    """
    if (
        not isinstance(envelope, dict)
        or envelope.get("jsonrpc") != JSONRPC_VERSION
        or not ids_match(envelope.get("id"), expected_id)
    ):
        raise InvalidEnvelopeError()

    payload: dict[str, Any] = {**envelope, "id": _coerce_id(envelope["id"])}
    if payload.get("result") is None:
        payload.pop("result", None)

    error = payload.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise InvalidEnvelopeError()
        # Null members count as absent so that the defaults apply.
        error = {key: value for key, value in error.items() if value is not None}
        if "message" in error and not isinstance(error["message"], str):
            error["message"] = str(error["message"])
        payload["error"] = error

    try:
        return JSONRPCResponse.model_validate(payload)
    except ValidationError as exc:
        logger.debug(f"Response failed JSON-RPC validation: {exc}")
        raise InvalidEnvelopeError(cause=exc) from exc


def raise_for_error(response: JSONRPCResponse) -> None:
    """Raise :class:`RpcError` if ``response`` carries a JSON-RPC error."""
    if response.error is not None:
        raise RpcError(format_error_message(response.error), response.error)


def extract_result(envelope: Any, expected_id: RequestId) -> dict[str, Any]:
    """Validate ``envelope`` and return its ``result``, defaulting to ``{}``."""
    response = validate_response(envelope, expected_id)
    raise_for_error(response)
    return response.result
