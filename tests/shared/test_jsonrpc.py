"""Tests for JSON-RPC response validation and error mapping."""

import pytest

from mcp_relay.shared.exceptions import InvalidEnvelopeError, RpcError
from mcp_relay.shared.jsonrpc import extract_result, format_error_message, ids_match, validate_response
from mcp_relay.types import ErrorData


class TestValidateResponse:
    def test_valid_response(self):
        response = validate_response({"jsonrpc": "2.0", "id": "1", "result": {"a": 1}}, "1")

        assert response.id == "1"
        assert response.result == {"a": 1}
        assert response.error is None

    @pytest.mark.parametrize(
        "envelope",
        [
            {"jsonrpc": "1.0", "id": "1", "result": {}},
            {"id": "1", "result": {}},
            {"jsonrpc": "2.0", "result": {}},
            {"jsonrpc": "2.0", "id": None, "result": {}},
            {"jsonrpc": "2.0", "id": "2", "result": {}},
            {"jsonrpc": "2.0", "id": "1", "result": ["not", "a", "mapping"]},
            {"jsonrpc": "2.0", "id": "1", "error": "boom"},
            ["jsonrpc", "2.0"],
            None,
        ],
    )
    def test_invalid_envelopes(self, envelope):
        with pytest.raises(InvalidEnvelopeError, match="Invalid JSON-RPC 2.0 response received"):
            validate_response(envelope, "1")

    def test_numeric_id_matches_string_id(self):
        assert validate_response({"jsonrpc": "2.0", "id": 5, "result": {}}, "5").id == "5"

    def test_error_with_nulls_uses_defaults(self):
        response = validate_response({"jsonrpc": "2.0", "id": "1", "error": {"code": None, "message": None}}, "1")

        assert response.error == ErrorData(code=-1, message="Unknown error")


class TestIdsMatch:
    def test_string_coercion(self):
        assert ids_match(1, "1")
        assert ids_match("1", 1)
        assert ids_match(1.0, "1")
        assert not ids_match("01", "1")
        assert not ids_match(None, "None")


class TestFormatErrorMessage:
    def test_message_and_code(self):
        assert format_error_message(ErrorData(code=-32600, message="Invalid Request")) == (
            "JSON-RPC error: Invalid Request (code: -32600)"
        )

    def test_defaults(self):
        assert format_error_message(ErrorData()) == "JSON-RPC error: Unknown error (code: -1)"

    def test_details_are_compact_json(self):
        error = ErrorData(code=1, message="m", data={"detail": "Missing method parameter", "n": [1, 2]})

        assert format_error_message(error) == (
            'JSON-RPC error: m (code: 1) Details: {"detail":"Missing method parameter","n":[1,2]}'
        )

    @pytest.mark.parametrize("data", [None, 0, False])
    def test_false_like_data_is_not_reported(self, data):
        assert format_error_message(ErrorData(code=1, message="m", data=data)) == "JSON-RPC error: m (code: 1)"

    @pytest.mark.parametrize(
        ("data", "suffix"),
        [("", ' Details: ""'), ([], " Details: []"), ({}, " Details: {}"), ("text", ' Details: "text"'), (1, " Details: 1")],
    )
    def test_other_data_is_reported(self, data, suffix):
        assert format_error_message(ErrorData(code=1, message="m", data=data)) == f"JSON-RPC error: m (code: 1){suffix}"


class TestExtractResult:
    def test_returns_result(self):
        assert extract_result({"jsonrpc": "2.0", "id": "3", "result": {"x": True}}, "3") == {"x": True}

    def test_missing_result_is_empty(self):
        assert extract_result({"jsonrpc": "2.0", "id": "3"}, "3") == {}

    def test_error_raises_rpc_error(self):
        envelope = {"jsonrpc": "2.0", "id": "3", "error": {"code": -32601, "message": "Method not found"}}

        with pytest.raises(RpcError) as exc_info:
            extract_result(envelope, "3")

        assert exc_info.value.message == "JSON-RPC error: Method not found (code: -32601)"
        assert exc_info.value.error.code == -32601

    def test_non_string_error_message_is_stringified(self):
        envelope = {"jsonrpc": "2.0", "id": "3", "error": {"code": -32000, "message": 42}}

        with pytest.raises(RpcError) as exc_info:
            extract_result(envelope, "3")

        assert exc_info.value.message == "JSON-RPC error: 42 (code: -32000)"
        assert exc_info.value.error.message == "42"

    def test_error_without_fields_uses_defaults(self):
        with pytest.raises(RpcError, match=r"JSON-RPC error: Unknown error \(code: -1\)"):
            extract_result({"jsonrpc": "2.0", "id": "3", "error": {}}, "3")
