"""
StreamableHTTP Client Transport Module

This module implements a synchronous StreamableHTTP transport for MCP clients:
JSON-RPC requests are sent with HTTP POST, and the server may answer with
either a single JSON document or an SSE stream. Session continuity is carried
by the ``Mcp-Session-Id`` response header.
"""

import json
import logging
from types import TracebackType
from typing import Any

import httpx

from mcp_relay.client.config import TransportConfig, load_transport_config
from mcp_relay.shared._httpx_utils import McpHttpClientFactory, create_mcp_http_client
from mcp_relay.shared.exceptions import (
    HandshakeFailedError,
    HttpError,
    InvalidEnvelopeError,
    NoMatchingResponseError,
    TransportError,
    UnexpectedError,
)
from mcp_relay.shared.jsonrpc import extract_result, ids_match
from mcp_relay.shared.sse_parser import parse_sse_events
from mcp_relay.types import (
    INITIALIZE_METHOD,
    INITIALIZED_NOTIFICATION,
    InitializeRequestParams,
    JSONRPCNotification,
    JSONRPCRequest,
)

logger = logging.getLogger(__name__)

MCP_SESSION_ID = "Mcp-Session-Id"
ACCEPT = "Accept"
AUTHORIZATION = "Authorization"
CONTENT_TYPE = "content-type"

JSON = "application/json"
SSE = "text/event-stream"


class StreamableHttpTransport:
    """StreamableHTTP client transport implementation.

    One instance holds one request counter and one session id, and sends one
    request at a time. It is not thread-safe; give each logical session its own
    instance.

    Example:
        ```python
        with StreamableHttpTransport({"url": "http://localhost:8000/mcp"}) as transport:
            tools = transport.send_request("tools/list")
        ```
    """

    def __init__(
        self,
        config: TransportConfig | dict[str, Any],
        *,
        http_client: httpx.Client | None = None,
        httpx_client_factory: McpHttpClientFactory = create_mcp_http_client,
    ) -> None:
        """Initialize the StreamableHTTP transport.

        Args:
            config: Transport settings, as a model or a raw mapping.
            http_client: Optional pre-configured httpx.Client. Its lifecycle is
                managed by the caller and the transport never closes it.
            httpx_client_factory: Builds the client when ``http_client`` is not given.
        """
        self.config = load_transport_config(config)
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._httpx_client_factory = httpx_client_factory
        self._request_id = 0
        self._session_id: str | None = None
        self._initialize_result: dict[str, Any] | None = None
        self._active = False

    @property
    def session_id(self) -> str | None:
        """The session id issued by the server, if any."""
        return self._session_id

    @property
    def request_id(self) -> int:
        """The id of the most recently framed request, 0 before the first one."""
        return self._request_id

    @property
    def is_active(self) -> bool:
        """Whether :meth:`start` has completed and :meth:`close` has not been called since."""
        return self._active

    @property
    def initialize_result(self) -> dict[str, Any] | None:
        """The server's answer to ``initialize``, once the handshake has run."""
        return self._initialize_result

    def start(self) -> None:
        """Run the initialize handshake unless it is disabled in the config.

        Raises:
            HandshakeFailedError: If any step of the handshake fails.
        """
        if self.config.send_initialize:
            self._initialize()
        self._active = True

    def send_request(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send one request and return the ``result`` of the matching response.

        The handshake is not run implicitly; call :meth:`start` first when the
        server requires it.

        Raises:
            TransportError: If the request fails for any reason.
        """
        try:
            request = self._frame(method, params)
            response = self._post(request)
            self._update_session_id(response)
            return self._decode(response, request["id"])
        except TransportError:
            raise
        except Exception as exc:
            raise UnexpectedError(f"Failed to send request to MCP server: {exc}", cause=exc) from exc

    def send_notification(self, method: str, params: dict[str, Any] | None = None) -> None:
        """Send a notification. Any response body is ignored.

        Raises:
            HttpError: If the server answers with a failure status.
            UnexpectedError: If the notification could not be sent.
        """
        try:
            response = self._send_notification(method, params)
            self._raise_for_status(response)
        except TransportError:
            raise
        except Exception as exc:
            raise UnexpectedError(f"Failed to send notification to MCP server: {exc}", cause=exc) from exc

    def close(self) -> None:
        """Forget the session id. Does not contact the server."""
        if self._session_id is not None:
            logger.debug(f"Discarding session ID: {self._session_id}")
        self._session_id = None
        self._active = False

    def __enter__(self) -> "StreamableHttpTransport":
        try:
            self.start()
        except BaseException:
            self._close_owned_http_client()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
        self._close_owned_http_client()

    def _close_owned_http_client(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def _get_http_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = self._httpx_client_factory(timeout=httpx.Timeout(self.config.timeout))
        return self._http_client

    def _frame(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Assign the next request id and build the JSON-RPC request payload."""
        self._request_id += 1
        request = JSONRPCRequest(id=str(self._request_id), method=method, params=params or {})
        return request.model_dump(mode="json")

    def _frame_notification(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = JSONRPCNotification(method=method, params=params).model_dump(mode="json")
        if payload["params"] is None:
            del payload["params"]
        return payload

    def _prepare_request_headers(self, suppress_session_header: bool = False) -> dict[str, str]:
        headers = {ACCEPT: f"{JSON}, {SSE}"}
        if not suppress_session_header and self._session_id is not None:
            headers[MCP_SESSION_ID] = self._session_id
        if self.config.has_api_key:
            headers[AUTHORIZATION] = f"Bearer {self.config.api_key}"
        return headers

    def _post(self, payload: dict[str, Any], *, suppress_session_header: bool = False) -> httpx.Response:
        headers = self._prepare_request_headers(suppress_session_header)
        logger.debug(f"Sending {payload['method']} (id={payload.get('id')}) to {self.config.url}")
        return self._get_http_client().post(
            self.config.url,
            json=payload,
            headers=headers,
            timeout=self.config.timeout,
        )

    def _send_notification(self, method: str, params: dict[str, Any] | None = None) -> httpx.Response:
        response = self._post(self._frame_notification(method, params))
        self._update_session_id(response)
        return response

    def _update_session_id(self, response: httpx.Response) -> None:
        """Extract and store session ID from response headers."""
        new_session_id = response.headers.get(MCP_SESSION_ID)
        if new_session_id:
            if new_session_id != self._session_id:
                logger.info(f"Received session ID: {new_session_id}")
            self._session_id = new_session_id

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_error:
            raise HttpError(response.status_code)

    def _decode(self, response: httpx.Response, expected_id: str) -> dict[str, Any]:
        """Turn a response into the validated ``result`` for ``expected_id``."""
        self._raise_for_status(response)

        content_type = response.headers.get(CONTENT_TYPE, "")
        if SSE in content_type.lower():
            envelope = self._find_sse_response(response.text, expected_id)
        else:
            envelope = self._parse_json_body(response)

        return extract_result(envelope, expected_id)

    def _parse_json_body(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidEnvelopeError(cause=exc) from exc

    def _find_sse_response(self, body: str, expected_id: str) -> dict[str, Any]:
        """Return the first SSE message answering ``expected_id``."""
        for event in parse_sse_events(body):
            logger.debug(f"SSE event: {event.event}")
            if event.data is None:
                continue
            try:
                message = json.loads(event.data)
            except ValueError:
                logger.warning(f"Skipping SSE event with non-JSON data: {event.data!r}")
                continue
            if isinstance(message, dict) and ids_match(message.get("id"), expected_id):
                return message

        raise NoMatchingResponseError(expected_id)

    def _initialize(self) -> None:
        try:
            params = InitializeRequestParams().model_dump(mode="json", by_alias=True)
            request = self._frame(INITIALIZE_METHOD, params)
            response = self._post(request, suppress_session_header=True)
            self._update_session_id(response)
            self._initialize_result = self._decode(response, request["id"])

            self._send_initialized_notification()
        except Exception as exc:
            raise HandshakeFailedError(f"Failed to initialize MCP session: {exc}", cause=exc) from exc

        logger.info(f"MCP session initialized with {self.config.url}")

    def _send_initialized_notification(self) -> None:
        try:
            response = self._send_notification(INITIALIZED_NOTIFICATION)
            # Servers usually answer 202 with an empty body; failure replies are ignored.
            if response.is_success and response.text.strip():
                self._decode(response, str(self._request_id))
        except Exception as exc:
            raise HandshakeFailedError(f"Failed to send initialized notification: {exc}", cause=exc) from exc
