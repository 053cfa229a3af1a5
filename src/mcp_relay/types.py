"""JSON-RPC 2.0 message models and the MCP constants used by the client handshake."""

from typing import Annotated, Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION: Final[str] = "2.0"

PROTOCOL_VERSION: Final[str] = "2024-11-05"
CLIENT_NAME: Final[str] = "mcp-relay"
CLIENT_VERSION: Final[str] = "1.0.0"

PARSE_ERROR: Final[int] = -32700
INVALID_REQUEST: Final[int] = -32600
METHOD_NOT_FOUND: Final[int] = -32601
INVALID_PARAMS: Final[int] = -32602
INTERNAL_ERROR: Final[int] = -32603

UNKNOWN_ERROR_CODE: Final[int] = -1
UNKNOWN_ERROR_MESSAGE: Final[str] = "Unknown error"

RequestId = Annotated[int, Field(strict=True)] | str

# Method names used during the session handshake.
INITIALIZE_METHOD: Final[str] = "initialize"
INITIALIZED_NOTIFICATION: Final[str] = "notifications/initialized"


class JSONRPCBase(BaseModel):
    """Base class for all JSON-RPC messages."""

    model_config = ConfigDict(extra="allow")

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION


class JSONRPCRequest(JSONRPCBase):
    """A request that expects a response."""

    id: RequestId
    method: str
    params: dict[str, Any] = Field(default_factory=dict)


class JSONRPCNotification(JSONRPCBase):
    """A notification which does not expect a response."""

    method: str
    params: dict[str, Any] | None = None


class ErrorData(BaseModel):
    """Error information in a JSON-RPC error response.

    Servers do not always fill in every field, so ``code`` and ``message`` fall
    back to placeholder values instead of failing validation.
    """

    model_config = ConfigDict(extra="allow")

    code: int = UNKNOWN_ERROR_CODE
    message: str = UNKNOWN_ERROR_MESSAGE
    data: Any | None = None


class JSONRPCResponse(JSONRPCBase):
    """A response to a request, carrying either a result or an error."""

    id: RequestId
    result: dict[str, Any] = Field(default_factory=dict)
    error: ErrorData | None = None


class Implementation(BaseModel):
    """Describes the name and version of an MCP implementation."""

    model_config = ConfigDict(extra="allow")

    name: str
    version: str


class ClientCapabilities(BaseModel):
    """Capabilities a client may support. This client advertises none."""

    model_config = ConfigDict(extra="allow")


class InitializeRequestParams(BaseModel):
    """Parameters of the ``initialize`` request sent by the client."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: ClientCapabilities = Field(default_factory=ClientCapabilities)
    client_info: Implementation = Field(
        default_factory=lambda: Implementation(name=CLIENT_NAME, version=CLIENT_VERSION),
        alias="clientInfo",
    )
