"""Configuration for MCP client transports."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mcp_relay.shared.exceptions import ConfigurationError

DEFAULT_TIMEOUT = 30.0


class TransportConfig(BaseModel):
    """Immutable settings for a Streamable HTTP transport.

    Unknown keys are ignored so that a whole server entry from an
    application's registry can be passed in unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """Request timeout in seconds."""
    api_key: str | None = None
    """Sent as a bearer token when set."""
    send_initialize: bool = True
    """Whether ``start()`` performs the initialize handshake."""

    @field_validator("url")
    @classmethod
    def _url_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("url must not be empty")
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def _timeout_default_on_null(cls, value: Any) -> Any:
        return DEFAULT_TIMEOUT if value is None else value

    @field_validator("send_initialize", mode="before")
    @classmethod
    def _send_initialize_default_on_null(cls, value: Any) -> Any:
        return True if value is None else value

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None


def load_transport_config(config: "TransportConfig | Mapping[str, Any]") -> TransportConfig:
    """Build a :class:`TransportConfig` from a model or a raw mapping.

    Raises:
        ConfigurationError: If required keys are missing or values are invalid.
    """
    if isinstance(config, TransportConfig):
        return config

    try:
        return TransportConfig.model_validate(dict(config))
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise ConfigurationError(f"Invalid transport configuration for: {', '.join(fields)}") from exc
