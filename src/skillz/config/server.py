"""MCP server transport configuration."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Transport(str, Enum):
    """Transport used to serve the MCP server.

    Attributes:
        STDIO: Standard input/output (for clients that spawn the server).
        HTTP: Streamable HTTP.
        SSE: Server-sent events.
    """

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


class ServerConfig(BaseModel):
    """MCP server configuration.

    Attributes:
        transport: Transport to serve on.
        host: Bind host for HTTP/SSE transports.
        port: Bind port for HTTP/SSE transports.
        path: Endpoint path for the HTTP transport.
    """

    transport: Transport = Field(default=Transport.STDIO, description="Server transport")
    host: str = Field(default="127.0.0.1", description="Host for HTTP/SSE transports")
    port: int = Field(default=8000, ge=1, le=65535, description="Port for HTTP/SSE transports")
    path: str = Field(default="/mcp", description="Path for HTTP transport")

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        """Require an absolute endpoint path."""
        if not value.startswith("/"):
            raise ValueError(f"HTTP path must start with '/': {value!r}")
        return value
