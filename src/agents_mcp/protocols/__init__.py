"""Protocol layer: JSON-RPC envelopes, MCP payloads and error types."""

from agents_mcp.protocols.errors import (
    DuplicateToolError,
    JsonRpcErrorCode,
    ProtocolError,
    RegistryLoadError,
    SchemaIntrospectionError,
    ToolExecutionError,
    ToolNotFoundError,
)

__all__ = [
    "DuplicateToolError",
    "JsonRpcErrorCode",
    "ProtocolError",
    "RegistryLoadError",
    "SchemaIntrospectionError",
    "ToolExecutionError",
    "ToolNotFoundError",
]
