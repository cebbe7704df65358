"""MCP protocol: JSON-RPC envelopes and Model Context Protocol payloads."""

from agents_mcp.protocols.mcp.models import (
    JSONRPC_VERSION,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ToolCallParams,
    ToolValidateParams,
)

__all__ = [
    "JSONRPC_VERSION",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPToolDef",
    "ToolCallParams",
    "ToolValidateParams",
]
