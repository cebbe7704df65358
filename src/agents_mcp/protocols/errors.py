"""Shared error types for the protocol layer."""

from __future__ import annotations

from enum import IntEnum


class JsonRpcErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes used by the dispatcher."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolExecutionError(ProtocolError):
    """A tool handler raised while being invoked."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Error executing tool {name}" + (f": {detail}" if detail else ""))


class SchemaIntrospectionError(ProtocolError):
    """The required parameters of a tool could not be derived from its schema."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Could not get schema for tool: {name}" + (f" ({detail})" if detail else ""))


class DuplicateToolError(ProtocolError):
    """A tool name was registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class RegistryLoadError(ProtocolError):
    """A registry import path could not be resolved into tool descriptors."""
