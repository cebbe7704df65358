"""MCP models: JSON-RPC 2.0 messages and tool definitions.

Implements the message format served for tool discovery (``tools/list``),
execution (``tools/call``) and pre-flight validation (``tools/validate``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from agents_mcp.protocols.errors import JsonRpcErrorCode

JSONRPC_VERSION = "2.0"

RequestId = int | float | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``jsonrpc`` is deliberately an unconstrained string: the dispatcher checks
    it against :data:`JSONRPC_VERSION` so a mismatch becomes a -32600 envelope
    instead of a validation failure.
    """

    jsonrpc: str | None = None
    method: str
    id: RequestId = None
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("params", mode="before")
    @classmethod
    def _none_params(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message carrying exactly one of result/error."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exactly_one_payload(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "A JSON-RPC response carries exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    @classmethod
    def ok(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def fail(
        cls,
        request_id: RequestId,
        code: JsonRpcErrorCode | int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=int(code), message=message, data=data))

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the transport.

        ``id`` is always present (``null`` included); only the populated one of
        ``result``/``error`` is emitted, and ``error.data`` only when set.
        """
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result
        return payload


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class ToolCallParams(BaseModel):
    """Parameters of ``tools/call``."""

    name: str = Field(..., min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _none_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


class ToolValidateParams(ToolCallParams):
    """Parameters of ``tools/validate``: a call plus the caller's known context."""

    context: dict[str, Any] = Field(default_factory=dict)

    @field_validator("context", mode="before")
    @classmethod
    def _none_context(cls, value: Any) -> Any:
        return {} if value is None else value
