"""Data models for the tool registry."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from agents_mcp.protocols.mcp.models import MCPToolDef

ToolHandler = Callable[[dict[str, Any]], Any]


class ToolDescriptor(BaseModel):
    """A registered tool: its public definition plus the behavior that runs it.

    ``handler`` receives the ``arguments`` mapping of a ``tools/call`` and
    returns a result (or an awaitable of one). Raising signals a tool failure.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str = Field(..., min_length=1)
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
    )
    handler: ToolHandler

    def to_definition(self) -> MCPToolDef:
        """Return the ``tools/list`` entry for this tool."""
        return MCPToolDef(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )
