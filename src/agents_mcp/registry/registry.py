"""ToolRegistry: the read-only catalog of tools served by the dispatcher."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from agents_mcp.protocols.errors import DuplicateToolError
from agents_mcp.registry.models import ToolDescriptor, ToolHandler


class ToolRegistry(Mapping[str, ToolDescriptor]):
    """Ordered, immutable mapping of tool name to :class:`ToolDescriptor`.

    Built once at startup and handed to the dispatcher. Iteration follows
    registration order, which is also the ``tools/list`` order.

    Usage::

        registry = ToolRegistry([create_facility, list_facilities])
        registry["create_facility"].handler({"name": "A", "code": "X"})
    """

    def __init__(self, tools: Iterable[ToolDescriptor] = ()) -> None:
        self._tools: dict[str, ToolDescriptor] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise DuplicateToolError(tool.name)
            self._tools[tool.name] = tool

    def __getitem__(self, name: str) -> ToolDescriptor:
        return self._tools[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry({list(self._tools)!r})"


def define_tool(
    name: str,
    description: str = "",
    input_schema: dict[str, Any] | None = None,
) -> Any:
    """Decorator turning a handler function into a :class:`ToolDescriptor`.

    Usage::

        @define_tool(
            "create_facility",
            "Create a facility",
            {"type": "object", "properties": {...}, "required": ["name", "code"]},
        )
        async def create_facility(arguments: dict[str, Any]) -> dict[str, Any]:
            ...
    """

    def decorator(handler: ToolHandler) -> ToolDescriptor:
        kwargs: dict[str, Any] = {"name": name, "description": description, "handler": handler}
        if input_schema is not None:
            kwargs["input_schema"] = input_schema
        return ToolDescriptor(**kwargs)

    return decorator
