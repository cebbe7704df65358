"""SchemaIntrospector: derives required parameters from declared input schemas.

Pure logic over a :class:`~collections.abc.Mapping` of tools; never invokes a
handler.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from agents_mcp.protocols.errors import SchemaIntrospectionError
from agents_mcp.registry.models import ToolDescriptor


class SchemaIntrospector:
    """Read required-parameter lists out of the registry's JSON schemas."""

    def __init__(self, registry: Mapping[str, ToolDescriptor]) -> None:
        self._registry = registry

    def required_params(self, tool_name: str) -> list[str]:
        """Return the required parameters of *tool_name* in declaration order.

        Raises:
            SchemaIntrospectionError: If the tool is not registered, or its
                schema is not an object schema with a list-of-strings
                ``required`` entry.
        """
        tool = self._registry.get(tool_name)
        if tool is None:
            raise SchemaIntrospectionError(tool_name, "tool is not registered")
        return _required_from_schema(tool_name, tool.input_schema)

    def input_schema(self, tool_name: str) -> Mapping[str, Any]:
        """Return the declared input schema of *tool_name*."""
        tool = self._registry.get(tool_name)
        if tool is None:
            raise SchemaIntrospectionError(tool_name, "tool is not registered")
        return tool.input_schema

    def all_required_params(self) -> dict[str, list[str]]:
        """Map every registered tool to its required parameters.

        Tools whose schema cannot be introspected map to an empty list.
        """
        result: dict[str, list[str]] = {}
        for name in self._registry:
            try:
                result[name] = self.required_params(name)
            except SchemaIntrospectionError:
                result[name] = []
        return result


def _required_from_schema(tool_name: str, schema: Any) -> list[str]:
    if not isinstance(schema, Mapping):
        raise SchemaIntrospectionError(tool_name, "input schema is not an object")

    required = schema.get("required", [])
    if not isinstance(required, list) or not all(isinstance(p, str) for p in required):
        raise SchemaIntrospectionError(tool_name, "'required' is not a list of names")
    return list(dict.fromkeys(required))
