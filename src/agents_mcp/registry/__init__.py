"""Tool registry: descriptors, the read-only catalog and schema introspection."""

from agents_mcp.registry.content import error_result, json_result, text_result
from agents_mcp.registry.introspector import SchemaIntrospector
from agents_mcp.registry.loader import load_registry
from agents_mcp.registry.models import ToolDescriptor
from agents_mcp.registry.registry import ToolRegistry, define_tool

__all__ = [
    "SchemaIntrospector",
    "ToolDescriptor",
    "ToolRegistry",
    "define_tool",
    "error_result",
    "json_result",
    "load_registry",
    "text_result",
]
