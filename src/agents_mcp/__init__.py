"""Agents MCP server: JSON-RPC tool dispatch with pre-flight parameter validation."""

from __future__ import annotations

__version__ = "0.1.0"
