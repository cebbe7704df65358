"""Server layer: JSON-RPC dispatch and its HTTP transport."""

from agents_mcp.server.dispatcher import RequestDispatcher

__all__ = ["RequestDispatcher"]
