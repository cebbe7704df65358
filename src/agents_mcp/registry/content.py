"""Helpers for building ``tools/call`` result payloads."""

from __future__ import annotations

import json
from typing import Any


def text_result(text: str) -> dict[str, Any]:
    """A successful result with a single text content part."""
    return {"content": [{"type": "text", "text": text}]}


def json_result(data: Any) -> dict[str, Any]:
    """A successful result carrying *data* as pretty-printed JSON text."""
    return text_result(json.dumps(data, indent=2, default=str))


def error_result(message: str) -> dict[str, Any]:
    """A tool-level failure: a text part plus the ``isError`` marker."""
    return {"content": [{"type": "text", "text": message}], "isError": True}


def is_tool_result(value: Any) -> bool:
    """Whether *value* already has the MCP ``tools/call`` result shape."""
    return isinstance(value, dict) and isinstance(value.get("content"), list)
