"""Fixtures exposing the in-memory registry under an importable path."""

from __future__ import annotations

import sys
import types

import pytest

from agents_mcp.registry.registry import ToolRegistry


@pytest.fixture
def registry_path(registry: ToolRegistry, monkeypatch: pytest.MonkeyPatch) -> str:
    module = types.ModuleType("cli_catalog")
    module.registry = registry  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "cli_catalog", module)
    return "cli_catalog:registry"
