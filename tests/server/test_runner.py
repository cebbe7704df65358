"""Tests for server wiring."""

from __future__ import annotations

import sys
import types
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from agents_mcp.config import ServerSettings, TelemetrySettings
from agents_mcp.registry.registry import ToolRegistry
from agents_mcp.server.runner import build_dispatcher, run_server


@pytest.fixture
def catalog_module(registry: ToolRegistry, monkeypatch: pytest.MonkeyPatch) -> str:
    module = types.ModuleType("runner_catalog")
    module.registry = registry  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "runner_catalog", module)
    return "runner_catalog:registry"


class TestBuildDispatcher:
    def test_loads_registry_and_default_rules(self, catalog_module: str) -> None:
        dispatcher = build_dispatcher(ServerSettings(registry=catalog_module))
        assert list(dispatcher.registry)[0] == "create_facility"

    async def test_loads_rules_file(self, catalog_module: str, tmp_path: Path) -> None:
        rules = tmp_path / "rules.yaml"
        rules.write_text(
            "rules:\n  code:\n    category: resolvable\n    context_fields: [facilityCode]\n",
            encoding="utf-8",
        )
        dispatcher = build_dispatcher(ServerSettings(registry=catalog_module, rules_file=rules))
        response = await dispatcher.handle(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "tools/validate",
                "params": {"name": "create_facility", "context": {"facilityCode": "X"}},
            }
        )
        assert response.result is not None
        assert response.result["categorization"]["resolvable"] == ["code"]

    def test_empty_registry_without_path(self) -> None:
        assert len(build_dispatcher(ServerSettings()).registry) == 0


class TestRunServer:
    def test_runs_uvicorn_with_settings(self) -> None:
        fake_uvicorn = MagicMock()
        settings = ServerSettings(host="0.0.0.0", port=4100, log_level="DEBUG")
        with patch.dict(sys.modules, {"uvicorn": fake_uvicorn}):
            run_server(settings)

        fake_uvicorn.run.assert_called_once()
        kwargs = fake_uvicorn.run.call_args.kwargs
        assert kwargs == {"host": "0.0.0.0", "port": 4100, "log_level": "debug"}

    def test_configures_telemetry_when_enabled(self) -> None:
        settings = ServerSettings(telemetry=TelemetrySettings(enabled=True, otlp_endpoint="http://c:4317"))
        with (
            patch.dict(sys.modules, {"uvicorn": MagicMock()}),
            patch("agents_mcp.server.runner.configure_telemetry") as configure,
        ):
            run_server(settings)

        configure.assert_called_once_with(
            service_name="agents-mcp-server",
            export_to_console=False,
            otlp_endpoint="http://c:4317",
        )
