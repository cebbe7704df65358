"""Tests for the FastAPI transport."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient

from agents_mcp.config import ServerSettings
from agents_mcp.registry.models import ToolDescriptor
from agents_mcp.registry.registry import ToolRegistry
from agents_mcp.server.app import create_app
from agents_mcp.server.dispatcher import RequestDispatcher


@pytest.fixture
def client(registry: ToolRegistry) -> TestClient:
    settings = ServerSettings(remote_server_url="http://remote:3000/sse")
    return TestClient(create_app(RequestDispatcher(registry, settings=settings)))


class TestRpcEndpoint:
    def test_tools_list(self, client: TestClient) -> None:
        resp = client.post("/sse", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["jsonrpc"] == "2.0"
        assert body["id"] == 1
        assert len(body["result"]["tools"]) == 4

    def test_protocol_errors_use_http_200(self, client: TestClient) -> None:
        resp = client.post("/sse", json={"jsonrpc": "1.0", "id": 1, "method": "tools/list"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["error"]["code"] == -32600
        assert "result" not in body

    def test_unknown_tool_call_is_result(self, client: TestClient) -> None:
        resp = client.post(
            "/sse",
            json={"jsonrpc": "2.0", "id": "c1", "method": "tools/call", "params": {"name": "foo"}},
        )
        body = resp.json()
        assert "error" not in body
        assert body["result"]["isError"] is True
        assert body["result"]["content"][0]["text"] == "Unknown tool: foo"

    def test_resources_read(self, client: TestClient) -> None:
        resp = client.post(
            "/sse",
            json={"jsonrpc": "2.0", "id": 2, "method": "resources/read", "params": {"uri": "x://y"}},
        )
        assert resp.status_code == 200
        assert resp.json()["error"]["code"] == -32602

    def test_malformed_json(self, client: TestClient) -> None:
        resp = client.post(
            "/sse", content=b"{oops", headers={"content-type": "application/json"}
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["error"]["code"] == -32700
        assert body["id"] is None

    def test_custom_endpoint(self, registry: ToolRegistry) -> None:
        settings = ServerSettings(endpoint="/mcp")
        client = TestClient(create_app(RequestDispatcher(registry, settings=settings)))
        resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "prompts/list"})
        assert resp.json()["result"] == {"prompts": []}


class TestInfoEndpoints:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["tools"] == 4
        assert "timestamp" in body

    def test_root(self, client: TestClient) -> None:
        body = client.get("/").json()
        assert body["name"] == "agents-mcp-server"
        assert body["endpoints"]["mcp"] == "/sse (POST)"
        assert body["remoteServer"] == "http://remote:3000/sse"
        assert "tools/validate" in body["methods"]
        assert body["tools"] == 4


class TestResultSerialization:
    def test_unserializable_tool_result_is_error_result(self) -> None:
        def stamped(arguments: dict[str, Any]) -> dict[str, Any]:
            return {
                "content": [{"type": "text", "text": "done"}],
                "_meta": {"at": datetime(2024, 1, 1)},
            }

        registry = ToolRegistry([ToolDescriptor(name="stamped", handler=stamped)])
        client = TestClient(create_app(RequestDispatcher(registry)))

        resp = client.post(
            "/sse",
            json={"jsonrpc": "2.0", "id": 5, "method": "tools/call", "params": {"name": "stamped"}},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 5
        assert "error" not in body
        assert body["result"]["isError"] is True
        assert "not JSON-serializable" in body["result"]["content"][0]["text"]


class TestExplicitSettings:
    def test_settings_override_dispatcher_settings(self, registry: ToolRegistry) -> None:
        dispatcher = RequestDispatcher(registry, settings=ServerSettings(endpoint="/sse"))
        settings = ServerSettings(
            endpoint="/rpc", server_name="edge", remote_server_url="http://r/sse"
        )
        client = TestClient(create_app(dispatcher, settings))

        resp = client.post("/rpc", json={"jsonrpc": "2.0", "id": 1, "method": "prompts/list"})
        assert resp.json()["result"] == {"prompts": []}
        stale = client.post("/sse", json={"jsonrpc": "2.0", "id": 1, "method": "prompts/list"})
        assert stale.status_code == 404

        body = client.get("/").json()
        assert body["name"] == "edge"
        assert body["endpoints"]["mcp"] == "/rpc (POST)"
        assert body["remoteServer"] == "http://r/sse"
