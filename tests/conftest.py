"""Shared fixtures: an in-memory registry double and a dispatcher over it."""

from __future__ import annotations

from typing import Any

import pytest

from agents_mcp.registry.models import ToolDescriptor
from agents_mcp.registry.registry import ToolRegistry
from agents_mcp.server.dispatcher import RequestDispatcher
from agents_mcp.validation.models import CategorizationRule, ParamCategory, RuleSet


async def _create_facility(arguments: dict[str, Any]) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": f"created {arguments['name']}"}]}


def _record_shipment(arguments: dict[str, Any]) -> dict[str, Any]:
    return {"shipment_id": arguments.get("shipment_id"), "status": "recorded"}


async def _broken(arguments: dict[str, Any]) -> dict[str, Any]:
    raise ValueError("database unavailable")


@pytest.fixture
def facility_tool() -> ToolDescriptor:
    return ToolDescriptor(
        name="create_facility",
        description="Create a facility",
        input_schema={
            "type": "object",
            "properties": {"name": {"type": "string"}, "code": {"type": "string"}},
            "required": ["name", "code"],
        },
        handler=_create_facility,
    )


@pytest.fixture
def registry(facility_tool: ToolDescriptor) -> ToolRegistry:
    return ToolRegistry(
        [
            facility_tool,
            ToolDescriptor(
                name="record_shipment_event",
                description="Record a yard event for a shipment",
                input_schema={
                    "type": "object",
                    "properties": {
                        "shipment_id": {"type": "string"},
                        "facilityId": {"type": "string"},
                        "detection_time": {"type": "string"},
                        "event_type": {"type": "string"},
                    },
                    "required": ["shipment_id", "facilityId", "detection_time", "event_type"],
                },
                handler=_record_shipment,
            ),
            ToolDescriptor(name="broken_tool", description="Always fails", handler=_broken),
            ToolDescriptor(
                name="opaque_schema",
                description="Schema without a usable required list",
                input_schema={"type": "object", "required": "name"},
                handler=_record_shipment,
            ),
        ]
    )


@pytest.fixture
def code_rules() -> RuleSet:
    """Rules where ``code`` is resolvable from a ``facilityCode`` in context."""
    return RuleSet(
        rules={
            "code": CategorizationRule(
                category=ParamCategory.RESOLVABLE, context_fields=["facilityCode"]
            ),
        }
    )


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> RequestDispatcher:
    return RequestDispatcher(registry)
