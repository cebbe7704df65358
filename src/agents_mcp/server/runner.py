"""Wire settings, registry and rules into a running server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agents_mcp.registry.loader import load_registry
from agents_mcp.server.dispatcher import RequestDispatcher
from agents_mcp.utils.telemetry import configure_telemetry
from agents_mcp.validation.rules import load_rules

if TYPE_CHECKING:
    from agents_mcp.config import ServerSettings

logger = logging.getLogger(__name__)


def build_dispatcher(settings: ServerSettings) -> RequestDispatcher:
    """Load the configured registry and rule set and build a dispatcher."""
    registry = load_registry(settings.registry)
    rules = load_rules(settings.rules_file)
    return RequestDispatcher(registry, rules=rules, settings=settings)


def run_server(settings: ServerSettings) -> None:
    """Run uvicorn with settings-backed host/port values."""
    import uvicorn

    from agents_mcp.server.app import create_app

    if settings.telemetry.enabled:
        configure_telemetry(
            service_name=settings.server_name,
            export_to_console=settings.telemetry.export_to_console,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )

    dispatcher = build_dispatcher(settings)
    app = create_app(dispatcher, settings)

    logger.info("MCP endpoint: http://%s:%d%s", settings.host, settings.port, settings.endpoint)
    logger.info("Total tools available: %d", len(dispatcher.registry))
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
