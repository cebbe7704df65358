"""``agents-mcp serve``: run the JSON-RPC endpoint."""

from __future__ import annotations

import logging
import sys

import click

from agents_mcp.cli_commands._output import console
from agents_mcp.cli_commands._settings import (
    config_option,
    registry_option,
    resolve_settings,
    rules_option,
)


@click.command()
@config_option
@registry_option
@rules_option
@click.option("--host", envvar="AGENTS_MCP_HOST", default=None, help="Bind address.")
@click.option("--port", "-p", type=int, envvar="AGENTS_MCP_PORT", default=None, help="Bind port.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    envvar="AGENTS_MCP_LOG_LEVEL",
    default=None,
    help="Logging level.",
)
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
def serve(
    config_path: str | None,
    registry: str | None,
    rules_file: str | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve the MCP JSON-RPC endpoint over HTTP."""
    from agents_mcp.server.runner import run_server

    settings = resolve_settings(
        config_path,
        registry=registry,
        rules_file=rules_file,
        host=host,
        port=port,
        log_level=log_level.upper() if log_level else None,
    )
    if telemetry:
        settings.telemetry.enabled = True

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run_server(settings)
    except Exception as exc:
        console.print(f"[red]Server error:[/red] {exc}")
        sys.exit(1)
