"""Shared option handling: config file plus command-line overrides."""

from __future__ import annotations

import sys
from typing import Any

import click

from agents_mcp.cli_commands._output import console
from agents_mcp.config import ConfigError, ServerSettings, load_settings

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="AGENTS_MCP_CONFIG",
    default=None,
    help="Settings YAML file.",
)
registry_option = click.option(
    "--registry",
    "-r",
    envvar="AGENTS_MCP_REGISTRY",
    default=None,
    help="Tool registry import path, e.g. 'my_tools.catalog:registry'.",
)
rules_option = click.option(
    "--rules",
    "rules_file",
    type=click.Path(exists=True, dir_okay=False),
    envvar="AGENTS_MCP_RULES",
    default=None,
    help="Categorization rules YAML file.",
)


def resolve_settings(config_path: str | None, **overrides: Any) -> ServerSettings:
    """Load *config_path* and apply CLI overrides; exit with code 1 on errors."""
    try:
        return load_settings(config_path).with_overrides(**overrides)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)
