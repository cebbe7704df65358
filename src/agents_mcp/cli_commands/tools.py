"""``agents-mcp tools``: inspect the registry and validate calls offline."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from agents_mcp.cli_commands._output import (
    console,
    print_json,
    print_tools_table,
    print_validation_report,
)
from agents_mcp.cli_commands._settings import (
    config_option,
    registry_option,
    resolve_settings,
    rules_option,
)


@click.group()
def tools() -> None:
    """Inspect registered tools."""


@tools.command("list")
@config_option
@registry_option
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(config_path: str | None, registry: str | None, as_json: bool) -> None:
    """List the tools a server would advertise."""
    from agents_mcp.registry.loader import load_registry

    settings = resolve_settings(config_path, registry=registry)
    try:
        catalog = load_registry(settings.registry)
    except Exception as exc:
        console.print(f"[red]Registry error:[/red] {exc}")
        sys.exit(1)

    if as_json:
        print_json({"tools": [t.to_definition().model_dump(by_alias=True) for t in catalog.values()]})
        return

    if not catalog:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    print_tools_table(catalog)


@tools.command("validate")
@click.argument("name")
@config_option
@registry_option
@rules_option
@click.option("--args", "args_json", default="{}", help="Tool arguments as a JSON object.")
@click.option("--context", "context_json", default="{}", help="Known context as a JSON object.")
@click.option("--json", "as_json", is_flag=True, help="Print the raw validation report.")
def validate(
    name: str,
    config_path: str | None,
    registry: str | None,
    rules_file: str | None,
    args_json: str,
    context_json: str,
    as_json: bool,
) -> None:
    """Run tools/validate for tool NAME without starting a server."""
    from agents_mcp.server.runner import build_dispatcher
    from agents_mcp.validation.models import ValidationReport

    arguments = _parse_object(args_json, "--args")
    context = _parse_object(context_json, "--context")

    settings = resolve_settings(config_path, registry=registry, rules_file=rules_file)
    try:
        dispatcher = build_dispatcher(settings)
    except Exception as exc:
        console.print(f"[red]Startup error:[/red] {exc}")
        sys.exit(1)

    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/validate",
        "params": {"name": name, "arguments": arguments, "context": context},
    }
    response = asyncio.run(dispatcher.handle(request))

    if response.error is not None:
        console.print(f"[red]Validation error ({response.error.code}):[/red] {response.error.message}")
        sys.exit(1)

    if as_json:
        print_json(response.result)
        return

    print_validation_report(ValidationReport.model_validate(response.result))


def _parse_object(raw: str, option: str) -> dict[str, Any]:
    try:
        value = json.loads(raw)
    except ValueError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint=option) from exc
    if not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint=option)
    return value
