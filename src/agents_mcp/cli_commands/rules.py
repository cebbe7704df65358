"""``agents-mcp rules``: inspect the parameter categorization rules."""

from __future__ import annotations

import sys

import click

from agents_mcp.cli_commands._output import console, print_json, print_rules_table
from agents_mcp.cli_commands._settings import config_option, resolve_settings, rules_option


@click.group()
def rules() -> None:
    """Inspect categorization rules."""


@rules.command("show")
@config_option
@rules_option
@click.option("--json", "as_json", is_flag=True, help="Print the rule set as JSON.")
def show(config_path: str | None, rules_file: str | None, as_json: bool) -> None:
    """Show the effective rule set (built-in defaults unless a file is given)."""
    from agents_mcp.config import ConfigError
    from agents_mcp.validation.rules import load_rules

    settings = resolve_settings(config_path, rules_file=rules_file)
    try:
        rule_set = load_rules(settings.rules_file)
    except ConfigError as exc:
        console.print(f"[red]Rules error:[/red] {exc}")
        sys.exit(1)

    if as_json:
        print_json(rule_set.model_dump(mode="json"))
        return

    print_rules_table(rule_set)
