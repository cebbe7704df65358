"""Shared CLI output formatters."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from agents_mcp.registry.introspector import SchemaIntrospector
from agents_mcp.registry.models import ToolDescriptor  # noqa: TC001
from agents_mcp.validation.models import RuleSet, ValidationReport  # noqa: TC001

console = Console()


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def print_tools_table(registry: Mapping[str, ToolDescriptor]) -> None:
    """Pretty-print the registered tools and their required parameters."""
    required = SchemaIntrospector(registry).all_required_params()

    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Required")
    table.add_column("Description")

    for name, tool in registry.items():
        table.add_row(name, ", ".join(required[name]) or "-", _truncate(tool.description))

    console.print(table)


def print_validation_report(report: ValidationReport) -> None:
    """Pretty-print a ``tools/validate`` report."""
    status = "[green]valid[/green]" if report.validation.is_valid else "[red]incomplete[/red]"
    console.print(f"\n[bold]{report.tool_name}[/bold]: {status} (confidence {report.confidence})")
    console.print(f"  Required: {', '.join(report.required_params) or '-'}")
    console.print(f"  Provided: {', '.join(report.provided_params) or '-'}")
    console.print(f"  Missing: {', '.join(report.missing_params) or '-'}")

    if report.missing_params:
        cat = report.categorization
        console.print("\n[bold]Missing parameters:[/bold]")
        console.print(f"  Resolvable from context: {', '.join(cat.resolvable) or '-'}")
        console.print(f"  Must ask user: {', '.join(cat.must_ask_user) or '-'}")
        console.print(f"  Can infer: {', '.join(cat.can_infer) or '-'}")

    for invalid in report.validation.invalid_params:
        console.print(f"  [red]{invalid.param}[/red]: {invalid.error}")


def print_rules_table(rules: RuleSet) -> None:
    """Pretty-print a categorization rule set."""
    table = Table(title="Categorization Rules")
    table.add_column("Parameter", style="cyan")
    table.add_column("Category")
    table.add_column("Context fields")

    for param, rule in rules.rules.items():
        table.add_row(param, rule.category.value, ", ".join(rule.context_fields) or "-")

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
