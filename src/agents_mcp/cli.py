"""agents-mcp CLI entrypoint."""

from __future__ import annotations

import click

from agents_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="agents-mcp")
def main() -> None:
    """agents-mcp: JSON-RPC MCP server with pre-flight parameter validation."""


# Register subcommands
from agents_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
