from __future__ import annotations

import asyncio
import json
from typing import Any

import typer
from rich.table import Table

from .. import console
from ..config import ConfigError, load_config
from ..http import make_client
from ..tools import call_tool, get_tools, is_write_tool

TOOLS_USAGE = """\
Usage:
  portainer-tools tools list [--json]
  portainer-tools tools call <name> [--args JSON] [-a key=value ...]
"""

app = typer.Typer(help="List and call Portainer tools.\n\n" + TOOLS_USAGE, no_args_is_help=True)


def parse_assignments(values: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into arguments; values are JSON when they parse as JSON."""
    out: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected key=value, got {item!r}")
        try:
            out[key] = json.loads(raw)
        except ValueError:
            out[key] = raw
    return out


@app.command("list")
def list_tools(
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    tools = get_tools()
    if json_out:
        console.print_json(tools)
        return

    table = Table(title=f"Tools ({len(tools)})")
    table.add_column("name", style="bold")
    table.add_column("write")
    table.add_column("description")
    for defn in tools:
        table.add_row(defn["name"], "yes" if is_write_tool(defn) else "", defn["description"])
    console.console.print(table)


@app.command("call")
def call(
        name: str = typer.Argument(..., help="Tool name (see `tools list`)."),
        args_json: str | None = typer.Option(None, "--args", help="Arguments as a JSON object."),
        arg: list[str] | None = typer.Option(
            None, "-a", "--arg", help="Argument as key=value; the value is decoded as JSON when possible."
        ),
        base_url: str | None = typer.Option(None, "--base-url", help="Override Portainer URL."),
):
    arguments: dict[str, Any] = {}
    if args_json:
        try:
            loaded = json.loads(args_json)
        except ValueError as exc:
            console.err(f"--args is not valid JSON: {exc}")
            raise typer.Exit(code=2)
        if not isinstance(loaded, dict):
            console.err("--args must be a JSON object.")
            raise typer.Exit(code=2)
        arguments.update(loaded)
    try:
        arguments.update(parse_assignments(arg or []))
    except ValueError as exc:
        console.err(str(exc))
        raise typer.Exit(code=2)

    try:
        client = make_client(load_config(), base_url_override=base_url)
    except ConfigError as exc:
        console.err(str(exc))
        raise typer.Exit(code=2)

    response = asyncio.run(call_tool(client, name, arguments))
    console.print_tool_response(response)
    if response.get("isError"):
        raise typer.Exit(code=1)
