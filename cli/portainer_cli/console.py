from __future__ import annotations

from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape

console = Console()
# diagnostics go to stderr so stdout stays parseable
err_console = Console(stderr=True)


def print_json(data) -> None:
    console.print_json(data=data)


def info(msg: str) -> None:
    console.print(f"[bold cyan]•[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]OK[/] {escape(msg)}")


def warn(msg: str) -> None:
    err_console.print(f"[bold yellow]WARN[/] {escape(msg)}")


def err(msg: str) -> None:
    err_console.print(f"[bold red]ERR[/] {escape(msg)}")


def print_tool_response(response: Mapping[str, Any]) -> None:
    """Write each text part of a tool response verbatim, without rich markup or wrapping."""
    for part in response.get("content") or []:
        console.out(part.get("text", ""), highlight=False)


def print(*args, **kwargs):
    """Proxy to underlying rich Console.print()."""
    console.print(*args, **kwargs)
