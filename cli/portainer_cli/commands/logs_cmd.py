from __future__ import annotations

import asyncio
import time

import typer

from portainer_client import PortainerClientError
from portainer_client.client import DEFAULT_TAIL, MAX_TAIL

from .. import console
from ..config import ConfigError, load_config
from ..http import make_client

FOLLOW_POLL_S = 2.0


def _diff_lines(previous: list[str], current: list[str]) -> list[str]:
    if not previous:
        return current
    last = previous[-1]
    for idx in range(len(current) - 1, -1, -1):
        if current[idx] == last:
            return current[idx + 1:]
    return current


def _render_client_error(exc: PortainerClientError, *, target: str) -> None:
    if exc.status_code == 404:
        console.err(f"{target} not found.")
        return
    if exc.status_code in (401, 403):
        console.err(f"{exc.message}. Check PORTAINER_API_KEY.")
        return
    console.err(f"Failed to fetch logs: {exc.message}")


def logs(
        environment_id: int = typer.Argument(..., help="Portainer environment ID."),
        container: str = typer.Argument(..., help="Container ID or name."),
        tail: int = typer.Option(DEFAULT_TAIL, "--tail", "-n", help=f"Number of lines to show (max {MAX_TAIL})."),
        follow: bool = typer.Option(False, "--follow", "-f", help="Follow logs by polling."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override Portainer URL."),
):
    """Show combined stdout/stderr of a container."""
    try:
        client = make_client(load_config(), base_url_override=base_url)
    except ConfigError as exc:
        console.err(str(exc))
        raise typer.Exit(code=2)

    previous: list[str] = []
    while True:
        try:
            text = asyncio.run(client.fetch_logs(environment_id, container, tail))
        except PortainerClientError as exc:
            _render_client_error(exc, target=f"container {container}")
            raise typer.Exit(code=2)

        current = text.splitlines()
        lines = _diff_lines(previous, current) if follow else current
        if not lines and not follow:
            console.info("(no logs)")
        for line in lines:
            print(line)
        if not follow:
            return
        previous = current
        time.sleep(FOLLOW_POLL_S)
