from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, load_file_config, normalize_base_url, save_config

app = typer.Typer(help="Show or change saved connection settings.", no_args_is_help=True)


@app.command("show")
def show_config():
    """Effective settings (environment variables applied over the config file)."""
    cfg = load_config()
    key_state = "(set)" if cfg.api_key else "(empty)"
    console.print(
        f"base_url={cfg.base_url or '-'} api_key={key_state} write_enabled={str(cfg.write_enabled).lower()}",
        markup=False,
    )
    console.print(f"file={config_path()}", markup=False)


@app.command("set")
def set_config(
        base_url: str | None = typer.Option(None, "--base-url", help="Portainer URL, e.g. https://portainer.example:9443"),
        api_key: str | None = typer.Option(None, "--api-key", help="Portainer access token (X-API-Key)."),
        write_enabled: bool | None = typer.Option(
            None, "--write/--read-only", help="Allow or block operations that change remote state."
        ),
):
    cfg = load_file_config()

    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    if api_key is not None:
        cfg.api_key = api_key.strip()
    if write_enabled is not None:
        cfg.write_enabled = write_enabled

    path = save_config(cfg)
    console.ok(f"Config updated: {path}")
