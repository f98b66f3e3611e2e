from __future__ import annotations

from importlib import metadata

from portainer_client import PortainerClient
from portainer_client.config_types import ClientConfig

from .config import AppConfig, normalize_base_url, require_connection


def cli_version() -> str:
    try:
        return metadata.version("portainer-tools")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def make_client(cfg: AppConfig, *, base_url_override: str | None = None) -> PortainerClient:
    base_url = normalize_base_url(base_url_override, warn=True) if base_url_override else cfg.base_url
    effective = AppConfig(base_url=base_url, api_key=cfg.api_key, write_enabled=cfg.write_enabled)
    require_connection(effective)
    return PortainerClient(
        ClientConfig(
            base_url=effective.base_url,
            api_key=effective.api_key,
            write_enabled=effective.write_enabled,
            client_version=cli_version(),
        )
    )
