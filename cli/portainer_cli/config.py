from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from . import console

APP_NAME = "portainer-tools"
CONFIG_FILENAME = "config.toml"

ENV_URL = "PORTAINER_URL"
ENV_API_KEY = "PORTAINER_API_KEY"
ENV_WRITE_ENABLED = "PORTAINER_WRITE_ENABLED"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_WARNED_BASE_URL_SCHEME = False


class ConfigError(RuntimeError):
    pass


@dataclass
class AppConfig:
    base_url: str = ""
    api_key: str = ""
    write_enabled: bool = False


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(base_url="", api_key="", write_enabled=False)


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in _TRUE_VALUES


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "api_key": cfg.api_key,
        "write_enabled": cfg.write_enabled,
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    return AppConfig(
        base_url=normalize_base_url(str(data.get("base_url") or ""), warn=True),
        api_key=str(data.get("api_key") or "").strip(),
        write_enabled=parse_bool(data.get("write_enabled")),
    )


def apply_env(cfg: AppConfig) -> AppConfig:
    """Environment variables win over the config file."""
    base_url = os.getenv(ENV_URL, "").strip()
    api_key = os.getenv(ENV_API_KEY, "").strip()
    write_raw = os.getenv(ENV_WRITE_ENABLED)
    return AppConfig(
        base_url=normalize_base_url(base_url, warn=True) if base_url else cfg.base_url,
        api_key=api_key or cfg.api_key,
        write_enabled=parse_bool(write_raw) if write_raw is not None else cfg.write_enabled,
    )


def load_file_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def load_config() -> AppConfig:
    return apply_env(load_file_config())


def require_connection(cfg: AppConfig) -> None:
    missing = []
    if not cfg.base_url:
        missing.append(ENV_URL)
    if not cfg.api_key:
        missing.append(ENV_API_KEY)
    if missing:
        raise ConfigError(
            f"Missing {' and '.join(missing)}. Set the environment variable(s) or run `portainer-tools config set`."
        )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
