from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    api_key: str
    write_enabled: bool = False
    timeout_s: float = 30.0
    client_version: str | None = None
