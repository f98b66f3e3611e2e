from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

ENVIRONMENT_TYPES = {1: "docker", 2: "swarm"}

REGISTRY_TYPES = {
    1: "quay",
    2: "azure",
    3: "custom",
    4: "gitlab",
    5: "proget",
    6: "dockerhub",
    7: "ecr",
    8: "github",
}


def short_id(value: str | None, length: int = 12) -> str:
    text = str(value or "")
    if text.startswith("sha256:"):
        text = text[len("sha256:"):]
    return text[:length]


def container_name(value: str | None) -> str:
    return str(value or "").lstrip("/")


def size_mb(num_bytes: int | float | None) -> int:
    return round((num_bytes or 0) / 1024 / 1024)


def mb(num_bytes: int | float | None) -> float:
    return round((num_bytes or 0) / 1024 / 1024, 2)


def format_epoch(seconds: int | float | None) -> str | None:
    if seconds is None:
        return None
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def environment_status(status: Any) -> str:
    return "up" if status == 1 else "down"


def environment_type(type_code: Any) -> str:
    return ENVIRONMENT_TYPES.get(type_code, "other")


def stack_status(status: Any) -> str:
    return "active" if status == 1 else "inactive"


def registry_type(type_code: Any) -> str:
    return REGISTRY_TYPES.get(type_code, "unknown")


def format_ports(ports: list[dict[str, Any]] | None) -> list[str]:
    return [
        f"{p['PublicPort']}:{p.get('PrivatePort')}/{p.get('Type', 'tcp')}"
        for p in ports or []
        if p.get("PublicPort")
    ]
