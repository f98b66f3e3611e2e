"""Environment, dashboard and Portainer system tools."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from portainer_client import PortainerClient

from ..formatting import environment_status, environment_type, mb, registry_type
from .args import EnvironmentArgs, NoArgs
from .response import ToolResponse, format_response
from .schema import tool

DEFINITIONS = [
    tool(
        "list_environments",
        "List all Portainer environments (Docker endpoints). Returns ID, name, status (up/down), "
        "type (docker/swarm) and URL. Use this first to get environment IDs for other tools.",
        NoArgs,
    ),
    tool(
        "environment_dashboard",
        "Quick overview of an environment: container counts (running/stopped/healthy/unhealthy), "
        "image count and disk usage, volume, network and stack counts.",
        EnvironmentArgs,
    ),
    tool(
        "system_info",
        "Portainer server info: version, edition, platform, update availability and connected agents.",
        NoArgs,
    ),
    tool(
        "list_registries",
        "List configured Docker registries (Docker Hub, GitHub, GitLab, ECR, ...) with URL, type "
        "and whether authentication is set.",
        NoArgs,
    ),
]


async def list_environments(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    NoArgs.model_validate(args)
    envs = await client.get_environments()
    return format_response(
        {
            "items": [
                {
                    "id": e.get("Id"),
                    "name": e.get("Name"),
                    "status": environment_status(e.get("Status")),
                    "type": environment_type(e.get("Type")),
                    "url": e.get("URL"),
                }
                for e in envs or []
            ],
            "count": len(envs or []),
        }
    )


def summarize_dashboard(env_id: int, data: dict[str, Any]) -> dict[str, Any]:
    containers = data.get("containers") or {}
    images = data.get("images") or {}
    return {
        "environment_id": env_id,
        "containers": {
            key: int(containers.get(key) or 0)
            for key in ("running", "stopped", "healthy", "unhealthy", "total")
        },
        "images": {"total": int(images.get("total") or 0), "size_mb": mb(images.get("size"))},
        "volumes": int(data.get("volumes") or 0),
        "networks": int(data.get("networks") or 0),
        "stacks": int(data.get("stacks") or 0),
        "services": int(data.get("services") or 0),
    }


async def environment_dashboard(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    env_id = EnvironmentArgs.model_validate(args).environment_id
    data = await client.get_dashboard(env_id)
    return format_response(summarize_dashboard(env_id, data or {}))


async def system_info(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    NoArgs.model_validate(args)
    info, version = await asyncio.gather(client.get_system_info(), client.get_system_version())
    return format_response(
        {
            "version": version.get("ServerVersion"),
            "edition": version.get("ServerEdition") or info.get("edition"),
            "platform": info.get("platform"),
            "update_available": bool(version.get("UpdateAvailable")),
            "latest_version": version.get("LatestVersion") or None,
            "agents": int(info.get("agents") or 0),
            "edge_agents": int(info.get("edgeAgents") or 0),
        }
    )


async def list_registries(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    NoArgs.model_validate(args)
    registries = await client.get_registries()
    return format_response(
        {
            "items": [
                {
                    "id": r.get("Id"),
                    "name": r.get("Name"),
                    "url": r.get("URL"),
                    "type": registry_type(r.get("Type")),
                    "authentication": bool(r.get("Authentication")),
                }
                for r in registries or []
            ],
            "count": len(registries or []),
        }
    )


HANDLERS = {
    "list_environments": list_environments,
    "environment_dashboard": environment_dashboard,
    "system_info": system_info,
    "list_registries": list_registries,
}
