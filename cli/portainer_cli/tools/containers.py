"""Container tools."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field

from portainer_client import PortainerClient
from portainer_client.actions import ContainerAction
from portainer_client.client import DEFAULT_TAIL, MAX_TAIL

from ..formatting import container_name, format_ports, mb, short_id
from .args import ContainerId, EnvironmentId
from .response import ToolResponse, format_response
from .schema import tool


class ListContainersArgs(BaseModel):
    environment_id: EnvironmentId
    all: bool = Field(default=False, description="Include stopped containers (default: false)")


class ContainerArgs(BaseModel):
    environment_id: EnvironmentId
    container_id: ContainerId


class ContainerLogsArgs(ContainerArgs):
    tail: int | None = Field(
        default=None,
        description=f"Number of lines from the end (default: {DEFAULT_TAIL}, max: {MAX_TAIL})",
    )


class ContainerActionArgs(ContainerArgs):
    action: ContainerAction = Field(
        description="start=run stopped container, stop=graceful shutdown, restart=stop+start, "
        "kill=force stop, remove=delete container",
    )


DEFINITIONS = [
    tool(
        "list_containers",
        "List containers in an environment. By default only running containers are shown. "
        "Returns ID, name, image, state, status and published ports.",
        ListContainersArgs,
    ),
    tool(
        "inspect_container",
        "Detailed container info: config, environment variables, labels, networks, mounts and state.",
        ContainerArgs,
    ),
    tool(
        "container_logs",
        "Recent logs from a container as combined stdout/stderr output.",
        ContainerLogsArgs,
    ),
    tool(
        "container_action",
        "Control a container: start, stop, restart, kill or remove it.",
        ContainerActionArgs,
        write=True,
    ),
    tool(
        "container_stats",
        "Point-in-time resource usage: CPU %, memory usage/limit/% and network I/O.",
        ContainerArgs,
    ),
]


async def list_containers(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ListContainersArgs.model_validate(args)
    containers = await client.get_containers(a.environment_id, all=a.all)
    return format_response(
        {
            "items": [
                {
                    "id": short_id(c.get("Id")),
                    "name": container_name((c.get("Names") or [""])[0]),
                    "image": c.get("Image"),
                    "state": c.get("State"),
                    "status": c.get("Status"),
                    "ports": format_ports(c.get("Ports")),
                }
                for c in containers or []
            ],
            "count": len(containers or []),
        }
    )


async def inspect_container(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ContainerArgs.model_validate(args)
    container = await client.inspect_container(a.environment_id, a.container_id)
    config = container.get("Config") or {}
    network_settings = container.get("NetworkSettings") or {}
    return format_response(
        {
            "id": container.get("Id"),
            "name": container_name(container.get("Name")),
            "image": config.get("Image"),
            "state": container.get("State"),
            "config": {
                "env": config.get("Env"),
                "cmd": config.get("Cmd"),
                "labels": config.get("Labels"),
            },
            "networks": network_settings.get("Networks"),
            "mounts": container.get("Mounts"),
        }
    )


async def container_logs(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ContainerLogsArgs.model_validate(args)
    logs = await client.fetch_logs(a.environment_id, a.container_id, DEFAULT_TAIL if a.tail is None else a.tail)
    return format_response({"logs": logs})


async def container_action(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ContainerActionArgs.model_validate(args)
    await client.container_action(a.environment_id, a.container_id, a.action)
    return format_response({"success": True, "message": f"Container {a.action.value} completed"})


def summarize_stats(stats: Mapping[str, Any]) -> dict[str, Any]:
    """Reduce a Docker stats sample to the numbers `docker stats` shows."""
    cpu = stats.get("cpu_stats") or {}
    precpu = stats.get("precpu_stats") or {}
    cpu_delta = (cpu.get("cpu_usage") or {}).get("total_usage", 0) - (precpu.get("cpu_usage") or {}).get(
        "total_usage", 0
    )
    system_delta = (cpu.get("system_cpu_usage") or 0) - (precpu.get("system_cpu_usage") or 0)
    online_cpus = cpu.get("online_cpus") or len((cpu.get("cpu_usage") or {}).get("percpu_usage") or []) or 1
    cpu_percent = 0.0
    if cpu_delta > 0 and system_delta > 0:
        cpu_percent = round(cpu_delta / system_delta * online_cpus * 100, 2)

    memory = stats.get("memory_stats") or {}
    mem_detail = memory.get("stats") or {}
    # page cache is reclaimable: cgroup v2 reports inactive_file, v1 total_inactive_file
    cache = mem_detail.get("inactive_file", mem_detail.get("total_inactive_file", 0))
    used = max((memory.get("usage") or 0) - (cache or 0), 0)
    limit = memory.get("limit") or 0
    mem_percent = round(used / limit * 100, 2) if limit else 0.0

    networks = stats.get("networks") or {}
    rx = sum(n.get("rx_bytes", 0) for n in networks.values())
    tx = sum(n.get("tx_bytes", 0) for n in networks.values())

    return {
        "cpu_percent": cpu_percent,
        "memory": {"usage_mb": mb(used), "limit_mb": mb(limit), "percent": mem_percent},
        "network": {"rx_mb": mb(rx), "tx_mb": mb(tx)},
    }


async def container_stats(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ContainerArgs.model_validate(args)
    stats = await client.get_container_stats(a.environment_id, a.container_id)
    return format_response(summarize_stats(stats or {}))


HANDLERS = {
    "list_containers": list_containers,
    "inspect_container": inspect_container,
    "container_logs": container_logs,
    "container_action": container_action,
    "container_stats": container_stats,
}
