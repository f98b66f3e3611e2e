"""Image, volume and network tools."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field

from portainer_client import PortainerClient
from portainer_client.actions import ImageAction, NetworkAction, VolumeAction

from ..formatting import format_epoch, short_id, size_mb
from .args import EnvironmentArgs, EnvironmentId
from .response import ToolResponse, format_response
from .schema import tool


class ManageImageArgs(BaseModel):
    environment_id: EnvironmentId
    action: ImageAction = Field(description="pull=download from registry, remove=delete from host")
    image: str = Field(
        min_length=1,
        description="For pull: image:tag (e.g. nginx:latest). For remove: image ID or name:tag",
    )


class ManageVolumeArgs(BaseModel):
    environment_id: EnvironmentId
    action: VolumeAction = Field(description="create=new volume, remove=delete volume (fails if in use)")
    name: str = Field(min_length=1, description="Volume name")


class ManageNetworkArgs(BaseModel):
    environment_id: EnvironmentId
    action: NetworkAction = Field(description="create=new network, remove=delete network (fails if in use)")
    name: str = Field(min_length=1, description="For create: network name. For remove: network name or ID")
    subnet: str | None = Field(
        default=None,
        description="For create only: CIDR subnet (e.g. 172.20.0.0/16). Docker assigns one if omitted.",
    )


DEFINITIONS = [
    tool(
        "list_images",
        "List Docker images in an environment with ID, tags, size (MB) and creation date.",
        EnvironmentArgs,
    ),
    tool(
        "manage_image",
        "Pull an image from a registry or remove an existing image.",
        ManageImageArgs,
        write=True,
    ),
    tool(
        "list_volumes",
        "List Docker volumes in an environment with name, driver and mount point.",
        EnvironmentArgs,
    ),
    tool(
        "manage_volume",
        "Create a new volume or remove an existing one.",
        ManageVolumeArgs,
        write=True,
    ),
    tool(
        "list_networks",
        "List Docker networks in an environment with ID, name, driver, scope and subnet.",
        EnvironmentArgs,
    ),
    tool(
        "manage_network",
        "Create a new network or remove an existing one.",
        ManageNetworkArgs,
        write=True,
    ),
]


async def list_images(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    images = await client.get_images(EnvironmentArgs.model_validate(args).environment_id) or []
    return format_response(
        {
            "items": [
                {
                    "id": short_id(i.get("Id")),
                    "tags": i.get("RepoTags") or ["<none>"],
                    "size_mb": size_mb(i.get("Size")),
                    "created": format_epoch(i.get("Created")),
                }
                for i in images
            ],
            "count": len(images),
        }
    )


async def manage_image(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ManageImageArgs.model_validate(args)
    await client.image_action(a.environment_id, a.action, a.image)
    return format_response({"success": True, "message": f"Image {a.action.value} completed"})


async def list_volumes(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    result = await client.get_volumes(EnvironmentArgs.model_validate(args).environment_id)
    volumes = result.get("Volumes") or []
    return format_response(
        {
            "items": [
                {"name": v.get("Name"), "driver": v.get("Driver"), "mountpoint": v.get("Mountpoint")}
                for v in volumes
            ],
            "count": len(volumes),
        }
    )


async def manage_volume(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ManageVolumeArgs.model_validate(args)
    volume = await client.volume_action(a.environment_id, a.action, a.name)
    if a.action is VolumeAction.CREATE:
        return format_response({"success": True, "name": volume.get("Name"), "mountpoint": volume.get("Mountpoint")})
    return format_response({"success": True, "message": f"Volume {a.name} removed"})


async def list_networks(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    networks = await client.get_networks(EnvironmentArgs.model_validate(args).environment_id) or []
    items = []
    for n in networks:
        ipam_config = (n.get("IPAM") or {}).get("Config") or []
        items.append(
            {
                "id": short_id(n.get("Id")),
                "name": n.get("Name"),
                "driver": n.get("Driver"),
                "scope": n.get("Scope"),
                "subnet": ipam_config[0].get("Subnet") if ipam_config else None,
            }
        )
    return format_response({"items": items, "count": len(items)})


async def manage_network(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = ManageNetworkArgs.model_validate(args)
    network = await client.network_action(a.environment_id, a.action, a.name, a.subnet)
    if a.action is NetworkAction.CREATE:
        return format_response({"success": True, "id": network.get("Id"), "name": a.name})
    return format_response({"success": True, "message": "Network removed"})


HANDLERS = {
    "list_images": list_images,
    "manage_image": manage_image,
    "list_volumes": list_volumes,
    "manage_volume": manage_volume,
    "list_networks": list_networks,
    "manage_network": manage_network,
}
