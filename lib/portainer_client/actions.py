from __future__ import annotations

from enum import Enum
from typing import Mapping


class ContainerAction(str, Enum):
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    KILL = "kill"
    REMOVE = "remove"


class StackAction(str, Enum):
    START = "start"
    STOP = "stop"
    REMOVE = "remove"


class ImageAction(str, Enum):
    PULL = "pull"
    REMOVE = "remove"


class VolumeAction(str, Enum):
    CREATE = "create"
    REMOVE = "remove"


class NetworkAction(str, Enum):
    CREATE = "create"
    REMOVE = "remove"


Route = tuple[str, str]

_CONTAINER = "/endpoints/{env_id}/docker/containers/{container_id}"

CONTAINER_ACTION_ROUTES: dict[ContainerAction, Route] = {
    ContainerAction.START: ("POST", _CONTAINER + "/start"),
    ContainerAction.STOP: ("POST", _CONTAINER + "/stop"),
    ContainerAction.RESTART: ("POST", _CONTAINER + "/restart"),
    ContainerAction.KILL: ("POST", _CONTAINER + "/kill"),
    ContainerAction.REMOVE: ("DELETE", _CONTAINER + "?force=true"),
}

STACK_ACTION_ROUTES: dict[StackAction, Route] = {
    StackAction.START: ("POST", "/stacks/{stack_id}/start"),
    StackAction.STOP: ("POST", "/stacks/{stack_id}/stop"),
    StackAction.REMOVE: ("DELETE", "/stacks/{stack_id}?endpointId={env_id}"),
}

IMAGE_ACTION_ROUTES: dict[ImageAction, Route] = {
    ImageAction.PULL: ("POST", "/endpoints/{env_id}/docker/images/create?fromImage={repository}&tag={tag}"),
    ImageAction.REMOVE: ("DELETE", "/endpoints/{env_id}/docker/images/{image}?force=true"),
}

VOLUME_ACTION_ROUTES: dict[VolumeAction, Route] = {
    VolumeAction.CREATE: ("POST", "/endpoints/{env_id}/docker/volumes/create"),
    VolumeAction.REMOVE: ("DELETE", "/endpoints/{env_id}/docker/volumes/{name}"),
}

NETWORK_ACTION_ROUTES: dict[NetworkAction, Route] = {
    NetworkAction.CREATE: ("POST", "/endpoints/{env_id}/docker/networks/create"),
    NetworkAction.REMOVE: ("DELETE", "/endpoints/{env_id}/docker/networks/{network}"),
}

def route(table: Mapping[Enum, Route], action: Enum, **fields) -> Route:
    """Fill the path template for ``action``. Values must already be URL-safe."""
    method, template = table[action]
    return method, template.format(**fields)
