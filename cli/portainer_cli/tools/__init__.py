"""Portainer tools: definitions, handlers and dispatch.

Each module holds a group of tools:

- environments.py → list_environments, environment_dashboard, system_info, list_registries
- containers.py   → list_containers, inspect_container, container_logs, container_action, container_stats
- stacks.py       → list_stacks, inspect_stack, stack_action, create_stack, create_stack_from_git,
                    update_stack, redeploy_stack, get_stack_by_name
- resources.py    → list_images, manage_image, list_volumes, manage_volume, list_networks, manage_network

A module exposes DEFINITIONS (name, description, input schema generated from
the tool's pydantic argument model) and HANDLERS (tool name → coroutine taking
the client and the raw arguments, validated inside the handler).
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping

from pydantic import ValidationError

from portainer_client import PortainerClient, PortainerClientError

from . import containers, environments, resources, stacks
from .args import describe_validation_error
from .response import ToolResponse, format_error

log = logging.getLogger(__name__)

Handler = Callable[[PortainerClient, Mapping[str, Any]], Awaitable[ToolResponse]]

_MODULES = (environments, containers, stacks, resources)

TOOLS: list[dict[str, Any]] = [defn for module in _MODULES for defn in module.DEFINITIONS]
HANDLERS: dict[str, Handler] = {name: fn for module in _MODULES for name, fn in module.HANDLERS.items()}


def get_tools() -> list[dict[str, Any]]:
    return TOOLS


def get_handler(name: str) -> Handler | None:
    return HANDLERS.get(name)


def is_write_tool(defn: Mapping[str, Any]) -> bool:
    return not (defn.get("annotations") or {}).get("readOnlyHint", True)


async def call_tool(client: PortainerClient, name: str, arguments: Any = None) -> ToolResponse:
    """Run one tool and wrap the outcome in a text response envelope.

    Argument and classified client errors become ``isError`` responses; anything
    else is a bug and propagates.
    """
    handler = get_handler(name)
    if handler is None:
        return format_error(ValueError(f"Unknown tool: {name}"))
    try:
        return await handler(client, {} if arguments is None else arguments)
    except ValidationError as exc:
        log.debug("tool %s rejected arguments: %s", name, exc)
        return format_error(describe_validation_error(exc))
    except PortainerClientError as exc:
        log.debug("tool %s failed with %s", name, exc.code)
        return format_error(exc)
