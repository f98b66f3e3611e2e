from __future__ import annotations

import json
from typing import Any, Iterable
from urllib.parse import quote, urlencode

import httpx

from .actions import (
    CONTAINER_ACTION_ROUTES,
    IMAGE_ACTION_ROUTES,
    NETWORK_ACTION_ROUTES,
    STACK_ACTION_ROUTES,
    VOLUME_ACTION_ROUTES,
    ContainerAction,
    ImageAction,
    NetworkAction,
    StackAction,
    VolumeAction,
    route,
)
from .config_types import ClientConfig
from .errors import (
    INVALID_ARGUMENT,
    PULL_FAILED,
    NotFoundError,
    PortainerClientError,
    WriteDisabledError,
)
from .logstream import demux
from .transport import LOGS_TIMEOUT_S, Transport

MIN_TAIL = 1
MAX_TAIL = 10000
DEFAULT_TAIL = 100


def clamp_tail(tail: int) -> int:
    return min(max(int(tail), MIN_TAIL), MAX_TAIL)


def split_image_reference(image: str) -> tuple[str, str]:
    """Split ``repo[:tag]`` into repository and tag, keeping registry ports intact."""
    ref = image.strip()
    slash = ref.rfind("/")
    colon = ref.rfind(":")
    if colon > slash:
        return ref[:colon], ref[colon + 1:] or "latest"
    return ref, "latest"


def find_by_name(items: Iterable[dict[str, Any]], name: str, *, kind: str, key: str = "Name") -> dict[str, Any]:
    match = next((item for item in items if item.get(key) == name), None)
    if match is None:
        raise NotFoundError(f"{kind} not found: {name}")
    return match


def _with_query(path: str, params: dict[str, Any]) -> str:
    query = urlencode(params) if params else ""
    return path + (f"?{query}" if query else "")


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _pull_error(stream_text: Any) -> str | None:
    # /images/create answers with a stream of JSON progress objects
    if not isinstance(stream_text, str):
        return None
    for line in stream_text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except ValueError:
            continue
        if isinstance(entry, dict) and entry.get("error"):
            return str(entry["error"])
    return None


class PortainerClient:
    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, http_transport=http_transport)

    @property
    def base_url(self) -> str:
        return self._t.base_url

    @property
    def write_enabled(self) -> bool:
        return self._cfg.write_enabled

    def _require_write(self) -> None:
        if not self._cfg.write_enabled:
            raise WriteDisabledError()

    async def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            timeout_s: float | None = None,
            raw: bool = False,
    ) -> Any:
        """Issue one call under ``/api``; returns decoded JSON, text when ``raw``, or ``{}``."""
        return await self._t.request(method, path, json_body=json_body, timeout_s=timeout_s, raw=raw)

    # --- environments ---
    async def get_environments(self) -> list[dict[str, Any]]:
        return await self._t.request("GET", "/endpoints")

    async def get_environment(self, env_id: int) -> dict[str, Any]:
        return await self._t.request("GET", f"/endpoints/{int(env_id)}")

    async def get_dashboard(self, env_id: int) -> dict[str, Any]:
        return await self._t.request("GET", f"/docker/{int(env_id)}/dashboard")

    # --- containers ---
    async def get_containers(self, env_id: int, all: bool = False) -> list[dict[str, Any]]:
        path = _with_query(f"/endpoints/{int(env_id)}/docker/containers/json", {"all": "true"} if all else {})
        return await self._t.request("GET", path)

    async def inspect_container(self, env_id: int, container_id: str) -> dict[str, Any]:
        return await self._t.request(
            "GET", f"/endpoints/{int(env_id)}/docker/containers/{_segment(container_id)}/json"
        )

    async def get_container_stats(self, env_id: int, container_id: str) -> dict[str, Any]:
        return await self._t.request(
            "GET", f"/endpoints/{int(env_id)}/docker/containers/{_segment(container_id)}/stats?stream=false"
        )

    async def fetch_logs(self, env_id: int, container_id: str, tail: int = DEFAULT_TAIL) -> str:
        """Return the combined stdout/stderr of a container, oldest line first."""
        params = {"stdout": "true", "stderr": "true", "follow": "false", "tail": clamp_tail(tail)}
        path = _with_query(f"/endpoints/{int(env_id)}/docker/containers/{_segment(container_id)}/logs", params)
        data = await self._t.request_bytes(path, timeout_s=LOGS_TIMEOUT_S)
        return demux(data)

    async def container_action(self, env_id: int, container_id: str, action: ContainerAction | str) -> None:
        self._require_write()
        method, path = route(
            CONTAINER_ACTION_ROUTES,
            ContainerAction(action),
            env_id=int(env_id),
            container_id=_segment(container_id),
        )
        await self._t.request(method, path)

    # --- stacks ---
    async def get_stacks(self) -> list[dict[str, Any]]:
        return await self._t.request("GET", "/stacks")

    async def get_stack(self, stack_id: int) -> dict[str, Any]:
        return await self._t.request("GET", f"/stacks/{int(stack_id)}")

    async def get_stack_file(self, stack_id: int) -> dict[str, Any]:
        return await self._t.request("GET", f"/stacks/{int(stack_id)}/file")

    async def get_stack_by_name(self, name: str) -> dict[str, Any]:
        # Portainer has no name filter for stacks; scan the full list.
        stacks = await self.get_stacks()
        return find_by_name(stacks or [], name, kind="Stack")

    async def stack_action(self, stack_id: int, action: StackAction | str, env_id: int | None = None) -> None:
        self._require_write()
        action = StackAction(action)
        if action is StackAction.REMOVE and env_id is None:
            raise PortainerClientError("environment_id is required for remove action", INVALID_ARGUMENT)
        method, path = route(
            STACK_ACTION_ROUTES,
            action,
            stack_id=int(stack_id),
            env_id=int(env_id) if env_id is not None else "",
        )
        await self._t.request(method, path)

    async def create_stack(
            self,
            env_id: int,
            name: str,
            compose_content: str,
            env_vars: list[dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        self._require_write()
        body: dict[str, Any] = {"name": name, "stackFileContent": compose_content}
        if env_vars:
            body["env"] = env_vars
        path = _with_query("/stacks/create/standalone/string", {"endpointId": int(env_id)})
        return await self._t.request("POST", path, json_body=body)

    async def create_stack_from_git(
            self,
            env_id: int,
            name: str,
            repository_url: str,
            compose_file: str,
            *,
            reference_name: str | None = None,
            username: str | None = None,
            password: str | None = None,
            env_vars: list[dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        self._require_write()
        body: dict[str, Any] = {
            "name": name,
            "repositoryURL": repository_url,
            "composeFile": compose_file,
            "repositoryAuthentication": bool(password),
        }
        if reference_name:
            body["repositoryReferenceName"] = reference_name
        if password:
            body["repositoryUsername"] = username or ""
            body["repositoryPassword"] = password
        if env_vars:
            body["env"] = env_vars
        path = _with_query("/stacks/create/standalone/repository", {"endpointId": int(env_id)})
        return await self._t.request("POST", path, json_body=body)

    async def update_stack(
            self,
            stack_id: int,
            env_id: int,
            *,
            compose_content: str | None = None,
            env_vars: list[dict[str, str]] | None = None,
            prune: bool | None = None,
            pull_image: bool | None = None,
    ) -> dict[str, Any]:
        self._require_write()
        body: dict[str, Any] = {}
        if compose_content is not None:
            body["stackFileContent"] = compose_content
        if env_vars is not None:
            body["env"] = env_vars
        if prune is not None:
            body["prune"] = prune
        if pull_image is not None:
            body["pullImage"] = pull_image
        path = _with_query(f"/stacks/{int(stack_id)}", {"endpointId": int(env_id)})
        return await self._t.request("PUT", path, json_body=body)

    async def redeploy_stack(self, stack_id: int, env_id: int, pull_image: bool = False) -> None:
        self._require_write()
        path = _with_query(f"/stacks/{int(stack_id)}/git/redeploy", {"endpointId": int(env_id)})
        await self._t.request("PUT", path, json_body={"pullImage": bool(pull_image)})

    # --- images ---
    async def get_images(self, env_id: int) -> list[dict[str, Any]]:
        return await self._t.request("GET", f"/endpoints/{int(env_id)}/docker/images/json")

    async def image_action(self, env_id: int, action: ImageAction | str, image: str) -> None:
        self._require_write()
        action = ImageAction(action)
        if action is ImageAction.PULL:
            repository, tag = split_image_reference(image)
            method, path = route(
                IMAGE_ACTION_ROUTES, action, env_id=int(env_id), repository=_segment(repository), tag=_segment(tag)
            )
            stream = await self._t.request(method, path, raw=True)
            error = _pull_error(stream)
            if error:
                raise PortainerClientError(f"Failed to pull {repository}:{tag}: {error}", PULL_FAILED)
            return
        method, path = route(IMAGE_ACTION_ROUTES, action, env_id=int(env_id), image=_segment(image))
        await self._t.request(method, path)

    # --- volumes ---
    async def get_volumes(self, env_id: int) -> dict[str, Any]:
        return await self._t.request("GET", f"/endpoints/{int(env_id)}/docker/volumes")

    async def volume_action(self, env_id: int, action: VolumeAction | str, name: str) -> dict[str, Any]:
        self._require_write()
        action = VolumeAction(action)
        method, path = route(VOLUME_ACTION_ROUTES, action, env_id=int(env_id), name=_segment(name))
        body = {"Name": name} if action is VolumeAction.CREATE else None
        return await self._t.request(method, path, json_body=body)

    # --- networks ---
    async def get_networks(self, env_id: int) -> list[dict[str, Any]]:
        return await self._t.request("GET", f"/endpoints/{int(env_id)}/docker/networks")

    async def network_action(
            self,
            env_id: int,
            action: NetworkAction | str,
            name: str,
            subnet: str | None = None,
    ) -> dict[str, Any]:
        self._require_write()
        action = NetworkAction(action)
        method, path = route(NETWORK_ACTION_ROUTES, action, env_id=int(env_id), network=_segment(name))
        body: dict[str, Any] | None = None
        if action is NetworkAction.CREATE:
            body = {"Name": name}
            if subnet:
                body["IPAM"] = {"Config": [{"Subnet": subnet}]}
        return await self._t.request(method, path, json_body=body)

    # --- system ---
    async def get_system_info(self) -> dict[str, Any]:
        return await self._t.request("GET", "/system/info")

    async def get_system_version(self) -> dict[str, Any]:
        return await self._t.request("GET", "/system/version")

    async def get_registries(self) -> list[dict[str, Any]]:
        return await self._t.request("GET", "/registries")
