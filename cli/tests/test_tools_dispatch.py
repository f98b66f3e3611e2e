import json

import httpx
import pytest

from portainer_cli.tools import call_tool, get_handler, get_tools, is_write_tool
from portainer_client import PortainerClient
from portainer_client.config_types import ClientConfig

WRITE_TOOLS = {
    "container_action",
    "stack_action",
    "create_stack",
    "create_stack_from_git",
    "update_stack",
    "redeploy_stack",
    "manage_image",
    "manage_volume",
    "manage_network",
}


def _client(handler, *, write_enabled: bool = False) -> PortainerClient:  # noqa: ANN001
    cfg = ClientConfig(base_url="http://portainer.local:9000", api_key="ptr_test", write_enabled=write_enabled)
    return PortainerClient(cfg, http_transport=httpx.MockTransport(handler))


def test_every_tool_has_a_handler() -> None:
    tools = get_tools()
    names = [t["name"] for t in tools]

    assert len(names) == 23
    assert len(set(names)) == len(names)
    for name in names:
        assert get_handler(name) is not None


def test_write_tools_are_flagged() -> None:
    flagged = {t["name"] for t in get_tools() if is_write_tool(t)}
    assert flagged == WRITE_TOOLS
    for tool in get_tools():
        if tool["name"] in WRITE_TOOLS:
            assert "PORTAINER_WRITE_ENABLED" in tool["description"]


@pytest.mark.asyncio
async def test_unknown_tool_is_error_response() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))
    response = await call_tool(client, "drop_database", {})

    assert response == {"content": [{"type": "text", "text": "Error: Unknown tool: drop_database"}], "isError": True}


@pytest.mark.asyncio
async def test_success_is_pretty_json() -> None:
    client = _client(lambda request: httpx.Response(200, json=[{"Id": 1, "Name": "local", "Status": 1, "Type": 1}]))
    response = await call_tool(client, "list_environments")

    assert response["isError"] is False
    text = response["content"][0]["text"]
    assert text.startswith("{\n  ")
    assert json.loads(text)["items"][0] == {
        "id": 1,
        "name": "local",
        "status": "up",
        "type": "docker",
        "url": None,
    }


@pytest.mark.asyncio
async def test_write_tool_disabled_makes_no_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(204)

    client = _client(handler)
    response = await call_tool(
        client, "container_action", {"environment_id": 1, "container_id": "web", "action": "stop"}
    )

    assert response["isError"] is True
    assert response["content"][0]["text"].startswith("Error: Write operations disabled")
    assert calls == []


@pytest.mark.asyncio
async def test_bad_arguments_become_error_response() -> None:
    client = _client(lambda request: httpx.Response(200, json=[]))

    response = await call_tool(client, "list_containers", {"environment_id": "abc"})
    assert response["isError"] is True
    assert response["content"][0]["text"].startswith("Error: Invalid arguments: environment_id: ")

    response = await call_tool(client, "list_containers", {})
    assert response["content"][0]["text"] == "Error: Invalid arguments: environment_id: Field required"

    response = await call_tool(client, "list_containers", ["not", "an", "object"])
    assert response["isError"] is True
    assert "valid dictionary" in response["content"][0]["text"]

    response = await call_tool(
        client, "container_action", {"environment_id": 1, "container_id": "web", "action": "explode"}
    )
    assert response["isError"] is True
    text = response["content"][0]["text"]
    assert text.startswith("Error: Invalid arguments: action: ")
    assert "'kill'" in text


@pytest.mark.asyncio
async def test_api_error_becomes_error_response() -> None:
    client = _client(lambda request: httpx.Response(401, text="unauthorized"))
    response = await call_tool(client, "list_stacks")

    assert response["isError"] is True
    assert response["content"][0]["text"] == "Error: Invalid API key or expired token"


@pytest.mark.asyncio
async def test_numeric_strings_are_accepted_for_ids() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    response = await call_tool(_client(handler), "list_containers", {"environment_id": "3", "all": "true"})

    assert response["isError"] is False
    assert seen[0].url.path == "/api/endpoints/3/docker/containers/json"
    assert seen[0].url.params["all"] == "true"


def test_input_schema_comes_from_argument_model() -> None:
    tools = {t["name"]: t for t in get_tools()}

    logs_schema = tools["container_logs"]["inputSchema"]
    assert logs_schema["type"] == "object"
    assert set(logs_schema["properties"]) == {"environment_id", "container_id", "tail"}
    assert sorted(logs_schema["required"]) == ["container_id", "environment_id"]
    assert logs_schema["properties"]["environment_id"]["type"] == "integer"

    no_args = tools["list_environments"]["inputSchema"]
    assert no_args["properties"] == {}
    assert no_args["required"] == []

    stack_schema = tools["stack_action"]["inputSchema"]
    assert sorted(stack_schema["required"]) == ["action", "stack_id"]
    assert "StackAction" in json.dumps(stack_schema)
