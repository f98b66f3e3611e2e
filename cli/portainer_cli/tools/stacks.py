"""Docker Compose stack tools."""

from __future__ import annotations

import asyncio
from typing import Annotated, Any, Mapping

from pydantic import BaseModel, Field, model_validator

from portainer_client import PortainerClient
from portainer_client.actions import StackAction

from ..formatting import stack_status
from .args import EnvironmentId, EnvVars, StackId, env_list
from .response import ToolResponse, format_response, format_stack_response
from .schema import tool

PullImage = Annotated[bool | None, Field(description="Pull latest image versions before deploying")]


class ListStacksArgs(BaseModel):
    environment_id: int | None = Field(default=None, description="Only show stacks in this environment")


class StackArgs(BaseModel):
    stack_id: StackId


class StackActionArgs(StackArgs):
    action: StackAction = Field(
        description="start=deploy stack, stop=take down containers, remove=delete stack entirely",
    )
    environment_id: int | None = Field(default=None, description="Required for remove action")

    @model_validator(mode="after")
    def _remove_needs_environment(self) -> StackActionArgs:
        if self.action is StackAction.REMOVE and self.environment_id is None:
            raise ValueError("environment_id is required for remove action")
        return self


class CreateStackArgs(BaseModel):
    environment_id: EnvironmentId
    name: str = Field(min_length=1, description="Stack name (must be unique)")
    compose_content: str = Field(min_length=1, description="Docker Compose YAML")
    env: EnvVars = None


class CreateStackFromGitArgs(BaseModel):
    environment_id: EnvironmentId
    name: str = Field(min_length=1, description="Stack name")
    repository_url: str = Field(min_length=1, description="Git repository URL")
    compose_file: str = Field(min_length=1, description="Path to the Compose file in the repository")
    reference_name: str | None = Field(default=None, description="Git reference (e.g. refs/heads/main)")
    username: str | None = Field(default=None, description="Git username")
    password: str | None = Field(default=None, description="Git password or token")
    env: EnvVars = None


class UpdateStackArgs(BaseModel):
    stack_id: StackId
    environment_id: EnvironmentId
    compose_content: str | None = Field(
        default=None,
        description="New Docker Compose YAML (keeps the existing file when omitted)",
    )
    env: EnvVars = None
    prune: bool | None = Field(default=None, description="Remove services no longer defined in the compose file")
    pull_image: PullImage = None


class RedeployStackArgs(BaseModel):
    stack_id: StackId
    environment_id: EnvironmentId
    pull_image: PullImage = None


class StackByNameArgs(BaseModel):
    name: str = Field(min_length=1, description="Exact stack name")


DEFINITIONS = [
    tool(
        "list_stacks",
        "List all Docker Compose stacks with ID, name, status (active/inactive) and environment ID.",
        ListStacksArgs,
    ),
    tool(
        "inspect_stack",
        "Full stack details: compose file content, environment variables, git config, status and environment.",
        StackArgs,
    ),
    tool(
        "stack_action",
        "Control a stack: start (deploy), stop (take down) or remove (delete).",
        StackActionArgs,
        write=True,
    ),
    tool(
        "create_stack",
        "Deploy a new Docker Compose stack from compose YAML and optional environment variables.",
        CreateStackArgs,
        write=True,
    ),
    tool(
        "create_stack_from_git",
        "Deploy a new stack from a Git repository.",
        CreateStackFromGitArgs,
        write=True,
    ),
    tool(
        "update_stack",
        "Update a deployed stack: new compose content, new environment variables, or redeploy with "
        "latest images.",
        UpdateStackArgs,
        write=True,
    ),
    tool(
        "redeploy_stack",
        "Pull the latest changes from git and redeploy a git-based stack.",
        RedeployStackArgs,
        write=True,
    ),
    tool(
        "get_stack_by_name",
        "Look up a stack by exact name. Returns the same details as inspect_stack.",
        StackByNameArgs,
    ),
]


def _stack_summary(stack: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": stack.get("Id"),
        "name": stack.get("Name"),
        "status": stack_status(stack.get("Status")),
        "environment_id": stack.get("EndpointId"),
    }


def _stack_details(stack: Mapping[str, Any]) -> dict[str, Any]:
    return {
        **_stack_summary(stack),
        "env": stack.get("Env") or [],
        "git_config": stack.get("GitConfig") or None,
    }


async def list_stacks(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    env_id = ListStacksArgs.model_validate(args).environment_id
    stacks = await client.get_stacks() or []
    if env_id is not None:
        stacks = [s for s in stacks if s.get("EndpointId") == env_id]
    return format_response({"items": [_stack_summary(s) for s in stacks], "count": len(stacks)})


async def inspect_stack(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    stack_id = StackArgs.model_validate(args).stack_id
    stack, stack_file = await asyncio.gather(client.get_stack(stack_id), client.get_stack_file(stack_id))
    return format_stack_response(_stack_details(stack), stack_file.get("StackFileContent"))


async def stack_action(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = StackActionArgs.model_validate(args)
    await client.stack_action(a.stack_id, a.action, a.environment_id)
    return format_response({"success": True, "message": f"Stack {a.action.value} completed"})


async def create_stack(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = CreateStackArgs.model_validate(args)
    stack = await client.create_stack(a.environment_id, a.name, a.compose_content, env_list(a.env))
    return format_response({"success": True, "id": stack.get("Id"), "name": stack.get("Name")})


async def create_stack_from_git(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = CreateStackFromGitArgs.model_validate(args)
    stack = await client.create_stack_from_git(
        a.environment_id,
        a.name,
        a.repository_url,
        a.compose_file,
        reference_name=a.reference_name,
        username=a.username,
        password=a.password,
        env_vars=env_list(a.env),
    )
    return format_response({"success": True, "id": stack.get("Id"), "name": stack.get("Name")})


async def update_stack(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = UpdateStackArgs.model_validate(args)
    stack = await client.update_stack(
        a.stack_id,
        a.environment_id,
        compose_content=a.compose_content,
        env_vars=env_list(a.env),
        prune=a.prune,
        pull_image=a.pull_image,
    )
    return format_response(
        {
            "success": True,
            "id": stack.get("Id"),
            "name": stack.get("Name"),
            "message": "Stack updated successfully",
        }
    )


async def redeploy_stack(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    a = RedeployStackArgs.model_validate(args)
    await client.redeploy_stack(a.stack_id, a.environment_id, bool(a.pull_image))
    return format_response({"success": True, "message": "Stack redeployed from git repository"})


async def get_stack_by_name(client: PortainerClient, args: Mapping[str, Any]) -> ToolResponse:
    stack = await client.get_stack_by_name(StackByNameArgs.model_validate(args).name)
    stack_file = await client.get_stack_file(stack["Id"])
    return format_stack_response(_stack_details(stack), stack_file.get("StackFileContent"))


HANDLERS = {
    "list_stacks": list_stacks,
    "inspect_stack": inspect_stack,
    "stack_action": stack_action,
    "create_stack": create_stack,
    "create_stack_from_git": create_stack_from_git,
    "update_stack": update_stack,
    "redeploy_stack": redeploy_stack,
    "get_stack_by_name": get_stack_by_name,
}
