"""Shared pieces of the tool argument models.

Each tool module declares one pydantic model per tool; handlers call
``Model.model_validate(args)`` and ``call_tool`` turns a ``ValidationError``
into an error response.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, ValidationError

EnvironmentId = Annotated[int, Field(description="Portainer environment ID (get from list_environments)")]
ContainerId = Annotated[str, Field(min_length=1, description="Container ID (short or full) or container name")]
StackId = Annotated[int, Field(description="Stack ID (get from list_stacks)")]


class NoArgs(BaseModel):
    """Tools that take no arguments still require an object."""


class EnvironmentArgs(BaseModel):
    environment_id: EnvironmentId


class EnvVar(BaseModel):
    name: str = Field(description="Variable name")
    value: str = Field(description="Variable value")


EnvVars = Annotated[
    list[EnvVar] | None,
    Field(
        description="Environment variables for the stack (like a .env file), referenced in compose as ${VAR_NAME}.",
    ),
]


def env_list(env: list[EnvVar] | None) -> list[dict[str, str]] | None:
    return None if env is None else [item.model_dump() for item in env]


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "Invalid arguments: " + "; ".join(parts)
