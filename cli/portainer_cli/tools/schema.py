from __future__ import annotations

from typing import Any

from pydantic import BaseModel

WRITE_NOTE = "Requires PORTAINER_WRITE_ENABLED=true."


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    schema = model.model_json_schema()
    schema.pop("title", None)
    schema.setdefault("properties", {})
    schema.setdefault("required", [])
    return schema


def tool(name: str, description: str, model: type[BaseModel], *, write: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "description": f"{description} {WRITE_NOTE}" if write else description,
        "inputSchema": input_schema(model),
        "annotations": {"readOnlyHint": not write},
    }
