from __future__ import annotations

import json
from typing import Any

ToolResponse = dict[str, Any]


def _text(text: str) -> dict[str, str]:
    return {"type": "text", "text": text}


def format_response(data: Any) -> ToolResponse:
    return {"content": [_text(json.dumps(data, indent=2, ensure_ascii=False))], "isError": False}


def format_stack_response(metadata: dict[str, Any], compose_content: str | None) -> ToolResponse:
    """Metadata as JSON, followed by the compose file as a readable YAML block."""
    response = format_response(metadata)
    if compose_content:
        response["content"].append(
            _text(f"\n--- Docker Compose File ---\n```yaml\n{compose_content}\n```")
        )
    return response


def format_error(error: BaseException | str) -> ToolResponse:
    message = error if isinstance(error, str) else (str(error) or type(error).__name__)
    return {"content": [_text(f"Error: {message}")], "isError": True}
