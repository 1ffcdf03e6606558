"""Render handler payloads as a single MCP text block."""

import json
from typing import Any

import mcp.types as types

from gh_mcp.errors import ToolResult


def text_result(text: str) -> ToolResult:
    return [types.TextContent(type="text", text=text)]


def json_result(data: Any) -> ToolResult:
    """Indented JSON, readable by the calling agent as-is."""
    return text_result(json.dumps(data, indent=2, ensure_ascii=False))


def login(user: Any) -> Any:
    """The login of an embedded user object, or None."""
    return user.get("login") if isinstance(user, dict) else None
