"""MCP resource handlers - read-only data exposed to AI assistants."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP


def register_resources(mcp: FastMCP) -> None:
    """Register all resource handlers on the given MCP server."""

    @mcp.resource(
        "template://list",
        name="Template Files",
        description="Files of the built-in template set and the paths they are written to.",
        mime_type="application/json",
    )
    def template_list() -> str:
        from mcp_create_tool.template_engine import get_templates_dir, list_template_paths

        templates_dir = get_templates_dir()
        pairs = list_template_paths(templates_dir) if templates_dir.exists() else []
        return json.dumps([{"template": src, "output": out} for src, out in pairs])

    @mcp.resource(
        "config://user",
        name="User Configuration",
        description="Current user-level default configuration values.",
        mime_type="application/json",
    )
    def user_config() -> str:
        from mcp_create_tool.user_config import get_config_path, load_user_config

        config = load_user_config()
        return json.dumps(
            {
                "config_path": str(get_config_path()),
                "values": config.model_dump(mode="json", exclude_none=True),
            }
        )
