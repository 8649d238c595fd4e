"""MCP tool handlers - actions an AI assistant can invoke."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from pydantic import Field

if TYPE_CHECKING:
    from fastmcp import FastMCP


def register_tools(mcp: FastMCP) -> None:
    """Register all tool handlers on the given MCP server."""

    # ------------------------------------------------------------------
    # create_server_project
    # ------------------------------------------------------------------
    @mcp.tool(
        name="create_server_project",
        description=(
            "Create a new MCP server project from the template set. "
            "Fails if the directory already exists."
        ),
        tags={"project", "create"},
    )
    def create_server_project(
        directory: Annotated[str, Field(description="Directory to create the server in")],
        name: Annotated[str, Field(description="Name of the MCP server (at least 4 characters)")],
        tool: Annotated[str, Field(description="Name of the tool the server exposes")],
        description: Annotated[
            str, Field(description="Description of the server's tool")
        ] = "A Model Context Protocol server",
        template_dir: Annotated[
            str | None, Field(description="Custom template directory (defaults to built-in)")
        ] = None,
    ) -> str:
        from mcp_create_tool.errors import MaterializationError, PreconditionError
        from mcp_create_tool.generator import ProjectGenerator
        from mcp_create_tool.models import GenerationConfig

        config = GenerationConfig(name=name, description=description, tool=tool)
        project_dir = Path(directory)
        generator = ProjectGenerator(
            config, project_dir, Path(template_dir) if template_dir else None
        )
        try:
            written = generator.generate()
        except (PreconditionError, MaterializationError) as e:
            raise ValueError(str(e)) from e

        return json.dumps(
            {
                "project_dir": str(project_dir.absolute()),
                "name": config.name,
                "tool": config.tool,
                "files": [path.relative_to(project_dir).as_posix() for path in written],
            }
        )

    # ------------------------------------------------------------------
    # register_server
    # ------------------------------------------------------------------
    @mcp.tool(
        name="register_server",
        description=(
            "Register a generated MCP server project in the Claude.app configuration. "
            "An existing entry with the same name is only replaced when 'replace' is true."
        ),
        tags={"host", "register"},
    )
    def register_server(
        name: Annotated[str, Field(description="Server name used as the configuration key")],
        directory: Annotated[str, Field(description="Path to the generated project")],
        replace: Annotated[
            bool, Field(description="Replace an existing entry with the same name")
        ] = False,
        config_path: Annotated[
            str | None, Field(description="Explicit configuration file (defaults to Claude.app's)")
        ] = None,
    ) -> str:
        from mcp_create_tool.host_config import register_server as _register

        result = _register(
            name,
            Path(directory),
            lambda _name: replace,
            config_path=Path(config_path) if config_path else None,
        )
        return result.model_dump_json()

    # ------------------------------------------------------------------
    # host_config_path
    # ------------------------------------------------------------------
    @mcp.tool(
        name="host_config_path",
        description="Return the location of the Claude.app configuration file on this machine.",
        tags={"host"},
    )
    def host_config_path() -> str:
        from mcp_create_tool.errors import ConfigLookupError
        from mcp_create_tool.host_platform import detect_platform, get_config_path

        host_platform = detect_platform()
        try:
            path: str | None = str(get_config_path(host_platform))
            error = None
        except ConfigLookupError as e:
            path, error = None, str(e)
        return json.dumps({"platform": host_platform.value, "config_path": path, "error": error})
