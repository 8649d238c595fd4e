"""MCP server for mcp-create-tool - exposes server scaffolding via Model Context Protocol."""

from fastmcp import FastMCP


def create_server() -> FastMCP:
    """Create and configure the FastMCP server instance."""
    mcp = FastMCP(
        name="mcp-create-tool",
        instructions=(
            "MCP server for mcp-create-tool, which scaffolds TypeScript MCP server projects "
            "from a template set and registers them in the Claude.app configuration. Use "
            "tools to create projects and register them; read resources to inspect the "
            "template set and user defaults."
        ),
    )

    # Import and register tools and resources
    from mcp_create_tool.mcp_server.resources import register_resources
    from mcp_create_tool.mcp_server.tools import register_tools

    register_tools(mcp)
    register_resources(mcp)

    return mcp


def main() -> None:
    """Entry point for the mcp-create-tool-mcp CLI command."""
    server = create_server()
    server.run()
