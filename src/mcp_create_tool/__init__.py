"""mcp-create-tool - scaffold MCP server projects and register them with Claude.app."""

__version__ = "0.1.0"
