"""Exception hierarchy for mcp-create-tool."""


class McpCreateError(Exception):
    """Base error for all mcp-create-tool failures."""


class PreconditionError(McpCreateError):
    """Raised when the target project directory already exists."""


class MaterializationError(McpCreateError):
    """Raised when the template tree cannot be written to the target directory.

    Files written before the failure are left in place.
    """


class ConfigLookupError(McpCreateError):
    """Raised when the host configuration file location cannot be determined."""


class ConfigIOError(McpCreateError):
    """Raised when the host configuration file cannot be read, parsed or written."""
