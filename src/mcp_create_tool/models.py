"""Configuration models for mcp-create-tool."""

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_NAME_LENGTH = 4


class HostPlatform(StrEnum):
    """Operating environment the host application runs in."""

    DARWIN = "darwin"
    WIN32 = "win32"
    WSL = "wsl"
    LINUX = "linux"
    UNKNOWN = "unknown"


class RegistrationStatus(StrEnum):
    """Outcome of registering a server in the host configuration."""

    ADDED = "added"
    REPLACED = "replaced"
    SKIPPED = "skipped"
    FAILED = "failed"


class GenerationConfig(BaseModel):
    """Values substituted into the template set for one generated project."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=MIN_NAME_LENGTH, description="Name of the MCP server")
    description: str = Field(
        "A Model Context Protocol server", description="Description of the server's tool"
    )
    tool: str = Field(..., description="Name of the tool to create")
    install_for_host: bool = Field(False, description="Register the server with Claude.app")

    @field_validator("tool")
    @classmethod
    def _trim_tool(cls, value: str) -> str:
        return value.strip()

    def template_context(self) -> dict[str, Any]:
        """Return the variables available to templates."""
        return {
            "name": self.name,
            "description": self.description,
            "tool": self.tool,
            "installForHost": self.install_for_host,
            "install_for_host": self.install_for_host,
        }


class TemplateFile(BaseModel):
    """A source file under the template root."""

    model_config = ConfigDict(frozen=True)

    relative_path: Path = Field(..., description="Path relative to the template root")
    is_dotfile: bool = Field(False, description="Whether the name carries the dotfile marker")
    raw_content: str = Field("", description="Unrendered file content")


class ServerEntry(BaseModel):
    """Launch command for one MCP server in the host configuration."""

    command: str = Field(..., description="Executable used to start the server")
    args: list[str] = Field(default_factory=list, description="Arguments passed to the command")
    env: dict[str, str] | None = Field(None, description="Extra environment variables")

    def to_json(self) -> dict[str, Any]:
        """Return the entry in the shape the host configuration stores it."""
        return self.model_dump(exclude_none=True)


class RegistrationResult(BaseModel):
    """Outcome of a host configuration update."""

    status: RegistrationStatus
    config_path: Path | None = None
    entry: ServerEntry | None = None
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status in (RegistrationStatus.ADDED, RegistrationStatus.REPLACED)


class UserDefaults(BaseModel):
    """User-level defaults applied underneath prompts and CLI options."""

    description: str | None = Field(None, description="Default server description")
    install_for_host: bool | None = Field(None, description="Default answer for registration")
    template_dir: Path | None = Field(None, description="Alternative template root")
