"""Interactive prompts for filling in missing generation options."""

import logging
from pathlib import Path

from rich import print as rprint
from rich.prompt import Confirm, Prompt

from mcp_create_tool.host_platform import supports_host_install
from mcp_create_tool.models import (
    MIN_NAME_LENGTH,
    GenerationConfig,
    HostPlatform,
    UserDefaults,
)

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "A Model Context Protocol server"


class GenerationPrompter:
    """Asks for the values that were not given on the command line."""

    def __init__(self, directory: Path, host_platform: HostPlatform | None = None) -> None:
        self.directory = directory
        self.host_platform = host_platform

    def ask_name(self, default: str | None = None) -> str:
        """Ask for the server name until it is long enough."""
        while True:
            name = Prompt.ask(
                "What is the name of your MCP server?",
                default=default or self.directory.name,
            )
            if len(name) >= MIN_NAME_LENGTH:
                return name
            rprint(f"[red]Name must be at least {MIN_NAME_LENGTH} characters[/red]")

    def ask_description(self, default: str | None = None) -> str:
        return Prompt.ask(
            "What is the description of your server's tool?",
            default=default or DEFAULT_DESCRIPTION,
        )

    def ask_tool(self, default: str | None = None) -> str:
        tool = Prompt.ask(
            "What is the name of the tool to create?",
            default=default or self.directory.name,
        )
        return tool.strip()

    def ask_install(self, default: bool = True) -> bool:
        """Ask whether to register with Claude.app; False where it can't run."""
        if not supports_host_install(self.host_platform):
            return False
        return Confirm.ask("Would you like to install this server for Claude.app?", default=default)


def collect_generation_config(
    directory: Path,
    *,
    name: str | None = None,
    description: str | None = None,
    tool: str | None = None,
    install_for_host: bool | None = None,
    defaults: UserDefaults | None = None,
    prompter: GenerationPrompter | None = None,
) -> GenerationConfig:
    """Build the generation config, prompting only for missing values.

    Explicit options always win over answers and user defaults.
    """
    defaults = defaults or UserDefaults()
    prompter = prompter or GenerationPrompter(directory)

    if name is None:
        name = prompter.ask_name()
    if description is None:
        description = prompter.ask_description(defaults.description)
    if tool is None:
        tool = prompter.ask_tool()
    if install_for_host is None:
        install_default = True if defaults.install_for_host is None else defaults.install_for_host
        install_for_host = prompter.ask_install(install_default)

    config = GenerationConfig(
        name=name,
        description=description,
        tool=tool,
        install_for_host=install_for_host,
    )
    logger.debug(f"Generation config: {config.model_dump()}")
    return config


def confirm_replace(name: str) -> bool:
    """Ask before replacing an existing server entry; defaults to no."""
    return Confirm.ask(
        f'An MCP server named "{name}" is already configured for Claude.app. '
        "Do you want to replace it?",
        default=False,
    )
