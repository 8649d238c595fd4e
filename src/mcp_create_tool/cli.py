"""CLI interface for mcp-create-tool."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mcp_create_tool.errors import ConfigLookupError, MaterializationError, PreconditionError
from mcp_create_tool.generator import ProjectGenerator
from mcp_create_tool.host_config import register_server
from mcp_create_tool.host_platform import get_config_path as get_host_config_path
from mcp_create_tool.interactive_prompts import collect_generation_config, confirm_replace
from mcp_create_tool.models import GenerationConfig, RegistrationResult, RegistrationStatus
from mcp_create_tool.template_engine import get_templates_dir, list_template_paths
from mcp_create_tool.user_config import (
    get_config_path,
    get_default_config_template,
    load_user_config,
    save_user_config,
)

app = typer.Typer(
    name="mcp-create-tool",
    help="Create a new MCP server project (with a tool) and register it with Claude.app.",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Manage user-level default preferences.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _abort() -> typer.Exit:
    rprint("[yellow]\nAborted.[/yellow]")
    return typer.Exit(0)


def _report_registration(result: RegistrationResult) -> None:
    if result.status == RegistrationStatus.SKIPPED:
        rprint(f"[yellow]{result.message}[/yellow]")
    elif result.status == RegistrationStatus.FAILED:
        rprint("[yellow]⚠️ Note: Could not update Claude.app configuration[/yellow]")
        rprint(f"[dim]{result.message}[/dim]")
    else:
        rprint("[green]✅ Successfully added MCP server to Claude.app configuration[/green]")
        rprint(f"[dim]{result.config_path}[/dim]")


def _print_next_steps(directory: Path) -> None:
    rprint(
        Panel.fit(
            f"[cyan]  cd {directory}[/cyan]\n"
            "[cyan]  npm install[/cyan]\n"
            "[cyan]  npm run build[/cyan]  [dim]# or: npm run watch[/dim]\n"
            "[cyan]  npm link[/cyan]       [dim]# optional, to make available globally[/dim]\n\n"
            "[yellow]Test it in your browser:[/yellow]\n"
            "[cyan]  npm run inspector[/cyan]",
            title="Next steps",
        )
    )


def _display_dry_run(directory: Path, template_dir: Path, config: GenerationConfig) -> None:
    """Display the files that would be created without writing anything."""
    rprint(
        Panel.fit(
            "[bold]Dry run[/bold] - nothing will be created",
            title=f"mcp-create-tool create {directory}",
            border_style="yellow",
        )
    )
    overview = Table(show_header=False, box=None, padding=(0, 2))
    overview.add_column(style="cyan")
    overview.add_column()
    overview.add_row("Location", str(directory.absolute()))
    overview.add_row("Name", config.name)
    overview.add_row("Description", config.description)
    overview.add_row("Tool", config.tool)
    overview.add_row("Register with Claude.app", "yes" if config.install_for_host else "no")
    console.print(overview)

    files = Table(title="Files")
    files.add_column("Output", style="cyan")
    files.add_column("Template", style="dim")
    for template_path, output_path in list_template_paths(template_dir):
        files.add_row(output_path, template_path)
    console.print(files)


@app.command("create")
def create_server(
    directory: Annotated[Path, typer.Argument(help="Directory to create the server in")],
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Name of the server")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Description of the server")
    ] = None,
    tool: Annotated[
        str | None, typer.Option("--tool", "-t", help="Name of the tool to create")
    ] = None,
    install: Annotated[
        bool | None,
        typer.Option("--install/--no-install", help="Register the server with Claude.app"),
    ] = None,
    template_dir: Annotated[
        Path | None, typer.Option("--template-dir", help="Use a custom template directory")
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Preview what would be created without generating anything"),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False,
) -> None:
    """Create a new MCP server project from the template set."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if directory.exists():
        rprint(f"[red]Error: Directory '{directory}' already exists.[/red]")
        raise typer.Exit(1)

    defaults = load_user_config()
    template_root = template_dir or defaults.template_dir or get_templates_dir()

    try:
        config = collect_generation_config(
            directory,
            name=name,
            description=description,
            tool=tool,
            install_for_host=install,
            defaults=defaults,
        )
    except (KeyboardInterrupt, EOFError):
        raise _abort() from None
    except ValidationError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if dry_run:
        _display_dry_run(directory, template_root, config)
        return

    try:
        with console.status("Creating MCP server..."):
            ProjectGenerator(config, directory, template_root).generate()
    except PreconditionError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    except MaterializationError as e:
        rprint("[red]Failed to create MCP server[/red]")
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1) from None
    except KeyboardInterrupt:
        raise _abort() from None

    rprint("[green]MCP server created successfully![/green]")

    if config.install_for_host:
        try:
            result = register_server(config.name, directory, confirm_replace)
        except (KeyboardInterrupt, EOFError):
            raise _abort() from None
        _report_registration(result)

    _print_next_steps(directory)


def _project_name(directory: Path) -> str:
    """Read the server name from ``package.json``, falling back to the directory name."""
    package_json = directory / "package.json"
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return directory.resolve().name
    if isinstance(data, dict) and isinstance(data.get("name"), str) and data["name"]:
        return data["name"]
    return directory.resolve().name


@app.command("register")
def register_cmd(
    directory: Annotated[Path, typer.Argument(help="Generated server project directory")],
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Server name (defaults to package.json)")
    ] = None,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Replace an existing entry without asking")
    ] = False,
) -> None:
    """Register an existing server project with Claude.app."""
    if not directory.is_dir():
        rprint(f"[red]Error: Directory '{directory}' does not exist.[/red]")
        raise typer.Exit(1)

    server_name = name or _project_name(directory)
    confirm = (lambda _name: True) if yes else confirm_replace
    try:
        result = register_server(server_name, directory, confirm)
    except (KeyboardInterrupt, EOFError):
        raise _abort() from None
    _report_registration(result)


@app.command("host-config-path")
def host_config_path_cmd() -> None:
    """Print the path of the Claude.app configuration file."""
    try:
        rprint(str(get_host_config_path()))
    except ConfigLookupError as e:
        rprint(f"[yellow]{e}[/yellow]")
        raise typer.Exit(1) from None


@config_app.command("show")
def config_show_cmd() -> None:
    """Show current user configuration."""
    config_path = get_config_path()
    user_cfg = load_user_config().model_dump(exclude_none=True)

    if not user_cfg:
        rprint(f"[yellow]No user config found at {config_path}[/yellow]")
        rprint("[dim]Run 'mcp-create-tool config init' to create one.[/dim]")
        return

    rprint(f"[cyan]Config file:[/cyan] {config_path}\n")
    table = Table(title="User Defaults")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in user_cfg.items():
        table.add_row(key, str(value))

    console.print(table)


@config_app.command("init")
def config_init_cmd(
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing config")] = False,
) -> None:
    """Create a default user configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        rprint(f"[yellow]Config already exists at {config_path}[/yellow]")
        rprint("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(1)

    saved_path = save_user_config(get_default_config_template())
    rprint(f"[green]Created default config at {saved_path}[/green]")
    rprint("[dim]Edit this file to customize your defaults.[/dim]")


@config_app.command("path")
def config_path_cmd() -> None:
    """Print the path to the user config file."""
    rprint(str(get_config_path()))


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
