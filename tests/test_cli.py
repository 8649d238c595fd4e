"""Tests for CLI interface."""

import json
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from mcp_create_tool.cli import app
from mcp_create_tool.errors import ConfigLookupError
from mcp_create_tool.models import HostPlatform, RegistrationResult, RegistrationStatus

runner = CliRunner(env={"COLUMNS": "200"})

CREATE_OPTIONS = ["--name", "my-server", "--description", "A test server", "--tool", "echo"]


@pytest.fixture(autouse=True)
def in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from inside a scratch directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def darwin_host(host_config_path: Path) -> Generator[Path, None, None]:
    """Pretend to run on macOS with the host config under tmp_path."""
    with (
        patch("mcp_create_tool.host_config.detect_platform", return_value=HostPlatform.DARWIN),
        patch(
            "mcp_create_tool.host_config.get_config_path",
            side_effect=lambda *args, **kwargs: host_config_path,
        ),
    ):
        yield host_config_path


class TestCreateCommand:
    """Tests for the create command."""

    def test_create_with_options(self, tmp_path: Path) -> None:
        """Test creating a project without any prompts."""
        result = runner.invoke(app, ["create", "my-server", *CREATE_OPTIONS, "--no-install"])

        assert result.exit_code == 0
        assert "successfully" in result.stdout.lower()
        project_dir = tmp_path / "my-server"
        assert (project_dir / ".gitignore").is_file()
        assert (project_dir / "src" / "index.ts").is_file()
        package = json.loads((project_dir / "package.json").read_text())
        assert package["name"] == "my-server"
        assert package["description"] == "A test server"

    def test_prints_next_steps(self) -> None:
        result = runner.invoke(app, ["create", "my-server", *CREATE_OPTIONS, "--no-install"])

        assert "npm install" in result.stdout
        assert "npm run inspector" in result.stdout

    def test_existing_directory_fails(self, tmp_path: Path) -> None:
        """An existing directory exits with status 1 and is left alone."""
        (tmp_path / "taken").mkdir()

        result = runner.invoke(app, ["create", "taken", *CREATE_OPTIONS, "--no-install"])

        assert result.exit_code == 1
        assert "already exists" in result.stdout
        assert list((tmp_path / "taken").iterdir()) == []

    def test_interactive_prompts(self, tmp_path: Path) -> None:
        """Missing options are asked for; too-short names are asked again."""
        with patch(
            "mcp_create_tool.interactive_prompts.supports_host_install", return_value=False
        ):
            result = runner.invoke(
                app,
                ["create", "prompted"],
                input="abc\nprompted-server\nAsked description\n  greet  \n",
            )

        assert result.exit_code == 0
        assert "at least 4 characters" in result.stdout
        project_dir = tmp_path / "prompted"
        package = json.loads((project_dir / "package.json").read_text())
        assert package["name"] == "prompted-server"
        assert package["description"] == "Asked description"
        assert 'const TOOL_NAME = "greet";' in (project_dir / "src" / "index.ts").read_text()

    def test_option_wins_over_prompt(self, tmp_path: Path) -> None:
        with patch(
            "mcp_create_tool.interactive_prompts.supports_host_install", return_value=False
        ):
            result = runner.invoke(
                app, ["create", "partial", "--name", "option-name"], input="\n\n"
            )

        assert result.exit_code == 0
        package = json.loads((tmp_path / "partial" / "package.json").read_text())
        assert package["name"] == "option-name"
        assert package["description"] == "A Model Context Protocol server"

    def test_user_abort_exits_cleanly(self, tmp_path: Path) -> None:
        with patch(
            "mcp_create_tool.cli.collect_generation_config", side_effect=KeyboardInterrupt
        ):
            result = runner.invoke(app, ["create", "aborted"])

        assert result.exit_code == 0
        assert "Aborted" in result.stdout
        assert not (tmp_path / "aborted").exists()

    def test_invalid_name_option(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["create", "short", "--name", "abc", "--tool", "echo", "-d", "x", "--no-install"]
        )

        assert result.exit_code == 1
        assert not (tmp_path / "short").exists()

    def test_materialization_failure(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["create", "broken", *CREATE_OPTIONS, "--no-install", "--template-dir", "nope"],
        )

        assert result.exit_code == 1
        assert "Failed to create MCP server" in result.stdout

    def test_custom_template_dir(self, tmp_path: Path, template_root: Path) -> None:
        result = runner.invoke(
            app,
            [
                "create",
                "custom",
                *CREATE_OPTIONS,
                "--no-install",
                "--template-dir",
                str(template_root),
            ],
        )

        assert result.exit_code == 0
        assert (tmp_path / "custom" / ".gitignore").read_text() == "node_modules/\necho.log"
        assert not (tmp_path / "custom" / "package.json").exists()

    def test_dry_run_writes_nothing(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["create", "preview", *CREATE_OPTIONS, "--no-install", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "Dry run" in result.stdout
        assert ".gitignore" in result.stdout
        assert not (tmp_path / "preview").exists()

    def test_install_registers_server(self, tmp_path: Path, darwin_host: Path) -> None:
        result = runner.invoke(app, ["create", "my-server", *CREATE_OPTIONS, "--install"])

        assert result.exit_code == 0
        document = json.loads(darwin_host.read_text())
        assert document["mcpServers"]["my-server"] == {
            "command": "node",
            "args": [str(Path.cwd() / "my-server" / "build" / "index.js")],
        }

    def test_install_declined_replace(self, darwin_host: Path) -> None:
        darwin_host.parent.mkdir(parents=True)
        original = '{"mcpServers": {"my-server": {"command": "python", "args": []}}}'
        darwin_host.write_text(original)

        result = runner.invoke(
            app, ["create", "my-server", *CREATE_OPTIONS, "--install"], input="n\n"
        )

        assert result.exit_code == 0
        assert "Skipped" in result.stdout
        assert darwin_host.read_text() == original

    def test_registration_failure_still_succeeds(self, tmp_path: Path) -> None:
        """A failed registration is a warning, not an error."""
        failed = RegistrationResult(status=RegistrationStatus.FAILED, message="no APPDATA")
        with patch("mcp_create_tool.cli.register_server", return_value=failed):
            result = runner.invoke(app, ["create", "my-server", *CREATE_OPTIONS, "--install"])

        assert result.exit_code == 0
        assert "Could not update Claude.app configuration" in result.stdout
        assert (tmp_path / "my-server" / "package.json").is_file()

    def test_undecodable_shell_output_still_succeeds(self, tmp_path: Path) -> None:
        error = UnicodeDecodeError("utf-8", b"C:\\Users\\Jos\x82", 12, 13, "invalid start byte")
        with (
            patch("mcp_create_tool.host_config.detect_platform", return_value=HostPlatform.WSL),
            patch("mcp_create_tool.host_platform.subprocess.run", side_effect=error),
        ):
            result = runner.invoke(app, ["create", "my-server", *CREATE_OPTIONS, "--install"])

        assert result.exit_code == 0
        assert "Could not update Claude.app configuration" in result.stdout
        assert (tmp_path / "my-server" / "package.json").is_file()


class TestRegisterCommand:
    """Tests for the register command."""

    def test_uses_package_json_name(self, tmp_path: Path, darwin_host: Path) -> None:
        project_dir = tmp_path / "existing"
        project_dir.mkdir()
        (project_dir / "package.json").write_text('{"name": "pkg-server"}')

        result = runner.invoke(app, ["register", "existing"])

        assert result.exit_code == 0
        document = json.loads(darwin_host.read_text())
        assert list(document["mcpServers"]) == ["pkg-server"]

    def test_falls_back_to_directory_name(self, tmp_path: Path, darwin_host: Path) -> None:
        (tmp_path / "plain-dir").mkdir()

        result = runner.invoke(app, ["register", "plain-dir"])

        assert result.exit_code == 0
        assert "plain-dir" in json.loads(darwin_host.read_text())["mcpServers"]

    def test_yes_replaces_without_prompt(self, tmp_path: Path, darwin_host: Path) -> None:
        (tmp_path / "srv").mkdir()
        darwin_host.parent.mkdir(parents=True)
        darwin_host.write_text('{"mcpServers": {"named": {"command": "python", "args": []}}}')

        result = runner.invoke(app, ["register", "srv", "--name", "named", "--yes"])

        assert result.exit_code == 0
        assert json.loads(darwin_host.read_text())["mcpServers"]["named"]["command"] == "node"

    def test_missing_directory(self) -> None:
        result = runner.invoke(app, ["register", "missing"])
        assert result.exit_code == 1


class TestHostConfigPathCommand:
    """Tests for the host-config-path command."""

    def test_prints_path(self) -> None:
        with patch(
            "mcp_create_tool.cli.get_host_config_path", return_value=Path("/cfg/claude.json")
        ):
            result = runner.invoke(app, ["host-config-path"])

        assert result.exit_code == 0
        assert "/cfg/claude.json" in result.stdout

    def test_unsupported_platform(self) -> None:
        with patch(
            "mcp_create_tool.cli.get_host_config_path",
            side_effect=ConfigLookupError("Unsupported operating system"),
        ):
            result = runner.invoke(app, ["host-config-path"])

        assert result.exit_code == 1


class TestConfigCommands:
    """Tests for the config subcommands."""

    def test_show_without_config(self) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "No user config found" in result.stdout

    def test_init_then_show(self, isolated_user_config: Path) -> None:
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert isolated_user_config.is_file()

        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "install_for_host" in result.stdout

    def test_init_refuses_overwrite(self, isolated_user_config: Path) -> None:
        runner.invoke(app, ["config", "init"])

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1

    def test_path(self) -> None:
        result = runner.invoke(app, ["config", "path"])
        assert result.exit_code == 0
        assert "config.yaml" in result.stdout
