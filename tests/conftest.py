"""Pytest fixtures for mcp-create-tool tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from mcp_create_tool.models import GenerationConfig


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config file at a temporary location."""
    config_path = tmp_path / "user-config" / "config.yaml"
    monkeypatch.setattr("mcp_create_tool.user_config.get_config_path", lambda: config_path)
    monkeypatch.setattr("mcp_create_tool.cli.get_config_path", lambda: config_path)
    return config_path


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary directory for project generation."""
    output_dir = tmp_path / "projects"
    output_dir.mkdir(parents=True, exist_ok=True)
    yield output_dir


@pytest.fixture
def generation_config() -> GenerationConfig:
    """A valid configuration for the built-in template set."""
    return GenerationConfig(
        name="weather-server",
        description="Looks up the weather",
        tool="forecast",
        install_for_host=False,
    )


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A small template tree exercising every naming rule."""
    root = tmp_path / "template"
    (root / "src").mkdir(parents=True)
    (root / "dotfile-gitignore.ejs").write_text("node_modules/\n<%= tool %>.log")
    (root / "README.md.ejs").write_text("# <%= name %>\n\n<%= description %>\n")
    (root / "plain.txt").write_text("no placeholders {{ here }}\n")
    (root / "src" / "index.ts.ejs").write_text('const TOOL = "<%= tool %>";\n')
    return root


@pytest.fixture
def host_config_path(tmp_path: Path) -> Path:
    """Location of a Claude.app configuration file that does not exist yet."""
    return tmp_path / "Claude" / "claude_desktop_config.json"
