"""User-level configuration for mcp-create-tool defaults.

Reads from ~/.config/mcp-create-tool/config.yaml and provides defaults
that sit underneath interactive answers and command-line options.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mcp_create_tool.models import UserDefaults

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "mcp-create-tool"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def get_config_path() -> Path:
    """Return the path to the user config file."""
    return CONFIG_FILE


def load_user_config() -> UserDefaults:
    """Load user configuration from disk.

    Returns empty defaults if the file doesn't exist or is invalid.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return UserDefaults()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load user config from {config_path}: {e}")
        return UserDefaults()

    if not isinstance(data, dict):
        logger.warning(f"User config is not a mapping: {config_path}")
        return UserDefaults()

    known = {key: value for key, value in data.items() if key in UserDefaults.model_fields}
    for key in data.keys() - known.keys():
        logger.warning(f"Ignoring unknown key '{key}' in user config")

    try:
        return UserDefaults.model_validate(known)
    except ValidationError as e:
        logger.warning(f"Invalid user config {config_path}: {e}")
        return UserDefaults()


def save_user_config(config: dict[str, Any]) -> Path:
    """Save configuration to the user config file.

    Returns the path written to.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
    return config_path


def get_default_config_template() -> dict[str, Any]:
    """Return an example config for scaffolding."""
    return {
        "description": "A Model Context Protocol server",
        "install_for_host": True,
    }
