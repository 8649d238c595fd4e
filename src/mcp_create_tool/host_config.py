"""Register generated servers in the Claude.app configuration file."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from mcp_create_tool.errors import ConfigIOError, ConfigLookupError
from mcp_create_tool.host_platform import (
    DistroLookup,
    ProfileResolver,
    detect_platform,
    get_config_path,
    network_prefix,
    resolve_host_profile_dir,
    wsl_distribution_name,
)
from mcp_create_tool.models import (
    HostPlatform,
    RegistrationResult,
    RegistrationStatus,
    ServerEntry,
)

logger = logging.getLogger(__name__)

SERVERS_KEY = "mcpServers"
ENTRY_COMMAND = "node"

ConfirmReplace = Callable[[str], bool]


def load_host_config(config_path: Path) -> dict[str, Any]:
    """Load the host configuration document.

    A missing file yields an empty document and its parent directory is
    created. Any other read or parse failure raises :class:`ConfigIOError`.
    """
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"No configuration at {config_path}, starting from an empty document")
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOError(f"Could not create {config_path.parent}: {e}") from e
        return {}
    except (OSError, UnicodeError) as e:
        raise ConfigIOError(f"Could not read {config_path}: {e}") from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigIOError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigIOError(f"Expected a JSON object in {config_path}")
    return document


def save_host_config(config_path: Path, document: dict[str, Any]) -> None:
    """Write the whole document back, replacing the previous file."""
    try:
        config_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(f"Could not write {config_path}: {e}") from e


def build_server_entry(directory: Path, prefix: str = "") -> ServerEntry:
    """Build the launch entry for the project's compiled ``build/index.js``."""
    entry_point = Path(os.path.abspath(directory / "build" / "index.js"))
    return ServerEntry(command=ENTRY_COMMAND, args=[prefix + str(entry_point)])


def merge_server_entry(
    document: dict[str, Any],
    name: str,
    entry: ServerEntry,
    confirm: ConfirmReplace,
) -> bool:
    """Insert ``entry`` under ``name`` in ``document``.

    ``confirm`` is only consulted when ``name`` is already configured. Returns
    False, leaving the existing entry in place, if it declines.
    """
    servers = document.get(SERVERS_KEY)
    if not isinstance(servers, dict):
        servers = {}
        document[SERVERS_KEY] = servers

    if name in servers and not confirm(name):
        return False

    servers[name] = entry.to_json()
    return True


def register_server(
    name: str,
    directory: Path,
    confirm: ConfirmReplace,
    *,
    host_platform: HostPlatform | None = None,
    config_path: Path | None = None,
    profile_resolver: ProfileResolver = resolve_host_profile_dir,
    distro_lookup: DistroLookup = wsl_distribution_name,
) -> RegistrationResult:
    """Add or replace the ``name`` server in the Claude.app configuration.

    Lookup and I/O failures are logged and reported as a ``failed`` result;
    they never propagate to the caller.
    """
    host_platform = host_platform or detect_platform()
    try:
        if config_path is None:
            config_path = get_config_path(host_platform, profile_resolver=profile_resolver)
        logger.info(f"Updating Claude.app configuration in {config_path}")

        entry = build_server_entry(directory, network_prefix(host_platform, distro_lookup))
        document = load_host_config(config_path)
        servers = document.get(SERVERS_KEY)
        existed = isinstance(servers, dict) and name in servers

        if not merge_server_entry(document, name, entry, confirm):
            logger.info(f"Skipped replacing Claude.app config for existing MCP server '{name}'")
            return RegistrationResult(
                status=RegistrationStatus.SKIPPED,
                config_path=config_path,
                message=f'Skipped replacing Claude.app config for existing MCP server "{name}"',
            )

        save_host_config(config_path, document)
    except (ConfigLookupError, ConfigIOError) as e:
        logger.warning(f"Could not update Claude.app configuration: {e}")
        return RegistrationResult(
            status=RegistrationStatus.FAILED,
            config_path=config_path,
            message=str(e),
        )

    status = RegistrationStatus.REPLACED if existed else RegistrationStatus.ADDED
    logger.debug(f"Server '{name}' {status.value} in {config_path}")
    return RegistrationResult(
        status=status,
        config_path=config_path,
        entry=entry,
        message="Successfully added MCP server to Claude.app configuration",
    )
