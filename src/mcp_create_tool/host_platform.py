"""Host platform detection and Claude.app configuration directory lookup."""

from __future__ import annotations

import logging
import os
import platform
import subprocess
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from mcp_create_tool.errors import ConfigLookupError
from mcp_create_tool.models import HostPlatform

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "claude_desktop_config.json"
OS_RELEASE_FILE = Path("/etc/os-release")
WSL_NETWORK_HOST = "wsl.localhost"

# Path template per platform. ``{home}`` is the user's home directory,
# ``{appdata}`` the APPDATA variable and ``{profile}`` the Windows profile
# directory as seen from inside WSL.
CONFIG_DIR_TABLE: dict[HostPlatform, tuple[str, ...]] = {
    HostPlatform.DARWIN: ("{home}", "Library", "Application Support", "Claude"),
    HostPlatform.WIN32: ("{appdata}", "Claude"),
    HostPlatform.WSL: ("{profile}", "AppData", "Roaming", "Claude"),
}

ProfileResolver = Callable[[], Path]
DistroLookup = Callable[[], str]


class CommandRunner(Protocol):
    """Protocol for running external commands."""

    def __call__(self, args: list[str]) -> str:
        """Run ``args`` and return stdout."""
        ...


def run_command(args: list[str]) -> str:
    """Run an external command and return its stdout.

    A missing executable, a non-zero exit status, output on stderr or stdout
    that cannot be decoded is treated as a failed lookup.
    """
    try:
        result = subprocess.run(args, text=True, capture_output=True, check=False)
    except OSError as e:
        raise ConfigLookupError(f"Could not run {args[0]}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigLookupError(f"Could not decode the output of {args[0]}: {e}") from e

    if result.returncode != 0 or result.stderr.strip():
        logger.debug(f"Error executing {' '.join(args)}: {result.stderr.strip()}")
        raise ConfigLookupError(
            f"Command {' '.join(args)} failed: {result.stderr.strip() or result.returncode}"
        )
    return result.stdout


def is_wsl() -> bool:
    """Return True when running inside the Windows Subsystem for Linux."""
    if not sys.platform.startswith("linux"):
        return False
    if os.environ.get("WSL_DISTRO_NAME"):
        return True
    if "microsoft" in platform.uname().release.lower():
        return True
    try:
        return "microsoft" in Path("/proc/version").read_text(encoding="utf-8").lower()
    except OSError:
        return False


def detect_platform() -> HostPlatform:
    """Detect the platform the host application would run on."""
    if is_wsl():
        return HostPlatform.WSL
    if sys.platform == "darwin":
        return HostPlatform.DARWIN
    if sys.platform == "win32":
        return HostPlatform.WIN32
    if sys.platform.startswith("linux"):
        return HostPlatform.LINUX
    return HostPlatform.UNKNOWN


def supports_host_install(host_platform: HostPlatform | None = None) -> bool:
    """Return True where Claude.app can be installed."""
    host_platform = host_platform or detect_platform()
    return host_platform in CONFIG_DIR_TABLE


def resolve_host_profile_dir(runner: CommandRunner = run_command) -> Path:
    """Find the Windows user profile directory from inside WSL.

    Asks ``cmd.exe`` for ``%USERPROFILE%`` and converts the Windows path
    with ``wslpath``.
    """
    windows_path = runner(["cmd.exe", "/C", "echo %USERPROFILE%"]).replace("\r", "").strip()
    if not windows_path or windows_path == "%USERPROFILE%":
        raise ConfigLookupError("Could not determine the Windows user profile directory")
    return Path(runner(["wslpath", windows_path]).strip())


def wsl_distribution_name(os_release: Path = OS_RELEASE_FILE) -> str:
    """Return the distribution name WSL exposes under ``\\\\wsl.localhost``."""
    try:
        for line in os_release.read_text(encoding="utf-8").splitlines():
            if line.startswith("NAME="):
                return line[len("NAME=") :].strip().strip('"')
    except (OSError, UnicodeError) as e:
        logger.debug(f"Could not read {os_release}: {e}")

    distro = os.environ.get("WSL_DISTRO_NAME")
    if distro:
        return distro
    raise ConfigLookupError("Could not determine the WSL distribution name")


def network_prefix(
    host_platform: HostPlatform,
    distro_lookup: DistroLookup = wsl_distribution_name,
) -> str:
    """Prefix that lets the Windows host reach a path inside WSL.

    Empty everywhere except WSL, where it is ``//wsl.localhost/<distro>``.
    """
    if host_platform != HostPlatform.WSL:
        return ""
    return f"//{WSL_NETWORK_HOST}/{distro_lookup()}"


def get_config_dir(
    host_platform: HostPlatform | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
    profile_resolver: ProfileResolver = resolve_host_profile_dir,
) -> Path:
    """Resolve the Claude.app configuration directory for ``host_platform``."""
    host_platform = host_platform or detect_platform()
    environ = os.environ if environ is None else environ

    try:
        parts = CONFIG_DIR_TABLE[host_platform]
    except KeyError:
        raise ConfigLookupError(
            f"Unsupported operating system for Claude configuration: {host_platform.value}"
        ) from None

    root, *rest = parts
    if root == "{home}":
        base = home or Path.home()
    elif root == "{appdata}":
        appdata = environ.get("APPDATA")
        if not appdata:
            raise ConfigLookupError("APPDATA environment variable is not set")
        base = Path(appdata)
    else:
        base = profile_resolver()

    return base.joinpath(*rest)


def get_config_path(
    host_platform: HostPlatform | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
    profile_resolver: ProfileResolver = resolve_host_profile_dir,
) -> Path:
    """Return the full path of ``claude_desktop_config.json``."""
    config_dir = get_config_dir(
        host_platform, environ=environ, home=home, profile_resolver=profile_resolver
    )
    return config_dir / CONFIG_FILENAME
