"""
Platform detection for KubeTreeKit.

This module determines the host operating system and whether commands are
bridged into the Windows Subsystem for Linux ("bridge mode"). All other
components consult a single ``PlatformResolver`` so exactly one platform
value is live per operation.

Usage:
    from kubetreekit.config import load_config
    from kubetreekit.core.platform import PlatformResolver, platform_label

    resolver = PlatformResolver(load_config())
    print(resolver.platform())            # Platform.LINUX
    print(platform_label(resolver.platform()))  # 'linux'
"""

import logging
import os
import platform as host_platform
import subprocess
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

BRIDGE_EXECUTABLE = "wsl.exe"

# Home directories under this prefix (relative to the drive) are rejected.
PROTECTED_HOME_PREFIX = "\\windows\\system32"


class Platform(Enum):
    """Platforms a managed tool can be installed for."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNSUPPORTED = "unsupported"


_PLATFORM_LABELS = {
    Platform.WINDOWS: "windows",
    Platform.MACOS: "darwin",
    Platform.LINUX: "linux",
}


def platform_label(platform: Platform) -> Optional[str]:
    """
    Map a platform to the label used in release artifact names.

    Args:
        platform: Platform to map

    Returns:
        'windows', 'darwin' or 'linux'; None for unsupported platforms so
        that URL construction fails closed.

    Example:
        >>> platform_label(Platform.MACOS)
        'darwin'
    """
    return _PLATFORM_LABELS.get(platform)


def _detect_os() -> Platform:
    """
    Detect the host operating system.

    Returns:
        Host platform, ``Platform.UNSUPPORTED`` for anything unrecognized
    """
    system = host_platform.system().lower()

    if system == "windows":
        return Platform.WINDOWS
    elif system == "darwin":
        return Platform.MACOS
    elif system == "linux":
        return Platform.LINUX
    else:
        return Platform.UNSUPPORTED


def concat_if_safe(
    home_drive: Optional[str], home_path: Optional[str]
) -> Optional[str]:
    """
    Join HOMEDRIVE and HOMEPATH unless the path points into the system directory.

    Args:
        home_drive: Drive part, e.g. 'C:'
        home_path: Path part, e.g. '\\Users\\me'

    Returns:
        Joined path, or None if either part is missing or the path is protected
    """
    if home_drive and home_path:
        if not home_path.lower().startswith(PROTECTED_HOME_PREFIX):
            return home_drive + home_path
        logger.debug(f"Ignoring protected home path: {home_drive}{home_path}")
    return None


class PlatformResolver:
    """
    Resolves the effective platform, bridge mode and home directory.

    Bridge mode is read from the configuration object passed in; nothing is
    looked up from ambient global state. In bridge mode the platform is always
    ``Platform.LINUX``.

    Attributes:
        config: Object exposing a boolean ``use_wsl`` attribute
        env: Environment used for home directory lookup
    """

    def __init__(self, config, env: Optional[Mapping[str, str]] = None):
        """
        Initialize resolver.

        Args:
            config: Configuration with a ``use_wsl`` flag
            env: Environment mapping (default: os.environ)
        """
        self.config = config
        self.env = os.environ if env is None else env
        self._bridge_home: Optional[str] = None

    def bridge_mode_enabled(self) -> bool:
        """Return True if commands are bridged into WSL."""
        return bool(getattr(self.config, "use_wsl", False))

    def host_platform(self) -> Platform:
        """Platform of the host OS, ignoring bridge mode."""
        return _detect_os()

    def platform(self) -> Platform:
        """Effective platform for downloads and command execution."""
        if self.bridge_mode_enabled():
            return Platform.LINUX
        return _detect_os()

    def is_windows(self) -> bool:
        """True on a native Windows host with bridge mode off."""
        return self.platform() == Platform.WINDOWS

    def is_unix(self) -> bool:
        return not self.is_windows()

    def home(self) -> str:
        """
        Resolve the user's home directory.

        In bridge mode the home directory is read from inside WSL (one
        subprocess, memoized on this resolver once it succeeds). Otherwise
        environment variables are consulted in order: HOME, HOMEDRIVE+HOMEPATH
        (unless it points into the system directory), USERPROFILE.

        Returns:
            Home directory path, or an empty string if it cannot be determined
        """
        if self.bridge_mode_enabled():
            if not self._bridge_home:
                self._bridge_home = self._bridged_home() or None
            return self._bridge_home or ""

        return (
            self.env.get("HOME")
            or concat_if_safe(self.env.get("HOMEDRIVE"), self.env.get("HOMEPATH"))
            or self.env.get("USERPROFILE")
            or ""
        )

    def _bridged_home(self) -> str:
        try:
            result = subprocess.run(
                [BRIDGE_EXECUTABLE, "echo", "${HOME}"],
                capture_output=True,
                text=True,
                timeout=30,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Could not query home directory through WSL: {e}")
            return ""

        if result.returncode != 0:
            logger.warning(f"WSL home lookup failed: {result.stderr.strip()}")
            return ""
        return result.stdout.strip()


__all__ = [
    "Platform",
    "PlatformResolver",
    "platform_label",
    "concat_if_safe",
    "BRIDGE_EXECUTABLE",
]
