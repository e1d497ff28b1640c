"""
Path translation between the host and the WSL bridge.

Windows drive paths (``C:\\Users\\me``) are seen from inside WSL as
``/mnt/c/Users/me``. The functions here are pure and never spawn processes.
"""

import re

_DRIVE_PATH = re.compile(r"^([A-Za-z]):\\")


def is_windows_file_path(path: str) -> bool:
    """Return True for paths of the form ``<letter>:\\...``."""
    return bool(path) and _DRIVE_PATH.match(path) is not None


def to_bridge_path(native_path: str, bridge_mode: bool = True) -> str:
    """
    Convert a native path to the equivalent path inside the bridge.

    Args:
        native_path: Host path
        bridge_mode: Whether bridge mode is enabled

    Returns:
        ``/mnt/<drive>/<rest>`` for drive paths, the input with backslashes
        replaced by forward slashes for anything else. Without bridge mode
        the input is returned unchanged.

    Example:
        >>> to_bridge_path("C:\\\\Users\\\\a\\\\b")
        '/mnt/c/Users/a/b'
    """
    if not bridge_mode:
        return native_path

    match = _DRIVE_PATH.match(native_path)
    if match is None:
        return native_path.replace("\\", "/")

    drive = match.group(1).lower()
    rest = native_path[2:].replace("\\", "/").lstrip("/")
    return f"/mnt/{drive}/{rest}"


def combine_path(base_path: str, relative_path: str, windows: bool = False) -> str:
    """
    Join two path fragments with the platform separator.

    Args:
        base_path: Leading path
        relative_path: Trailing path, written with forward slashes
        windows: Use backslashes (native Windows)

    Returns:
        Combined path string
    """
    separator = "/"
    if windows:
        relative_path = relative_path.replace("/", "\\")
        separator = "\\"
    return base_path + separator + relative_path


def unquoted_path(path: str, windows: bool = False) -> str:
    """Strip one pair of surrounding double quotes (native Windows only)."""
    if windows and len(path) > 1 and path.startswith('"') and path.endswith('"'):
        return path[1:-1]
    return path


def file_uri(path: str) -> str:
    """
    Build a ``file://`` URI for a host path.

    Example:
        >>> file_uri("C:\\\\tmp\\\\x.txt")
        'file:///C:/tmp/x.txt'
    """
    if is_windows_file_path(path):
        return "file:///" + path.replace("\\", "/")
    return "file://" + path


class PathTranslator:
    """
    Path operations bound to a ``PlatformResolver``.

    The resolver is consulted for bridge mode and native Windows on every
    call; the translator keeps no state of its own.
    """

    def __init__(self, resolver):
        self.resolver = resolver

    def to_bridge_path(self, native_path: str) -> str:
        return to_bridge_path(native_path, self.resolver.bridge_mode_enabled())

    def combine_path(self, base_path: str, relative_path: str) -> str:
        return combine_path(base_path, relative_path, self.resolver.is_windows())

    def unquoted_path(self, path: str) -> str:
        return unquoted_path(path, self.resolver.is_windows())


__all__ = [
    "PathTranslator",
    "to_bridge_path",
    "combine_path",
    "unquoted_path",
    "file_uri",
    "is_windows_file_path",
]
