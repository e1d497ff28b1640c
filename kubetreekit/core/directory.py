"""
Install directory layout for managed tools.

Directory Structure:
    <home>/.<namespace>/          (namespace defaults to 'vs-kubernetes')
        - tools/
          - <tool-name>/          : Extracted release archive of one tool

The directory for a given tool name is stable across calls: repeated
installs overwrite in place and are not namespaced by version. The
filesystem itself is the only record of what is installed.

Paths are handled as strings rather than ``pathlib`` objects because in
bridge mode they are Linux paths while the host may be Windows.
"""

import logging
from pathlib import Path

from kubetreekit.core.paths import combine_path
from kubetreekit.core.result import ErrorKind, Result, Succeeded, fail

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "vs-kubernetes"


def get_tools_dir(resolver, namespace: str = DEFAULT_NAMESPACE) -> Result[str]:
    """
    Get the root directory holding all managed tools.

    Args:
        resolver: PlatformResolver used for the home directory and separators
        namespace: Application namespace (directory name without the dot)

    Returns:
        Succeeded with the tools directory, or a CONFIG_UNAVAILABLE failure
        when the home directory cannot be determined
    """
    home = resolver.home()
    if not home:
        return fail(
            ErrorKind.CONFIG_UNAVAILABLE,
            "Unable to determine the home directory. "
            "Set HOME (or USERPROFILE on Windows).",
        )
    return Succeeded(combine_path(home, f".{namespace}/tools", resolver.is_windows()))


def get_install_folder(
    resolver, tool_name: str, namespace: str = DEFAULT_NAMESPACE
) -> Result[str]:
    """
    Get the install directory of one tool.

    Example:
        >>> get_install_folder(resolver, "kubectl-tree").value
        '/home/me/.vs-kubernetes/tools/kubectl-tree'
    """
    tools_dir = get_tools_dir(resolver, namespace)
    if not tools_dir.succeeded:
        return tools_dir
    return Succeeded(combine_path(tools_dir.value, tool_name, resolver.is_windows()))


def ensure_directory(path: str) -> Result[None]:
    """
    Create a host directory and its parents; an existing directory is not an error.

    Args:
        path: Directory to create

    Returns:
        Succeeded(None), or a CONFIG_UNAVAILABLE failure if creation fails
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return fail(
            ErrorKind.CONFIG_UNAVAILABLE, f"Failed to create directory {path}: {e}"
        )
    return Succeeded(None)
