"""
Catalog of managed tools.

A managed tool is a CLI plugin KubeTreeKit can download and install on
demand. Each entry pins one version and one release URL template; the
configuration file may override either.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from kubetreekit.core.exceptions import UnknownToolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagedTool:
    """
    A downloadable CLI plugin.

    Attributes:
        name: Tool name, also the install directory and binary name
        version: Pinned release version (e.g. 'v0.4.0')
        url_template: Release URL with {platform} and {version} placeholders
        plugin: Subcommand the plugin adds to the host CLI (e.g. 'tree')
        host_cli: CLI the plugin extends (e.g. 'kubectl')
        manual_install: Command users can run to install the plugin themselves
        homepage: Project page shown in remediation messages
    """

    name: str
    version: str
    url_template: str
    plugin: str
    host_cli: str
    manual_install: str = ""
    homepage: str = ""

    def binary_name(self, windows: bool) -> str:
        """Executable file name: '<name>.exe' on native Windows, '<name>' elsewhere."""
        return f"{self.name}.exe" if windows else self.name

    def remediation_message(self) -> str:
        """User-facing hint shown when automatic installation fails."""
        message = (
            f'Make sure you have installed {self.host_cli} plugin "{self.plugin}".'
        )
        if self.manual_install:
            message += f' Run "{self.manual_install}".'
        if self.homepage:
            message += f" More details {self.homepage}"
        return message


KUBECTL_TREE = ManagedTool(
    name="kubectl-tree",
    version="v0.4.0",
    url_template=(
        "https://github.com/ahmetb/kubectl-tree/releases/download/"
        "{version}/kubectl-tree_{version}_{platform}_amd64.tar.gz"
    ),
    plugin="tree",
    host_cli="kubectl",
    manual_install="kubectl krew install tree",
    homepage="https://github.com/ahmetb/kubectl-tree",
)

KNOWN_TOOLS: Dict[str, ManagedTool] = {
    KUBECTL_TREE.name: KUBECTL_TREE,
}


def list_tools() -> List[str]:
    """Names of all tools in the built-in catalog."""
    return sorted(KNOWN_TOOLS)


def get_tool(name: str, config=None) -> ManagedTool:
    """
    Look up a managed tool, applying configuration overrides.

    Args:
        name: Tool name
        config: Optional KubeTreeKitConfig with per-tool overrides

    Returns:
        ManagedTool with overrides applied

    Raises:
        UnknownToolError: If the tool is not in the catalog

    Example:
        >>> get_tool("kubectl-tree").version
        'v0.4.0'
    """
    tool = KNOWN_TOOLS.get(name)
    if tool is None:
        raise UnknownToolError(name)

    override = _override_for(name, config)
    if override is None:
        return tool

    changes = {}
    if override.version:
        changes["version"] = override.version
    if override.url:
        changes["url_template"] = override.url
    if changes:
        logger.debug(f"Applying configuration overrides for {name}: {changes}")
        tool = replace(tool, **changes)
    return tool


def _override_for(name: str, config) -> Optional[object]:
    if config is None:
        return None
    return getattr(config, "tools", {}).get(name)


__all__ = ["ManagedTool", "KUBECTL_TREE", "KNOWN_TOOLS", "get_tool", "list_tools"]
