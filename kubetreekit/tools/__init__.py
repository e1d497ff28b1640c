"""
Managed tool installation for KubeTreeKit.

Downloads CLI plugins on demand and retries commands that failed because
the plugin was missing.
"""

from .catalog import ManagedTool, KUBECTL_TREE, KNOWN_TOOLS, get_tool, list_tools
from .installer import (
    ArchiveInstaller,
    ArchiveKind,
    DownloadSpec,
    InstallTarget,
    resolve_url,
)
from .orchestrator import InstallOrchestrator, InstallState, is_missing_plugin

__all__ = [
    "ManagedTool",
    "KUBECTL_TREE",
    "KNOWN_TOOLS",
    "get_tool",
    "list_tools",
    "ArchiveInstaller",
    "ArchiveKind",
    "DownloadSpec",
    "InstallTarget",
    "resolve_url",
    "InstallOrchestrator",
    "InstallState",
    "is_missing_plugin",
]
