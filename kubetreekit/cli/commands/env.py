"""
Env command implementation.

Prints the detected platform, bridge mode, home directory and the managed
tool directories that are prepended to PATH.
"""

import logging

from kubetreekit.cli.utils import build_context
from kubetreekit.core.directory import get_install_folder
from kubetreekit.core.platform import platform_label
from kubetreekit.core.shell import path_variable_name
from kubetreekit.tools.catalog import get_tool

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the env command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    context = build_context(args)
    if context is None:
        return 1

    resolver = context.resolver
    platform = resolver.platform()
    label = platform_label(platform) or "none"
    print(f"Platform:    {platform.value} (release label: {label})")
    print(f"Bridge mode: {'on' if resolver.bridge_mode_enabled() else 'off'}")
    print(f"Home:        {resolver.home() or '<unknown>'}")

    print("Managed tools:")
    for name in context.executor.tools:
        tool = get_tool(name, context.config)
        folder = get_install_folder(resolver, name, context.config.namespace)
        location = folder.value if folder.succeeded else folder.message
        installed = "installed" if context.installer.is_installed(tool) else "missing"
        print(f"  {name} {tool.version}: {location} ({installed})")

    env = context.executor.build_environment()
    path_var = path_variable_name(env, resolver.is_windows())
    print(f"{path_var}: {env.get(path_var, '')}")
    return 0
