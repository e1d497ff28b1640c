"""
Install command implementation.

Downloads a managed tool into the tools directory.
"""

import logging

from kubetreekit.cli.utils import build_context, print_error, report_failure
from kubetreekit.core.exceptions import UnknownToolError
from kubetreekit.core.result import failed
from kubetreekit.tools.catalog import get_tool, list_tools

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    context = build_context(args)
    if context is None:
        return 1

    try:
        tool = get_tool(args.tool, context.config)
    except UnknownToolError as e:
        print_error(f"{e}. Known tools: {', '.join(list_tools())}")
        return 1

    if args.force:
        result = context.installer.install_tool(tool)
    else:
        result = context.installer.install_if_missing(tool.name, config=context.config)

    if failed(result):
        report_failure(result)
        print_error(tool.remediation_message())
        return 1

    target = context.installer.target_for(tool)
    folder = target.value.install_directory
    logger.info(f"{tool.name} {tool.version} is installed in {folder}")
    return 0
