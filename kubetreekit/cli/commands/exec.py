"""
Exec command implementation.

Runs an arbitrary command line with managed tools on PATH, installing the
managed tool once if the command reports it missing.
"""

import logging
import shlex
import subprocess
import sys
from typing import List

from kubetreekit.cli.utils import build_context, notify, print_error, report_failure
from kubetreekit.core.exceptions import UnknownToolError
from kubetreekit.core.result import failed

logger = logging.getLogger(__name__)


def join_command(parts: List[str], windows: bool) -> str:
    """Quote arguments for cmd.exe on native Windows, for sh elsewhere."""
    if windows:
        return subprocess.list2cmdline(parts)
    return " ".join(shlex.quote(part) for part in parts)


def run(args) -> int:
    """
    Run the exec command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code of the executed command (1 if it could not be run)
    """
    command_line = list(args.command_line or [])
    if command_line and command_line[0] == "--":
        command_line = command_line[1:]
    if not command_line:
        print_error("No command given")
        return 1

    context = build_context(args)
    if context is None:
        return 1

    try:
        orchestrator = context.orchestrator(args.tool, notify=notify)
    except UnknownToolError as e:
        print_error(str(e))
        return 1

    stdin = sys.stdin.read() if args.stdin else None
    command = join_command(command_line, context.resolver.is_windows())
    result = orchestrator.execute(command, kubeconfig=args.kubeconfig, stdin=stdin)
    if failed(result):
        report_failure(result)
        return 1

    shell_result = result.value
    sys.stdout.write(shell_result.stdout)
    sys.stderr.write(shell_result.stderr)
    return shell_result.exit_code
