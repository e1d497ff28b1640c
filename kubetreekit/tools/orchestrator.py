"""
Install-on-demand retry policy.

When a command fails because the host CLI does not know the plugin's
subcommand, the orchestrator installs the plugin once and re-runs the
command once. The second result is final, whatever it is.

State machine per call::

    IDLE --missing plugin--> INSTALLING --installed--> RETRIED
                                 |
                                 +--install failed--> FAILED
"""

import logging
from enum import Enum
from typing import Callable, Optional

from kubetreekit.core.result import Failed, Result, ShellResult, failed
from kubetreekit.tools.catalog import ManagedTool

logger = logging.getLogger(__name__)

# Text the host CLI prints for an unknown subcommand. Matched verbatim.
MISSING_PLUGIN_SIGNATURES = (
    'unknown command "{plugin}" for "{host_cli}"',
    'unknown subcommand "{plugin}"',
)


class InstallState(Enum):
    """Where the orchestrator is in its single-retry cycle."""

    IDLE = "idle"
    INSTALLING = "installing"
    RETRIED = "retried"
    FAILED = "failed"


def is_missing_plugin(result: Result[ShellResult], tool: ManagedTool) -> bool:
    """
    Decide whether a command failed because ``tool`` is not installed.

    True only for a command that ran, exited non-zero and printed one of the
    missing-plugin signatures on stderr.
    """
    if failed(result):
        return False
    shell_result = result.value
    if shell_result.ok:
        return False
    signatures = (
        s.format(plugin=tool.plugin, host_cli=tool.host_cli)
        for s in MISSING_PLUGIN_SIGNATURES
    )
    return any(signature in shell_result.stderr for signature in signatures)


def _log_notification(level: int, message: str) -> None:
    logger.log(level, message)


class InstallOrchestrator:
    """
    Runs commands, installing the managed tool once if it turns out to be missing.

    Attributes:
        installer: ArchiveInstaller used for the one install attempt
        executor: ShellExecutor running the caller's command
        tool: ManagedTool that provides the plugin subcommand
        notify: Callback receiving (logging level, user-facing message)
        state: InstallState reached by the most recent call
    """

    def __init__(
        self,
        installer,
        executor,
        tool: ManagedTool,
        notify: Optional[Callable[[int, str], None]] = None,
    ):
        self.installer = installer
        self.executor = executor
        self.tool = tool
        self.notify = notify or _log_notification
        self.state = InstallState.IDLE

    def execute(
        self,
        command: str,
        kubeconfig: Optional[str] = None,
        stdin: Optional[str] = None,
    ) -> Result[ShellResult]:
        """
        Run ``command``; on a missing-plugin failure install and retry once.

        Args:
            command: Command line to run
            kubeconfig: KUBECONFIG override passed to the executor
            stdin: Standard input passed to the executor

        Returns:
            The first result if no install was needed, the retry's result
            after a successful install, or a Failed carrying the remediation
            message if the install failed.
        """
        self.state = InstallState.IDLE
        result = self.executor.run(command, kubeconfig=kubeconfig, stdin=stdin)
        if not is_missing_plugin(result, self.tool):
            return result

        self.state = InstallState.INSTALLING
        self.notify(
            logging.INFO,
            f'{self.tool.host_cli} plugin "{self.tool.plugin}" not found, '
            f"installing {self.tool.name} {self.tool.version}",
        )
        installed = self.installer.install_tool(self.tool)
        if failed(installed):
            self.state = InstallState.FAILED
            remediation = self.tool.remediation_message()
            for error in installed.errors:
                logger.error(error)
            self.notify(logging.ERROR, remediation)
            return Failed(errors=(remediation,) + installed.errors, kind=installed.kind)

        self.state = InstallState.RETRIED
        self.notify(
            logging.INFO,
            f'{self.tool.host_cli} plugin "{self.tool.plugin}" installed, '
            f"retrying: {command}",
        )
        return self.executor.run(command, kubeconfig=kubeconfig, stdin=stdin)


__all__ = [
    "InstallOrchestrator",
    "InstallState",
    "is_missing_plugin",
    "MISSING_PLUGIN_SIGNATURES",
]
