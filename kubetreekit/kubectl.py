"""
Running ``kubectl tree`` for a Kubernetes object.

This is the caller of the install-on-demand policy: it builds the
``kubectl tree`` command line, runs it through an ``InstallOrchestrator``
(so a missing plugin is installed and the command retried once) and turns
a non-zero exit into an ``EXEC_FAILURE`` result.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from kubetreekit.core.paths import to_bridge_path
from kubetreekit.core.result import (
    ErrorKind,
    Result,
    ShellResult,
    Succeeded,
    fail,
    failed,
)

logger = logging.getLogger(__name__)

HOST_PATH = "host"
WSL_PATH = "wsl"

# Kubernetes kinds and object names never need shell quoting.
_RESOURCE_PART = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.\-_:]*$")


@dataclass(frozen=True)
class KubeconfigPath:
    """
    Location of the kubeconfig file.

    Attributes:
        path_type: 'host' for a host path, 'wsl' for a path inside WSL
        host_path: Path on the host (path_type 'host')
        wsl_path: Path inside WSL (path_type 'wsl')
    """

    path_type: str
    host_path: Optional[str] = None
    wsl_path: Optional[str] = None


def resolve_kubeconfig(
    resolver,
    explicit: Optional[str] = None,
    configured: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Optional[KubeconfigPath]:
    """
    Find the kubeconfig to use.

    Lookup order: explicit path, configured path, KUBECONFIG, then
    ``<home>/.kube/config``. In bridge mode the result is a WSL path.

    Returns:
        KubeconfigPath, or None if nothing could be determined
    """
    env = os.environ if env is None else env
    path = explicit or configured or env.get("KUBECONFIG")
    if not path:
        home = resolver.home()
        if not home:
            return None
        separator = "\\" if resolver.is_windows() else "/"
        path = separator.join([home, ".kube", "config"])
    elif path.startswith("~") and not resolver.bridge_mode_enabled():
        path = os.path.expanduser(path)

    if resolver.bridge_mode_enabled():
        return KubeconfigPath(path_type=WSL_PATH, wsl_path=to_bridge_path(path))
    return KubeconfigPath(path_type=HOST_PATH, host_path=path)


def tree_command(kind: str, name: str) -> str:
    """
    Build the ``kubectl tree`` subcommand for one object.

    Raises:
        ValueError: If the kind or name contains characters not allowed in
            Kubernetes identifiers
    """
    for part in (kind, name):
        if not _RESOURCE_PART.match(part or ""):
            raise ValueError(f"Invalid resource identifier: {part!r}")
    return f"tree -A {kind} {name}"


class TreeRunner:
    """
    Runs ``kubectl tree`` with install-on-demand.

    Attributes:
        orchestrator: InstallOrchestrator for the kubectl-tree plugin
    """

    def __init__(self, orchestrator):
        self.orchestrator = orchestrator

    def run(
        self, kind: str, name: str, kubeconfig: Optional[KubeconfigPath]
    ) -> Result[ShellResult]:
        """
        Render the ownership tree of ``<kind>/<name>``.

        Returns:
            Succeeded with the ShellResult of a zero exit, or a Failed
            (CONFIG_UNAVAILABLE, EXEC_FAILURE or an install failure)
        """
        if kubeconfig is None:
            return fail(
                ErrorKind.CONFIG_UNAVAILABLE,
                "k8s configuration not available. Unable to get active K8s cluster",
            )

        try:
            command = f"kubectl {tree_command(kind, name)}"
        except ValueError as e:
            return fail(ErrorKind.EXEC_FAILURE, str(e))

        if kubeconfig.path_type == HOST_PATH:
            result = self.orchestrator.execute(command, kubeconfig=kubeconfig.host_path)
        elif kubeconfig.path_type == WSL_PATH:
            result = self.orchestrator.execute(
                f'{command} --kubeconfig "{kubeconfig.wsl_path}"'
            )
        else:
            return fail(
                ErrorKind.CONFIG_UNAVAILABLE,
                "This command is not supported in your current configuration.",
            )

        if failed(result):
            return result

        shell_result = result.value
        if not shell_result.ok:
            detail = (
                shell_result.stderr.strip()
                or f"Unable to get the resource {kind}/{name}"
            )
            logger.debug(f"kubectl tree exited {shell_result.exit_code}")
            return fail(ErrorKind.EXEC_FAILURE, f"Treeview failed: {detail}")

        return Succeeded(shell_result)


__all__ = [
    "KubeconfigPath",
    "TreeRunner",
    "resolve_kubeconfig",
    "tree_command",
    "HOST_PATH",
    "WSL_PATH",
]
