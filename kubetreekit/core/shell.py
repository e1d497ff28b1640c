"""
Shell command execution for KubeTreeKit.

This module runs command lines either directly on the host or through the
WSL bridge, with an environment that puts every managed tool's install
directory at the front of PATH.

Features:
- Blocking execution collecting stdout, stderr and exit code
- Streaming execution handing the live process to a callback
- Optional standard-input payload
- KUBECONFIG override per call
- Spawn failures reported as ``Failed`` results, never raised

Usage:
    from kubetreekit.core.shell import ShellExecutor

    executor = ShellExecutor(resolver, tools=["kubectl-tree"])
    result = executor.run("kubectl tree -A Deployment web")
    if result.succeeded and result.value.ok:
        print(result.value.stdout)

Each call spawns at most one subprocess (the bridged home lookup aside,
which the resolver memoizes) and nothing is retried here. Cancellation is
left to callers of ``run_streaming``, who may terminate the process handed
to their callback.
"""

import logging
import os
import subprocess
from typing import Callable, Dict, Iterable, Mapping, Optional

from kubetreekit.core.directory import DEFAULT_NAMESPACE, get_install_folder
from kubetreekit.core.result import ErrorKind, Result, ShellResult, Succeeded, fail

logger = logging.getLogger(__name__)

BRIDGE_COMMAND_PREFIX = "wsl"
KUBECONFIG_ENV = "KUBECONFIG"


def path_variable_name(env: Mapping[str, str], windows: bool) -> str:
    """
    Find the name of the PATH variable in ``env``.

    Native Windows treats environment names case-insensitively, so an
    existing ``Path`` entry is reused instead of adding a second ``PATH``.
    """
    if windows:
        for name in env:
            if name.lower() == "path":
                return name
    return "PATH"


def path_entry_separator(windows: bool) -> str:
    return ";" if windows else ":"


class ShellExecutor:
    """
    Runs shell commands with managed tools on PATH.

    The executor holds no state across calls: the environment is composed
    fresh from ``base_env`` (or ``os.environ``) on every invocation.

    Attributes:
        resolver: PlatformResolver consulted for bridge mode and home
        tools: Names of managed tools whose install directories go on PATH
        namespace: Application namespace for the install directory layout
        cwd: Working directory for spawned processes (None: inherit)
    """

    def __init__(
        self,
        resolver,
        tools: Iterable[str] = (),
        namespace: str = DEFAULT_NAMESPACE,
        cwd: Optional[str] = None,
        base_env: Optional[Mapping[str, str]] = None,
    ):
        self.resolver = resolver
        self.tools = list(tools)
        self.namespace = namespace
        self.cwd = cwd
        self.base_env = base_env

    def build_environment(
        self, base_env: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """
        Compose the environment for a subprocess.

        Each call prepends every managed tool directory once; calling it
        repeatedly on its own output adds the entries again.

        Args:
            base_env: Starting environment (default: executor base or os.environ)

        Returns:
            New environment dictionary
        """
        if base_env is None:
            base_env = self.base_env if self.base_env is not None else os.environ
        env = dict(base_env)

        windows = self.resolver.is_windows()
        if windows or self.resolver.bridge_mode_enabled():
            home = self.resolver.home()
            if home:
                env["HOME"] = home

        path_var = path_variable_name(env, windows)
        separator = path_entry_separator(windows)
        for tool in self.tools:
            folder = get_install_folder(self.resolver, tool, self.namespace)
            if not folder.succeeded:
                logger.debug(f"Skipping PATH entry for {tool}: {folder.message}")
                continue
            current = env.get(path_var)
            env[path_var] = folder.value + (f"{separator}{current}" if current else "")

        return env

    def run(
        self,
        command: str,
        kubeconfig: Optional[str] = None,
        stdin: Optional[str] = None,
    ) -> Result[ShellResult]:
        """
        Run a command and wait for it to finish.

        Args:
            command: Command line (interpreted by the shell)
            kubeconfig: Value for KUBECONFIG in the child environment
            stdin: Text written to the child's standard input, then closed

        Returns:
            Succeeded with the ShellResult (whatever its exit code), or an
            EXEC_FAILURE if the process could not be spawned
        """
        env = self.build_environment()
        if kubeconfig:
            env[KUBECONFIG_ENV] = kubeconfig
        return self._exec_core(command, env, stdin=stdin)

    def run_streaming(
        self,
        command: str,
        on_start: Optional[Callable[[subprocess.Popen], None]] = None,
    ) -> Result[ShellResult]:
        """
        Run a command, handing the live process to ``on_start`` right after spawn.

        The callback runs synchronously before output is collected. It may
        read from ``proc.stdout`` or terminate the process. Standard error is
        merged into ``proc.stdout`` so the child cannot block on an unread
        pipe; the returned ShellResult has an empty ``stderr``. If the callback
        raises, the process is killed and an EXEC_FAILURE is returned.
        """
        return self._exec_core(
            command, self.build_environment(), on_start=on_start, merge_stderr=True
        )

    def _exec_core(
        self,
        command: str,
        env: Dict[str, str],
        on_start: Optional[Callable[[subprocess.Popen], None]] = None,
        stdin: Optional[str] = None,
        merge_stderr: bool = False,
    ) -> Result[ShellResult]:
        if self.resolver.bridge_mode_enabled():
            command = f"{BRIDGE_COMMAND_PREFIX} {command}"

        logger.debug(f"Running: {command}")
        try:
            proc = subprocess.Popen(
                command,
                shell=True,
                cwd=self.cwd,
                env=env,
                stdin=subprocess.PIPE if stdin is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error(f"Failed to start '{command}': {e}")
            return fail(ErrorKind.EXEC_FAILURE, f"Unable to run '{command}': {e}")

        if on_start is not None:
            try:
                on_start(proc)
            except Exception as e:
                logger.error(f"Process callback failed for '{command}': {e}")
                proc.kill()
                proc.communicate()
                return fail(
                    ErrorKind.EXEC_FAILURE,
                    f"Process callback failed for '{command}': {e}",
                )

        stdout, stderr = proc.communicate(input=stdin)
        logger.debug(f"Exit code {proc.returncode}: {command}")
        return Succeeded(
            ShellResult(
                exit_code=proc.returncode,
                stdout=stdout or "",
                stderr=stderr or "",
            )
        )


__all__ = [
    "ShellExecutor",
    "path_variable_name",
    "path_entry_separator",
    "BRIDGE_COMMAND_PREFIX",
    "KUBECONFIG_ENV",
]
