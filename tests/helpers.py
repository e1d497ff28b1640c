"""
Helpers shared by KubeTreeKit tests.
"""

from kubetreekit.core.result import ShellResult, Succeeded


def shell_ok(stdout: str = "", stderr: str = "", exit_code: int = 0):
    """Succeeded result wrapping a ShellResult (any exit code)."""
    return Succeeded(ShellResult(exit_code=exit_code, stdout=stdout, stderr=stderr))
