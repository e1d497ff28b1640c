"""
Result values for fallible operations.

Every fallible operation in the acquisition and execution core returns a
``Result`` instead of raising. A result is either ``Succeeded`` (carrying a
``value``) or ``Failed`` (carrying human-readable ``errors`` and an
``ErrorKind`` tag naming the stage that failed).

Usage:
    from kubetreekit.core.result import Succeeded, Failed, ErrorKind, failed

    result = downloader.to_temp_file(url)
    if failed(result):
        print(result.errors[0])
    else:
        print(result.value)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


class ErrorKind(Enum):
    """Failure taxonomy shared by all core components."""

    CONFIG_UNAVAILABLE = "config-unavailable"
    UNSUPPORTED_PLATFORM = "unsupported-platform"
    DOWNLOAD_FAILURE = "download-failure"
    EXTRACT_FAILURE = "extract-failure"
    EXEC_FAILURE = "exec-failure"


@dataclass(frozen=True)
class ShellResult:
    """
    Outcome of exactly one subprocess invocation.

    Attributes:
        exit_code: Process exit code (0 means success, anything else failure)
        stdout: Captured standard output
        stderr: Captured standard error
    """

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """True when the process exited with code 0, regardless of stderr."""
        return self.exit_code == 0


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    """Successful result carrying a value."""

    value: T
    succeeded: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failed:
    """Failed result carrying error messages and the failing stage."""

    errors: Tuple[str, ...]
    kind: Optional[ErrorKind] = None
    succeeded: bool = field(default=False, init=False)

    @property
    def message(self) -> str:
        """First error message, or an empty string."""
        return self.errors[0] if self.errors else ""


Result = Union[Succeeded[T], Failed]


def fail(kind: ErrorKind, *errors: str) -> Failed:
    """Build a ``Failed`` result from one or more messages."""
    return Failed(errors=tuple(errors), kind=kind)


def succeeded(result: "Result") -> bool:
    """Return True if ``result`` is a ``Succeeded``."""
    return result.succeeded


def failed(result: "Result") -> bool:
    """Return True if ``result`` is a ``Failed``."""
    return not result.succeeded


def shell_message(result: "Optional[Result[ShellResult]]", fallback: str) -> str:
    """
    Pick the user-facing text of a shell invocation.

    Args:
        result: Result of a shell invocation (None if nothing ran)
        fallback: Message used when the invocation itself failed

    Returns:
        stdout on exit code 0, stderr on any other exit code, the fallback
        when the process could not be run at all.
    """
    if result is None or failed(result):
        return fallback
    shell_result = result.value
    return shell_result.stdout if shell_result.ok else shell_result.stderr


__all__ = [
    "ErrorKind",
    "ShellResult",
    "Succeeded",
    "Failed",
    "Result",
    "fail",
    "succeeded",
    "failed",
    "shell_message",
]
