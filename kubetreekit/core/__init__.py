"""
Core functionality for KubeTreeKit.

This package contains platform detection, path translation, shell execution
and downloading: the foundations the tool installer builds on.
"""

from .result import (
    ErrorKind,
    ShellResult,
    Succeeded,
    Failed,
    Result,
    fail,
    succeeded,
    failed,
    shell_message,
)

from .platform import (
    Platform,
    PlatformResolver,
    platform_label,
)

from .paths import (
    PathTranslator,
    to_bridge_path,
)

from .shell import ShellExecutor

from .download import Downloader, DownloadProgress

from .exceptions import (
    KubeTreeKitError,
    ConfigError,
    UnknownToolError,
)

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
    "Platform",
    "PlatformResolver",
    "platform_label",
    "PathTranslator",
    "to_bridge_path",
    "ShellExecutor",
    "Downloader",
    "DownloadProgress",
    "KubeTreeKitError",
    "ConfigError",
    "UnknownToolError",
]
