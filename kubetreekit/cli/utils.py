"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from typing import Optional

from kubetreekit.config.parser import KubeTreeKitConfig, load_config
from kubetreekit.context import Context, create_context
from kubetreekit.core.download import DownloadProgress, format_progress
from kubetreekit.core.exceptions import ConfigError
from kubetreekit.core.result import Failed

logger = logging.getLogger(__name__)


def load_cli_config(args) -> Optional[KubeTreeKitConfig]:
    """
    Load configuration for a CLI invocation, applying ``--use-wsl``.

    Returns:
        Configuration, or None after reporting a ConfigError
    """
    try:
        config = load_config(getattr(args, "config", None))
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        return None

    if getattr(args, "use_wsl", None):
        config.use_wsl = True
    return config


def build_context(args) -> Optional[Context]:
    """Load configuration and wire the components, or None on config errors."""
    config = load_cli_config(args)
    if config is None:
        return None
    progress = None if getattr(args, "quiet", False) else report_progress
    return create_context(config, progress_callback=progress)


def report_progress(progress: DownloadProgress) -> None:
    logger.info(f"  {format_progress(progress)}")


def notify(level: int, message: str) -> None:
    """User-facing notification from the install-on-demand policy."""
    logger.log(level, message)


def report_failure(result: Failed) -> None:
    """Print every message of a failed result."""
    for error in result.errors:
        print_error(error)


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
