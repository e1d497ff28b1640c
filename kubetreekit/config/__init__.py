"""Configuration management for KubeTreeKit."""

from kubetreekit.core.exceptions import ConfigError

from .parser import (
    KubeTreeKitConfig,
    ToolOverride,
    load_config,
    parse_config,
    default_config_paths,
    CONFIG_FILE_NAME,
    USE_WSL_ENV,
    DEFAULT_NAMESPACE,
)

__all__ = [
    "ConfigError",
    "KubeTreeKitConfig",
    "ToolOverride",
    "load_config",
    "parse_config",
    "default_config_paths",
    "CONFIG_FILE_NAME",
    "USE_WSL_ENV",
    "DEFAULT_NAMESPACE",
]
