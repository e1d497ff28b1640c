"""YAML configuration parser for KubeTreeKit.

This module provides parsing and validation for kubetreekit.yaml configuration files.

Example file:

    use-wsl: false
    namespace: vs-kubernetes
    kubeconfig: ~/.kube/config
    tools:
      kubectl-tree:
        version: v0.4.0
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from kubetreekit.core.directory import DEFAULT_NAMESPACE
from kubetreekit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "kubetreekit.yaml"
USE_WSL_ENV = "KUBETREEKIT_USE_WSL"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ToolOverride:
    """Per-tool overrides of the built-in catalog."""

    version: Optional[str] = None
    url: Optional[str] = None  # template with {platform} and {version}


@dataclass
class KubeTreeKitConfig:
    """Complete KubeTreeKit configuration."""

    use_wsl: bool = False
    namespace: str = DEFAULT_NAMESPACE
    kubeconfig: Optional[str] = None
    tools: Dict[str, ToolOverride] = field(default_factory=dict)
    source: Optional[Path] = None


def default_config_paths(cwd: Optional[Path] = None) -> List[Path]:
    """
    Candidate configuration files in lookup order.

    Args:
        cwd: Directory searched first (default: current directory)

    Returns:
        List of candidate paths, project file first, then the user file
    """
    cwd = cwd or Path.cwd()
    return [cwd / CONFIG_FILE_NAME, Path.home() / f".{CONFIG_FILE_NAME}"]


def parse_config(config_path: Path) -> KubeTreeKitConfig:
    """
    Parse a kubetreekit.yaml configuration file.

    Args:
        config_path: Path to kubetreekit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    config = _parse_and_validate(data)
    config.source = config_path
    return config


def load_config(
    config_path: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
    cwd: Optional[Path] = None,
) -> KubeTreeKitConfig:
    """
    Load configuration from the first available source.

    An explicit ``config_path`` must exist. Without one, the default lookup
    locations are tried and built-in defaults are used if none exists.
    The ``KUBETREEKIT_USE_WSL`` environment variable overrides ``use-wsl``.

    Args:
        config_path: Explicit configuration file
        env: Environment to read overrides from (default: os.environ)
        cwd: Directory for the project-level lookup

    Returns:
        Loaded configuration

    Raises:
        ConfigError: If the file is invalid or an explicit path is missing
    """
    if config_path is not None:
        config = parse_config(Path(config_path))
    else:
        config = None
        for candidate in default_config_paths(cwd):
            if candidate.exists():
                logger.debug(f"Loading configuration from {candidate}")
                config = parse_config(candidate)
                break
        if config is None:
            logger.debug("No configuration file found, using defaults")
            config = KubeTreeKitConfig()

    env = os.environ if env is None else env
    override = env.get(USE_WSL_ENV)
    if override is not None and override.strip():
        config.use_wsl = _parse_bool(override, USE_WSL_ENV)

    return config


def _parse_and_validate(data: Any) -> KubeTreeKitConfig:
    """Validate raw YAML data and convert it to a KubeTreeKitConfig."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    config = KubeTreeKitConfig()

    if "use-wsl" in data:
        value = data["use-wsl"]
        if isinstance(value, str):
            value = _parse_bool(value, "use-wsl")
        if not isinstance(value, bool):
            raise ConfigError("'use-wsl' must be a boolean")
        config.use_wsl = value

    if "namespace" in data:
        namespace = data["namespace"]
        if not isinstance(namespace, str) or not namespace.strip():
            raise ConfigError("'namespace' must be a non-empty string")
        if "/" in namespace or "\\" in namespace:
            raise ConfigError("'namespace' must not contain path separators")
        namespace = namespace.strip().lstrip(".")
        if not namespace:
            raise ConfigError("'namespace' must not consist of dots only")
        config.namespace = namespace

    if data.get("kubeconfig") is not None:
        kubeconfig = data["kubeconfig"]
        if not isinstance(kubeconfig, str):
            raise ConfigError("'kubeconfig' must be a string")
        config.kubeconfig = kubeconfig

    tools = data.get("tools") or {}
    if not isinstance(tools, dict):
        raise ConfigError("'tools' must be a mapping of tool name to overrides")
    for name, raw in tools.items():
        config.tools[str(name)] = _parse_tool_override(str(name), raw or {})

    return config


def _parse_tool_override(name: str, raw: Any) -> ToolOverride:
    if not isinstance(raw, dict):
        raise ConfigError(f"Overrides for tool '{name}' must be a mapping")

    override = ToolOverride()
    for key in ("version", "url"):
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"tools.{name}.{key} must be a non-empty string")
        setattr(override, key, value.strip())

    if override.url and "{platform}" not in override.url:
        raise ConfigError(f"tools.{name}.url must contain a {{platform}} placeholder")

    return override


def _parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {value!r}")
