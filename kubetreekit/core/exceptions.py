"""
Exception hierarchy for KubeTreeKit.

The acquisition and execution core reports failures as ``Result`` values
(see ``kubetreekit.core.result``). Exceptions are reserved for the
boundaries: configuration loading and the command-line interface.
"""


class KubeTreeKitError(Exception):
    """Base exception for all KubeTreeKit errors."""

    pass


class ConfigError(KubeTreeKitError):
    """Configuration parsing or validation error."""

    pass


class UnknownToolError(KubeTreeKitError):
    """Raised when a tool name is not present in the managed tool catalog."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown managed tool: {tool_name}")
