"""Command-line interface for KubeTreeKit."""

from .parser import CLI, main

__all__ = ["CLI", "main"]
