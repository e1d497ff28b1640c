"""Command implementations for the KubeTreeKit CLI."""
