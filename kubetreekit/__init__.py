"""
KubeTreeKit - kubectl tree with on-demand plugin installation.

Detects the host platform, installs the kubectl-tree plugin when it is
missing and runs commands natively or through the WSL bridge.
"""

__version__ = "0.1.0"
