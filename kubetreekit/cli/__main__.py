"""
Entry point for running KubeTreeKit CLI as a module.

Usage: python -m kubetreekit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
