"""
Entry point for running KubeTreeKit CLI as a module.

Usage: python -m kubetreekit [command] [options]
"""

from kubetreekit.cli.parser import main

if __name__ == "__main__":
    main()
