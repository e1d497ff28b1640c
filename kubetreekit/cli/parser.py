"""
KubeTreeKit CLI argument parser.

This module implements the command-line interface for KubeTreeKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("kubetreekit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """KubeTreeKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="kubetreekit",
            description="KubeTreeKit - kubectl tree with on-demand plugin install",
            epilog='Use "kubetreekit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"KubeTreeKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./kubetreekit.yaml)",
        )
        parser.add_argument(
            "--use-wsl",
            action="store_true",
            default=None,
            help="Run commands inside WSL (overrides configuration)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_show_command(subparsers)
        self._add_install_command(subparsers)
        self._add_exec_command(subparsers)
        self._add_env_command(subparsers)

        return parser

    def _add_show_command(self, subparsers):
        """Add 'show' subcommand."""
        parser = subparsers.add_parser(
            "show",
            help="Show the ownership tree of a Kubernetes object",
            description=(
                "Run 'kubectl tree' for an object, installing the plugin if needed"
            ),
        )
        parser.add_argument("kind", help="Object kind (e.g. Deployment)")
        parser.add_argument("name", help="Object name")
        parser.add_argument(
            "--kubeconfig",
            metavar="PATH",
            help="Kubeconfig file (default: configuration, KUBECONFIG, ~/.kube/config)",
        )
        parser.add_argument(
            "--html",
            type=Path,
            metavar="FILE",
            help="Write a highlighted HTML page instead of printing the tree",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a managed tool",
            description="Download and install a managed tool into the tools directory",
        )
        parser.add_argument(
            "--tool",
            default="kubectl-tree",
            metavar="NAME",
            help="Tool to install (default: kubectl-tree)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Reinstall even if the tool is already present",
        )

    def _add_exec_command(self, subparsers):
        """Add 'exec' subcommand."""
        parser = subparsers.add_parser(
            "exec",
            help="Run a command with managed tools on PATH",
            description=(
                "Run a command line, installing the managed tool if it is missing"
            ),
        )
        parser.add_argument(
            "--tool",
            default="kubectl-tree",
            metavar="NAME",
            help="Managed tool to install on demand (default: kubectl-tree)",
        )
        parser.add_argument(
            "--kubeconfig", metavar="PATH", help="Value for KUBECONFIG"
        )
        parser.add_argument(
            "--stdin",
            action="store_true",
            help="Forward this process's standard input to the command",
        )
        parser.add_argument(
            "command_line",
            nargs=argparse.REMAINDER,
            metavar="COMMAND",
            help="Command line to run",
        )

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        subparsers.add_parser(
            "env",
            help="Show platform and tool path information",
            description=(
                "Show detected platform, bridge mode and managed tool directories"
            ),
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "show": "kubetreekit.cli.commands.show",
            "install": "kubetreekit.cli.commands.install",
            "exec": "kubetreekit.cli.commands.exec",
            "env": "kubetreekit.cli.commands.env",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
