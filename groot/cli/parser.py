"""
groot CLI argument parser.

This module implements the command-line interface for groot using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("groot")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

COMMAND_MAP = {
    "init": "groot.cli.commands.init",
    "add": "groot.cli.commands.add",
    "activate": "groot.cli.commands.activate",
    "list": "groot.cli.commands.list",
    "available": "groot.cli.commands.available",
    "env": "groot.cli.commands.env",
}


class CLI:
    """groot command-line interface."""

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
            prog="groot",
            description="groot: GOROOT manager",
            epilog='Use "groot COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"groot {__version__}"
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
            help="Path to configuration file (default: ~/.groot.yaml)",
        )
        parser.add_argument(
            "--base-dir",
            type=Path,
            metavar="PATH",
            help="Workspace directory (default: ~/.groot)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_init_command(subparsers)
        self._add_tag_command(
            subparsers, "add", "Check out and build a Go version"
        )
        self._add_tag_command(
            subparsers, "activate", "Make an installed Go version the active one"
        )
        subparsers.add_parser("list", help="List installed Go versions (worktrees)")
        subparsers.add_parser("available", help="List Go versions available upstream")
        subparsers.add_parser(
            "env", help="Print shell commands that set up PATH and aliases"
        )

        return parser

    def _add_init_command(self, subparsers):
        """Add 'init' subcommand."""
        parser = subparsers.add_parser(
            "init",
            help="Create the workspace and build the initial Go versions",
            description=(
                "Download the verified bootstrap release, clone the Go "
                "repository, build the initial versions and activate the last one"
            ),
        )
        parser.add_argument(
            "--tag",
            action="append",
            dest="tags",
            metavar="TAG",
            help="Version to build (can be used multiple times; default from config)",
        )

    def _add_tag_command(self, subparsers, name: str, help_text: str):
        parser = subparsers.add_parser(name, help=help_text, description=help_text)
        parser.add_argument("tag", metavar="TAG", help="Go release tag, e.g. go1.9")

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
        try:
            parsed_args = self.parse_args(args)
        except SystemExit as e:
            # --help and --version exit normally; usage errors map to 1
            if e.code in (0, None):
                raise
            return 1

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

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
        module_name = COMMAND_MAP.get(args.command)
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
