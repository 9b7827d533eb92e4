"""
Add command implementation.

Checks out one more Go version into its own worktree and builds it.
"""

import logging

from groot.cli.utils import get_manager

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the add command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    manager = get_manager(args)
    if manager.add(args.tag):
        print(f"{args.tag} installed")
    else:
        print(f"{args.tag} is already installed")
    return 0
