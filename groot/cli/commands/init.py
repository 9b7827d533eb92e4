"""
Init command implementation.

Creates the workspace, acquires the bootstrap release and builds the initial
Go versions.
"""

import logging

from groot.cli.utils import get_manager

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the init command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")
    manager = get_manager(args)

    logger.info(f"Initializing groot in {manager.workspace.base_dir}")
    active = manager.init(args.tags)

    print(f"{active} activated!")
    print('Set up your shell with: eval "$(groot env)"')
    return 0
