"""
Activate command implementation.
"""

import logging

from groot.cli.utils import get_manager
from groot.core.exceptions import NotBuiltError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the activate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 if the version is not built)
    """
    manager = get_manager(args)
    try:
        manager.activate(args.tag)
    except NotBuiltError as e:
        logger.error(f"Error: {e}")
        logger.error(f"Build it first with: groot add {args.tag}")
        return 1

    print(f"{args.tag} activated!")
    return 0
