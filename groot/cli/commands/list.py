"""
List command implementation.

Shows the worktrees of the shared repository (git's own output).
"""

from groot.cli.utils import get_manager


def run(args) -> int:
    get_manager(args).list_worktrees()
    return 0
