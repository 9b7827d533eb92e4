"""
Available command implementation.

Shows the upstream Go release tags that can be installed.
"""

from groot.cli.utils import get_manager


def run(args) -> int:
    get_manager(args).list_available()
    return 0
