"""
Env command implementation.

Prints shell commands to evaluate, e.g. eval "$(groot env)".
"""

from groot.cli.utils import get_manager


def run(args) -> int:
    for line in get_manager(args).env_lines():
        print(line)
    return 0
