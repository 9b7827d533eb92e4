"""
groot: manage co-installed Go toolchains built from source.

Each version lives in its own git worktree of a shared bare clone, is built
with a verified bootstrap release, and is selected through a single
<base>/bin symlink.
"""

__version__ = "0.1.0"
