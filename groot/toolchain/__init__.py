"""
Go toolchain management: bootstrap release, worktrees and activation.
"""

from .releases import (
    BINARY_RELEASE,
    DIST_TO_HASH,
    expected_digest,
    release_url,
    supported_platforms,
)
from .acquirer import ReleaseAcquirer
from .repository import RepositoryManager
from .activator import VersionActivator
from .manager import GrootManager

__all__ = [
    "BINARY_RELEASE",
    "DIST_TO_HASH",
    "expected_digest",
    "release_url",
    "supported_platforms",
    "ReleaseAcquirer",
    "RepositoryManager",
    "VersionActivator",
    "GrootManager",
]
