"""
groot/toolchain/activator.py

Switching the active Go version.

<base>/bin is a symlink to one version's bin/ directory. Putting <base>/bin
on PATH therefore always selects whichever version was activated last.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from groot.core.directory import Workspace, validate_tag
from groot.core.exceptions import FilesystemError, NotBuiltError

logger = logging.getLogger(__name__)


class VersionActivator:
    """Maintains the single active-version link of a workspace."""

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def activate(self, tag: str) -> Path:
        """
        Point the active link at tag's binaries.

        The old link is removed before the new one is created, so an
        interruption in between leaves no active version.

        Args:
            tag: Installed version to activate

        Returns:
            Path of the active link

        Raises:
            InvalidTagError: If tag cannot be used as a directory name
            NotBuiltError: If tag has no bin/ directory (link left untouched)
            FilesystemError: If the link cannot be replaced
        """
        validate_tag(tag)
        target = self.workspace.worktree_bin(tag)
        if not target.is_dir():
            raise NotBuiltError(tag, target)

        link_path = self.workspace.active_link
        self.remove_link()

        try:
            os.symlink(target, link_path, target_is_directory=True)
        except OSError as e:
            logger.error(f"Failed to create symlink {link_path} -> {target}: {e}")
            raise FilesystemError(f"Could not create {link_path}: {e}") from e

        logger.info(f"Created symlink: {link_path} -> {target}")
        return link_path

    def remove_link(self) -> bool:
        """
        Remove the active link if present.

        Returns:
            True if a link was removed, False if there was none

        Raises:
            FilesystemError: If the path is a real directory or can't be removed
        """
        link_path = self.workspace.active_link
        if link_path.is_dir() and not link_path.is_symlink():
            raise FilesystemError(f"{link_path} is a directory, not a link")

        try:
            link_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemError(f"Could not remove {link_path}: {e}") from e

        logger.debug(f"Removed link: {link_path}")
        return True

    def active_version(self) -> Optional[str]:
        """Tag the active link points at, or None when nothing is active."""
        link_path = self.workspace.active_link
        if not link_path.is_symlink():
            return None

        target = Path(os.readlink(link_path))
        if not target.is_absolute():
            target = link_path.parent / target
        # <base>/<tag>/bin
        return target.parent.name
