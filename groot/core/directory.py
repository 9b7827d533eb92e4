"""
Workspace directory layout for groot.

Directory Structure (~/.groot/ by default):
    - .bare/      : Bare clone of the upstream Go repository
    - .binary/    : Verified bootstrap release used to build every version
    - .binary.sha256 : Digest of .binary, present only once it is verified
    - <tag>/      : One git worktree per installed version (e.g. go1.9/)
      - bin/      : Binaries produced by the build
      - src/      : Sources, including make.bash
    - bin         : Symlink to the active version's bin/ directory
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from groot.core.exceptions import FilesystemError, InvalidTagError

logger = logging.getLogger(__name__)

BARE_REPO_NAME = ".bare"
BINARY_DIR_NAME = ".binary"
# Kept outside .binary so no archive entry can write it.
BOOTSTRAP_STAMP_NAME = ".binary.sha256"
ACTIVE_LINK_NAME = "bin"
BRANCH_PREFIX = "groot."


def validate_tag(tag: str) -> str:
    """
    Check that a version tag can be used as a worktree directory name.

    Raises:
        InvalidTagError: If the tag would escape or collide with the layout.
    """
    if not tag:
        raise InvalidTagError(tag, "tag must not be empty")
    if "/" in tag or "\\" in tag:
        raise InvalidTagError(tag, "tag must not contain path separators")
    if tag.startswith("."):
        raise InvalidTagError(tag, "tag must not start with '.'")
    if tag == ACTIVE_LINK_NAME:
        raise InvalidTagError(tag, f"'{ACTIVE_LINK_NAME}' is reserved")
    return tag


@dataclass(frozen=True)
class Workspace:
    """Paths of a groot workspace rooted at base_dir."""

    base_dir: Path

    @property
    def git_dir(self) -> Path:
        return self.base_dir / BARE_REPO_NAME

    @property
    def binary_dir(self) -> Path:
        return self.base_dir / BINARY_DIR_NAME

    @property
    def active_link(self) -> Path:
        return self.base_dir / ACTIVE_LINK_NAME

    def worktree_dir(self, tag: str) -> Path:
        return self.base_dir / validate_tag(tag)

    def worktree_bin(self, tag: str) -> Path:
        return self.worktree_dir(tag) / "bin"

    def worktree_src(self, tag: str) -> Path:
        return self.worktree_dir(tag) / "src"

    @staticmethod
    def branch_name(tag: str) -> str:
        """Name of the local branch backing a version worktree."""
        return BRANCH_PREFIX + validate_tag(tag)

    def ensure_base_dir(self) -> Path:
        """
        Create the base directory (owner-only permissions) if missing.

        Raises:
            FilesystemError: If the directory cannot be created.
        """
        try:
            self.base_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Could not create base directory {self.base_dir}: {e}"
            ) from e
        logger.debug(f"Ensured base directory exists: {self.base_dir}")
        return self.base_dir

    def installed_versions(self) -> List[str]:
        """
        List version worktrees present in the base directory.

        Hidden entries and the active link are skipped.

        Raises:
            FilesystemError: If the base directory cannot be read.
        """
        try:
            names = os.listdir(self.base_dir)
        except OSError as e:
            raise FilesystemError(f"Could not read {self.base_dir}: {e}") from e

        return sorted(
            name
            for name in names
            if name != ACTIVE_LINK_NAME and not name.startswith(".")
        )

    @property
    def bootstrap_stamp(self) -> Path:
        """File holding the digest of the last verified bootstrap release."""
        return self.base_dir / BOOTSTRAP_STAMP_NAME

    def read_bootstrap_digest(self) -> Optional[str]:
        """Digest recorded for the bootstrap release, or None if unverified."""
        try:
            digest = self.bootstrap_stamp.read_text().strip().lower()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise FilesystemError(f"Could not read {self.bootstrap_stamp}: {e}") from e
        return digest or None

    def write_bootstrap_digest(self, digest: str) -> None:
        try:
            self.bootstrap_stamp.write_text(f"{digest.lower()}\n")
        except OSError as e:
            raise FilesystemError(f"Could not write {self.bootstrap_stamp}: {e}") from e

    def clear_bootstrap_digest(self) -> None:
        """Mark the bootstrap release as untrusted."""
        try:
            self.bootstrap_stamp.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise FilesystemError(f"Could not remove {self.bootstrap_stamp}: {e}") from e
