"""
Shared bare repository and per-version worktrees.

A single bare clone of the upstream Go repository backs every installed
version. Each version gets its own branch (groot.<tag>) checked out into its
own worktree at <base>/<tag>, which is then built from source with the
bootstrap release.

Nothing here is rolled back on failure: a branch or worktree created by a
failed attempt stays, and a later branch_and_build() for the same tag is a
no-op once the worktree directory exists.
"""

import logging
import os
from typing import Callable, Optional, Sequence

from groot.core.directory import Workspace, validate_tag
from groot.core.exceptions import FilesystemError, UnverifiedBootstrapError
from groot.core.process import ToolRunner
from groot.core.config import UPSTREAM_URL

logger = logging.getLogger(__name__)

BOOTSTRAP_ENV_VAR = "GOROOT_BOOTSTRAP"


class RepositoryManager:
    """Owns the bare repository and the version worktrees of a workspace."""

    def __init__(
        self,
        workspace: Workspace,
        runner: ToolRunner,
        upstream_url: str = UPSTREAM_URL,
        pinned_digest: Optional[Callable[[], str]] = None,
    ):
        """
        Args:
            workspace: Workspace layout
            runner: Executes git and the build script
            upstream_url: Repository to clone
            pinned_digest: Returns the digest the bootstrap release must
                have; if None any verified release is accepted
        """
        self.workspace = workspace
        self.runner = runner
        self.upstream_url = upstream_url
        self.pinned_digest = pinned_digest

    def git(self, *args: str) -> None:
        """Run a git command against the bare repository."""
        self.runner.run_version_control(["--git-dir", str(self.workspace.git_dir), *args])

    def initialize_repository(self) -> None:
        """
        Create the base directory and the bare clone.

        HEAD is detached onto the commit it resolves to: a bare clone's HEAD
        names the default branch, and git refuses to add a worktree for a
        branch that is checked out elsewhere.

        Raises:
            FilesystemError: If the base directory cannot be created
            ExternalToolError: If cloning or updating HEAD fails
        """
        self.workspace.ensure_base_dir()

        logger.info(f"Cloning {self.upstream_url} into {self.workspace.git_dir}")
        self.runner.run_version_control(
            ["clone", "--bare", self.upstream_url, str(self.workspace.git_dir)]
        )
        self.git("update-ref", "--no-deref", "HEAD", "HEAD^{commit}")

    def has_worktree(self, tag: str) -> bool:
        """
        Check whether the worktree directory for tag exists.

        Raises:
            FilesystemError: If the path exists but cannot be inspected
        """
        path = self.workspace.worktree_dir(tag)
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemError(f"Could not inspect {path}: {e}") from e
        return True

    def check_bootstrap(self) -> str:
        """
        Return the recorded digest of the bootstrap release.

        Raises:
            UnverifiedBootstrapError: If no verified digest is recorded, or it
                differs from the pinned one
        """
        binary_dir = self.workspace.binary_dir
        recorded = self.workspace.read_bootstrap_digest()
        if recorded is None:
            raise UnverifiedBootstrapError(binary_dir, "no verified download recorded")
        if self.pinned_digest is not None and recorded != self.pinned_digest().lower():
            raise UnverifiedBootstrapError(
                binary_dir, f"recorded digest {recorded} is not the pinned one"
            )
        return recorded

    def branch_and_build(self, tag: str) -> bool:
        """
        Check out tag into its own worktree and build it.

        Args:
            tag: Upstream tag, e.g. 'go1.9'

        Returns:
            True if the version was built, False if its worktree already
            existed and nothing was done.

        Raises:
            InvalidTagError: If tag cannot be used as a directory name
            FilesystemError: If the worktree path cannot be inspected
            UnverifiedBootstrapError: If the bootstrap release is not verified
            ExternalToolError: If git or the build fails
        """
        validate_tag(tag)
        if self.has_worktree(tag):
            logger.info(f"{tag} already present at {self.workspace.worktree_dir(tag)}")
            return False

        self.check_bootstrap()

        branch = self.workspace.branch_name(tag)
        worktree = self.workspace.worktree_dir(tag)

        self.git("branch", branch, tag)
        self.git("worktree", "add", str(worktree), branch)

        logger.info(f"Building {tag}")
        self.runner.run_build(
            self.workspace.worktree_src(tag),
            {BOOTSTRAP_ENV_VAR: str(self.workspace.binary_dir)},
        )
        logger.info(f"Built {tag} in {worktree}")
        return True

    def list_worktrees(self) -> None:
        """Print all worktrees known to the bare repository."""
        self.git("worktree", "list")

    def list_available(self, patterns: Sequence[str] = ("go*",)) -> None:
        """Print upstream tags that can be installed."""
        self.git("tag", "--list", *patterns)
