"""
High-level groot operations.

GrootManager wires the release acquirer, repository manager and version
activator to one configuration and exposes the operations behind each CLI
subcommand.
"""

import logging
from typing import Iterator, Optional, Sequence

from groot.core.config import GrootConfig
from groot.core.exceptions import ConfigurationError
from groot.core.directory import Workspace, validate_tag
from groot.core.process import SubprocessToolRunner, ToolRunner
from groot.toolchain.acquirer import ReleaseAcquirer
from groot.toolchain.activator import VersionActivator
from groot.toolchain.repository import RepositoryManager

logger = logging.getLogger(__name__)


class GrootManager:
    """
    Entry point for workspace operations.

    Example:
        >>> manager = GrootManager(load_config())
        >>> manager.init()          # bootstrap, clone, build go1.7 and go1.9
        >>> manager.add("go1.8")
        >>> manager.activate("go1.8")
    """

    def __init__(
        self,
        config: GrootConfig,
        runner: Optional[ToolRunner] = None,
        acquirer: Optional[ReleaseAcquirer] = None,
    ):
        self.config = config
        self.workspace = Workspace(config.base_dir)
        self.runner = runner or SubprocessToolRunner(
            git=config.git, build_script=config.build_script
        )
        self.acquirer = acquirer or ReleaseAcquirer(timeout=config.timeout)
        self.repository = RepositoryManager(
            self.workspace,
            self.runner,
            upstream_url=config.upstream_url,
            pinned_digest=self.acquirer.pinned_digest,
        )
        self.activator = VersionActivator(self.workspace)

    def init(self, tags: Optional[Sequence[str]] = None) -> str:
        """
        Create a workspace from scratch.

        Acquires the bootstrap release, clones the repository, builds every
        tag in order and activates the last one. The release digest is
        recorded only after verification; builds refuse to run without it.

        Args:
            tags: Versions to install (defaults to config.initial_tags)

        Returns:
            The activated tag
        """
        tags = list(tags or self.config.initial_tags)
        if not tags:
            raise ConfigurationError("At least one tag is required")
        for tag in tags:
            validate_tag(tag)

        self.workspace.ensure_base_dir()
        self.workspace.clear_bootstrap_digest()
        digest = self.acquirer.acquire(self.workspace.binary_dir)
        self.workspace.write_bootstrap_digest(digest)
        self.repository.initialize_repository()

        for tag in tags:
            self.repository.branch_and_build(tag)

        active = tags[-1]
        self.activator.activate(active)
        logger.info(f"{active} activated")
        return active

    def add(self, tag: str) -> bool:
        """Install one more version. Returns False if it was already present."""
        return self.repository.branch_and_build(tag)

    def activate(self, tag: str) -> None:
        self.activator.activate(tag)

    def list_worktrees(self) -> None:
        self.repository.list_worktrees()

    def list_available(self) -> None:
        self.repository.list_available()

    def env_lines(self) -> Iterator[str]:
        """
        Shell lines that put the active version on PATH and alias each
        installed version's go binary by its tag.

        The PATH line is yielded before the base directory is read, so it
        is still emitted when listing the versions fails.
        """
        base_dir = self.workspace.base_dir
        yield f'export PATH="$PATH:{self.workspace.active_link}"'
        for name in self.workspace.installed_versions():
            yield f"alias {name}={base_dir / name / 'bin' / 'go'}"
