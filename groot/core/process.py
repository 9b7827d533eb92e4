"""
External tool invocation for groot.

The repository manager needs exactly two capabilities from the outside
world: run the version-control client, and run the toolchain's build script.
ToolRunner is that narrow interface; SubprocessToolRunner implements it with
real processes whose output goes straight to the terminal.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Sequence

from groot.core.exceptions import ExternalToolError

logger = logging.getLogger(__name__)


class ToolRunner(ABC):
    """Abstract interface for the external programs groot drives."""

    @abstractmethod
    def run_version_control(self, args: Sequence[str]) -> None:
        """
        Run the version-control client with the given arguments.

        Raises:
            ExternalToolError: If the command cannot be run or exits non-zero
        """
        pass

    @abstractmethod
    def run_build(self, work_dir: Path, env: Mapping[str, str]) -> None:
        """
        Run the build script inside work_dir with extra environment variables.

        Raises:
            ExternalToolError: If the build cannot be run or exits non-zero
        """
        pass


class SubprocessToolRunner(ToolRunner):
    """Runs git and the build script as synchronous child processes."""

    def __init__(self, git: str = "git", build_script: str = "./make.bash"):
        self.git = git
        self.build_script = build_script

    def run_version_control(self, args: Sequence[str]) -> None:
        self._run([self.git, *args])

    def run_build(self, work_dir: Path, env: Mapping[str, str]) -> None:
        build_env = os.environ.copy()
        build_env.update(env)
        self._run([self.build_script], cwd=work_dir, env=build_env)

    def _run(self, cmd: List[str], cwd=None, env=None) -> None:
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            # stdout/stderr are inherited so output reaches the terminal as-is
            result = subprocess.run(cmd, cwd=cwd, env=env)
        except OSError as e:
            logger.error(f"Failed to execute {cmd[0]}: {e}")
            raise ExternalToolError(cmd, None) from e

        if result.returncode != 0:
            raise ExternalToolError(cmd, result.returncode)
