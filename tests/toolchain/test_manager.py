"""
Tests for the top-level GrootManager workflows.
"""

import hashlib
import sys

import pytest
import responses

from groot.core.exceptions import (
    ConfigurationError,
    ExternalToolError,
    FilesystemError,
    InvalidTagError,
    NetworkError,
    UnverifiedBootstrapError,
    VerificationFailedError,
)
from groot.core.platform import PlatformInfo
from groot.toolchain.acquirer import ReleaseAcquirer
from groot.toolchain.manager import GrootManager
from groot.toolchain.releases import release_url
from tests.fixtures.archives import Entry, build_tar_gz
from tests.fixtures.directories import mark_bootstrap_verified
from tests.mocks import FAKE_DIGEST, FakeAcquirer, FakeToolRunner

LINUX_AMD64 = PlatformInfo("linux", "amd64")

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="symlinks")


@pytest.fixture
def manager(groot_config, fake_runner, fake_acquirer):
    return GrootManager(groot_config, runner=fake_runner, acquirer=fake_acquirer)


@posix_only
class TestInit:
    def test_full_sequence(self, manager, fake_runner, fake_acquirer):
        ws = manager.workspace

        assert manager.init() == "go1.9"

        assert fake_acquirer.destinations == [ws.binary_dir]
        assert fake_runner.subcommands() == [
            "clone",
            "update-ref",
            "branch",
            "worktree",
            "branch",
            "worktree",
        ]
        assert [call[0] for call in fake_runner.build_calls] == [
            ws.worktree_src("go1.7"),
            ws.worktree_src("go1.9"),
        ]
        assert manager.activator.active_version() == "go1.9"

    def test_explicit_tags_activate_last(self, manager):
        assert manager.init(["go1.9", "go1.8"]) == "go1.8"
        assert manager.activator.active_version() == "go1.8"

    def test_config_initial_tags(self, groot_config, fake_runner, fake_acquirer):
        groot_config.initial_tags = ["go1.5"]
        manager = GrootManager(groot_config, runner=fake_runner, acquirer=fake_acquirer)

        assert manager.init() == "go1.5"

    def test_acquisition_failure_stops_before_clone(self, groot_config, fake_runner):
        acquirer = FakeAcquirer(error=NetworkError("offline"))
        manager = GrootManager(groot_config, runner=fake_runner, acquirer=acquirer)

        with pytest.raises(NetworkError):
            manager.init()

        assert fake_runner.calls == []
        assert manager.workspace.base_dir.is_dir()

    def test_build_failure_leaves_no_active_link(self, groot_config, fake_acquirer):
        runner = FakeToolRunner(fail_on="build")
        manager = GrootManager(groot_config, runner=runner, acquirer=fake_acquirer)

        with pytest.raises(ExternalToolError):
            manager.init()

        assert len(runner.build_calls) == 1
        assert not manager.workspace.active_link.is_symlink()

    def test_invalid_tag_rejected_up_front(self, manager, fake_acquirer):
        with pytest.raises(InvalidTagError):
            manager.init(["go1.9", ".bare"])
        assert fake_acquirer.destinations == []


class TestOtherOperations:
    def test_add(self, manager, fake_runner):
        mark_bootstrap_verified(manager.workspace)

        assert manager.add("go1.8") is True
        assert manager.add("go1.8") is False
        assert len(fake_runner.build_calls) == 1

    @posix_only
    def test_activate(self, groot_config, built_workspace, fake_runner, fake_acquirer):
        manager = GrootManager(groot_config, runner=fake_runner, acquirer=fake_acquirer)

        manager.activate("go1.7")

        assert manager.activator.active_version() == "go1.7"

    def test_listing_passthrough(self, manager, fake_runner):
        manager.list_worktrees()
        manager.list_available()
        assert fake_runner.subcommands() == ["worktree", "tag"]

    def test_env_lines(self, groot_config, built_workspace, fake_runner):
        manager = GrootManager(groot_config, runner=fake_runner)
        base = built_workspace.base_dir

        assert list(manager.env_lines()) == [
            f'export PATH="$PATH:{base / "bin"}"',
            f"alias go1.7={base / 'go1.7' / 'bin' / 'go'}",
            f"alias go1.8={base / 'go1.8' / 'bin' / 'go'}",
            f"alias go1.9={base / 'go1.9' / 'bin' / 'go'}",
        ]

    def test_default_runner_uses_config(self, groot_config):
        groot_config.git = "/usr/local/bin/git"
        manager = GrootManager(groot_config)

        assert manager.runner.git == "/usr/local/bin/git"
        assert manager.runner.build_script == "./make.bash"
        assert manager.acquirer.timeout == groot_config.timeout

    def test_env_lines_path_first_when_base_missing(self, manager):
        lines = manager.env_lines()

        assert next(lines) == f'export PATH="$PATH:{manager.workspace.active_link}"'
        with pytest.raises(FilesystemError):
            next(lines)

    def test_empty_tag_list(self, groot_config, fake_runner, fake_acquirer):
        groot_config.initial_tags = []
        manager = GrootManager(groot_config, runner=fake_runner, acquirer=fake_acquirer)

        with pytest.raises(ConfigurationError, match="At least one tag"):
            manager.init()
        assert fake_acquirer.destinations == []


@posix_only
class TestBootstrapTrust:
    def test_init_records_verified_digest(self, manager):
        manager.init(["go1.9"])
        assert manager.workspace.read_bootstrap_digest() == FAKE_DIGEST

    def test_failed_reacquisition_blocks_builds(
        self, manager, fake_runner, fake_acquirer
    ):
        manager.init(["go1.9"])
        fake_acquirer.error = VerificationFailedError(FAKE_DIGEST, "f" * 64)

        with pytest.raises(VerificationFailedError):
            manager.init(["go1.9"])

        assert manager.workspace.read_bootstrap_digest() is None
        builds = len(fake_runner.build_calls)
        with pytest.raises(UnverifiedBootstrapError):
            manager.add("go1.10")
        assert len(fake_runner.build_calls) == builds

    @responses.activate
    def test_tampered_reinit_then_add(
        self, groot_config, fake_runner, go_release_entries
    ):
        good = build_tar_gz(go_release_entries)
        evil = build_tar_gz(
            [
                Entry(e.name, e.mode, b"EVIL") if e.name == "go/bin/go" else e
                for e in go_release_entries
            ]
        )
        acquirer = ReleaseAcquirer(
            digests={"linux/amd64": hashlib.sha256(good).hexdigest()},
            platform=LINUX_AMD64,
        )
        manager = GrootManager(groot_config, runner=fake_runner, acquirer=acquirer)
        url = release_url(LINUX_AMD64)
        responses.add(responses.GET, url, body=good, status=200)
        responses.add(responses.GET, url, body=evil, status=200)

        manager.init(["go1.9"])
        with pytest.raises(VerificationFailedError):
            manager.init(["go1.9"])

        assert (manager.workspace.binary_dir / "bin" / "go").read_bytes() == b"EVIL"
        with pytest.raises(UnverifiedBootstrapError):
            manager.add("go1.10")
        assert [call[0] for call in fake_runner.build_calls] == [
            manager.workspace.worktree_src("go1.9")
        ]
