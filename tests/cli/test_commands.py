"""
Tests for CLI command dispatch, output and exit codes.

GrootManager is built with fake collaborators so no git, build or network
access happens.
"""

import sys

import pytest

from groot.cli.parser import CLI
from groot.core.exceptions import NetworkError
from groot.toolchain.manager import GrootManager
from tests.fixtures.directories import mark_bootstrap_verified
from tests.mocks import FakeAcquirer, FakeToolRunner

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="symlinks")


@pytest.fixture
def fakes(monkeypatch, isolated_home):
    """Route every CLI-built GrootManager through fake collaborators."""
    runner = FakeToolRunner()
    acquirer = FakeAcquirer()

    def make_manager(config):
        return GrootManager(config, runner=runner, acquirer=acquirer)

    monkeypatch.setattr("groot.cli.utils.GrootManager", make_manager)
    return runner, acquirer


def run(workspace, *argv):
    return CLI().run(["--base-dir", str(workspace.base_dir), *argv])


@posix_only
class TestInitCommand:
    def test_init(self, workspace, fakes, capsys):
        runner, acquirer = fakes

        assert run(workspace, "init", "--tag", "go1.8") == 0

        assert "go1.8 activated!" in capsys.readouterr().out
        assert acquirer.destinations == [workspace.binary_dir]
        assert workspace.active_link.is_symlink()

    def test_init_failure_exit_code(self, workspace, fakes, capsys):
        _, acquirer = fakes
        acquirer.error = NetworkError("unexpected status: 404")

        assert run(workspace, "init") == 1
        assert "Error: unexpected status: 404" in capsys.readouterr().err


class TestAddCommand:
    def test_add(self, workspace, fakes, capsys):
        runner, _ = fakes
        mark_bootstrap_verified(workspace)

        assert run(workspace, "add", "go1.9") == 0
        assert "go1.9 installed" in capsys.readouterr().out
        assert len(runner.build_calls) == 1

    def test_add_existing(self, built_workspace, fakes, capsys):
        runner, _ = fakes

        assert run(built_workspace, "add", "go1.9") == 0
        assert "already installed" in capsys.readouterr().out
        assert runner.calls == []

    def test_add_invalid_tag(self, workspace, fakes):
        assert run(workspace, "add", ".binary") == 1

    def test_add_without_verified_bootstrap(self, workspace, fakes, capsys):
        runner, _ = fakes
        workspace.ensure_base_dir()

        assert run(workspace, "add", "go1.9") == 1
        assert "groot init" in capsys.readouterr().err
        assert runner.calls == []

    def test_git_failure(self, workspace, fakes):
        runner, _ = fakes
        runner.fail_on = "branch"
        mark_bootstrap_verified(workspace)

        assert run(workspace, "add", "go1.9") == 1


@posix_only
class TestActivateCommand:
    def test_activate(self, built_workspace, fakes, capsys):
        assert run(built_workspace, "activate", "go1.7") == 0
        assert "go1.7 activated!" in capsys.readouterr().out

    def test_activate_not_built(self, built_workspace, fakes, capsys):
        assert run(built_workspace, "activate", "go1.8") == 1

        err = capsys.readouterr().err
        assert "Error: Version go1.8 is not built" in err
        assert "groot add go1.8" in err


class TestListingCommands:
    @pytest.mark.parametrize(
        "command,subcommand", [("list", "worktree"), ("available", "tag")]
    )
    def test_passthrough(self, workspace, fakes, command, subcommand):
        runner, _ = fakes
        assert run(workspace, command) == 0
        assert runner.subcommands() == [subcommand]

    def test_env(self, built_workspace, fakes, capsys):
        assert run(built_workspace, "env") == 0

        out = capsys.readouterr().out.splitlines()
        assert out[0] == f'export PATH="$PATH:{built_workspace.active_link}"'
        assert out[1:] == [
            f"alias {tag}={built_workspace.base_dir / tag / 'bin' / 'go'}"
            for tag in ("go1.7", "go1.8", "go1.9")
        ]

    def test_env_without_workspace(self, workspace, fakes, capsys):
        assert run(workspace, "env") == 1

        captured = capsys.readouterr()
        assert captured.out == f'export PATH="$PATH:{workspace.active_link}"\n'
        assert "Could not read" in captured.err


class TestConfigOption:
    def test_missing_config_file(self, workspace, fakes, tmp_path):
        argv = ["--config", str(tmp_path / "missing.yaml"), "list"]
        assert run(workspace, *argv) == 1

    def test_config_file_used(self, fakes, tmp_path, capsys):
        base = tmp_path / "from-config"
        (base / "go1.9").mkdir(parents=True)
        config_file = tmp_path / "groot.yaml"
        config_file.write_text(f"base_dir: {base}\n")

        assert CLI().run(["--config", str(config_file), "env"]) == 0
        assert "alias go1.9=" in capsys.readouterr().out
