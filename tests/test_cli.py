"""Tests for the CLI — depcheck and npm are replaced by fakes."""

from __future__ import annotations

import functools
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from npm_uninstall_unused.analyzer.depcheck import DepcheckAnalyzer
from npm_uninstall_unused.cli import build_driver, main
from npm_uninstall_unused.core.config import RunConfiguration
from npm_uninstall_unused.reporter import ClickConfirmer, NonInteractiveConfirmer
from npm_uninstall_unused.testing import FakeAnalyzer, RecordingRunner
from npm_uninstall_unused.uninstaller import UninstallExecutor

_UNUSED = {"left-pad", "is-positive"}


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("npm_uninstall_unused.cli.setup_logging"):
        yield


@pytest.fixture
def fakes():
    """Swap the depcheck analyzer and the npm runner for recorders."""
    runner = RecordingRunner(stdout="removed 2 packages")
    analyzer = FakeAnalyzer(unused=_UNUSED)
    executor_cls = functools.partial(UninstallExecutor, runner=runner)
    with patch("npm_uninstall_unused.cli.DepcheckAnalyzer", return_value=analyzer), patch(
        "npm_uninstall_unused.cli.UninstallExecutor", executor_cls
    ):
        yield analyzer, runner


# ── wiring ──


class TestBuildDriver:
    def test_defaults(self):
        driver = build_driver(RunConfiguration())
        assert isinstance(driver.analyzer, DepcheckAnalyzer)
        assert driver.analyzer.command == ["npx", "--yes", "depcheck"]
        assert driver.executor.package_manager == "npm"
        assert driver.executor.timeout == 60.0
        assert isinstance(driver.reporter.confirmer, ClickConfirmer)

    def test_ci(self):
        driver = build_driver(RunConfiguration(ci=True))
        assert isinstance(driver.reporter.confirmer, NonInteractiveConfirmer)


# ── sweep ──


class TestSweep:
    def test_scans_current_directory(self, simple_project: Path, fakes, chdir):
        analyzer, runner = fakes
        chdir(simple_project)
        result = CliRunner().invoke(main, [], input="n\n")
        assert result.exit_code == 0, result.output
        assert "Found 1 folders with package.json" in result.output
        assert "Scanning folder: . for unused dependencies" in result.output
        assert "No packages were uninstalled." in result.output
        assert runner.calls == []
        assert len(analyzer.calls) == 1

    def test_confirm_uninstalls(self, simple_project: Path, fakes):
        _, runner = fakes
        result = CliRunner().invoke(main, ["--root", str(simple_project)], input="y\n")
        assert result.exit_code == 0, result.output
        assert runner.commands == [["npm", "uninstall", "--no-audit", "left-pad", "is-positive"]]
        assert "Running: npm uninstall --no-audit left-pad is-positive" in result.output
        assert "Unused dependencies uninstalled successfully!" in result.output

    def test_ci_mode(self, simple_project: Path, fakes):
        _, runner = fakes
        before = (simple_project / "package.json").read_bytes()
        result = CliRunner().invoke(main, ["--root", str(simple_project)], env={"CI": "true"})
        assert result.exit_code == 0, result.output
        assert "Running in CI mode - skipping uninstall prompt" in result.output
        assert "- left-pad" in result.output
        assert "- is-positive" in result.output
        assert runner.calls == []
        assert (simple_project / "package.json").read_bytes() == before

    def test_package_manager_and_timeout_flags(self, simple_project: Path, fakes):
        _, runner = fakes
        result = CliRunner().invoke(
            main,
            ["--root", str(simple_project), "--package-manager", "pnpm", "--timeout", "5"],
            input="y\n",
        )
        assert result.exit_code == 0, result.output
        assert runner.commands == [["pnpm", "remove", "left-pad", "is-positive"]]
        assert runner.calls[0]["timeout"] == 5.0

    def test_monorepo(self, basic_monorepo: Path, fakes):
        analyzer, runner = fakes
        result = CliRunner().invoke(main, ["--root", str(basic_monorepo)], input="y\nn\n")
        assert result.exit_code == 0, result.output
        assert "Found 3 folders with package.json" in result.output
        assert runner.commands == [["npm", "uninstall", "--no-audit", "left-pad"]]


# ── errors ──


class TestErrors:
    def test_missing_root(self, tmp_path: Path, fakes):
        result = CliRunner().invoke(main, ["--root", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Root directory not found" in result.output

    def test_bad_env_config(self, tmp_path: Path, fakes):
        result = CliRunner().invoke(
            main, ["--root", str(tmp_path)], env={"NPM_UNINSTALL_UNUSED_TIMEOUT": "soon"}
        )
        assert result.exit_code == 1
        assert "must be a number" in result.output

    def test_unknown_package_manager_from_env(self, tmp_path: Path, fakes):
        result = CliRunner().invoke(
            main, ["--root", str(tmp_path)], env={"NPM_UNINSTALL_UNUSED_PACKAGE_MANAGER": "bun"}
        )
        assert result.exit_code == 1
        assert "Unknown package manager 'bun'" in result.output

    def test_unknown_package_manager_flag(self, tmp_path: Path, fakes):
        result = CliRunner().invoke(main, ["--root", str(tmp_path), "--package-manager", "bun"])
        assert result.exit_code != 0

    def test_non_positive_timeout_flag(self, tmp_path: Path, fakes):
        result = CliRunner().invoke(main, ["--root", str(tmp_path), "--timeout", "0"])
        assert result.exit_code != 0
