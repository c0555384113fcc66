"""CLI entry point: npm-uninstall-unused.

Scans the current directory (or --root) for folders with a package.json,
reports unused dependencies and offers to uninstall them:

    npm-uninstall-unused
    npm-uninstall-unused --root ./packages --package-manager auto
    CI=true npm-uninstall-unused           # report only, never uninstall
"""

from __future__ import annotations

import dataclasses
import os
import sys

import click
import structlog

from npm_uninstall_unused.analyzer.depcheck import DepcheckAnalyzer
from npm_uninstall_unused.core.config import RunConfiguration
from npm_uninstall_unused.core.logging import setup_logging
from npm_uninstall_unused.driver import SweepDriver
from npm_uninstall_unused.exceptions import ConfigError, WorkspaceAccessError
from npm_uninstall_unused.package_managers import available_package_managers
from npm_uninstall_unused.reporter import Reporter, build_confirmer
from npm_uninstall_unused.uninstaller import UninstallExecutor

log = structlog.get_logger("npm_uninstall_unused.cli")


def build_driver(config: RunConfiguration) -> SweepDriver:
    """Wire the default collaborators for *config*."""
    reporter = Reporter(build_confirmer(config))
    executor = UninstallExecutor(
        package_manager=config.package_manager,
        timeout=config.uninstall_timeout,
        on_command=reporter.announce_command,
    )
    analyzer = DepcheckAnalyzer(command=config.depcheck_command)
    return SweepDriver(config=config, analyzer=analyzer, executor=executor, reporter=reporter)


@click.command()
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to scan (default: current directory)",
)
@click.option(
    "--package-manager",
    type=click.Choice(available_package_managers()),
    default=None,
    help="Package manager used to uninstall (default: npm, or $NPM_UNINSTALL_UNUSED_PACKAGE_MANAGER)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for each uninstall command",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(root: str | None, package_manager: str | None, timeout: float | None, verbose: bool) -> None:
    """Detect and uninstall unused npm dependencies in every workspace."""
    setup_logging(verbose=verbose)

    try:
        config = RunConfiguration.from_env()
        overrides: dict = {}
        if package_manager is not None:
            overrides["package_manager"] = package_manager
        if timeout is not None:
            overrides["uninstall_timeout"] = timeout
        if overrides:
            config = dataclasses.replace(config, **overrides)
        driver = build_driver(config)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    scan_root = root or os.getcwd()
    try:
        driver.run(scan_root)
    except WorkspaceAccessError as e:
        log.error("sweep.root_inaccessible", root=scan_root, error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
