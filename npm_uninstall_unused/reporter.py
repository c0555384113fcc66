"""Operator-facing report and the yes/no confirmation step."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import click
import structlog

from npm_uninstall_unused.core.config import RunConfiguration
from npm_uninstall_unused.models import AnalysisResult, Decision, ExecutionOutcome, Workspace

log = structlog.get_logger("npm_uninstall_unused.reporter")


@runtime_checkable
class Confirmer(Protocol):
    """Capability that turns a question into a yes/no decision."""

    interactive: bool

    def confirm(self, message: str, default: bool = False) -> bool: ...


class ClickConfirmer:
    """Prompt on the terminal; Ctrl-C or a closed stdin counts as "no"."""

    interactive = True

    def confirm(self, message: str, default: bool = False) -> bool:
        try:
            return click.confirm(message, default=default)
        except click.Abort:
            click.echo()
            log.info("reporter.prompt_aborted", question=message)
            return False


class NonInteractiveConfirmer:
    """Never blocks; always answers the default."""

    interactive = False

    def confirm(self, message: str, default: bool = False) -> bool:
        return default


def build_confirmer(config: RunConfiguration) -> Confirmer:
    if config.ci:
        return NonInteractiveConfirmer()
    return ClickConfirmer()


class Reporter:
    """Print findings and ask whether to uninstall them."""

    def __init__(self, confirmer: Confirmer) -> None:
        self.confirmer = confirmer

    def announce_found(self, count: int) -> None:
        click.secho(f"Found {count} folders with package.json", fg="cyan")

    def announce_scan(self, workspace: Workspace) -> None:
        click.secho(
            f"\nScanning folder: {workspace.relative_path} for unused dependencies...\n",
            fg="cyan",
        )

    def report_and_confirm(self, workspace: Workspace, result: AnalysisResult) -> Decision:
        if not self.report(workspace, result):
            return Decision.SKIP
        return self.confirm(workspace)

    def report(self, workspace: Workspace, result: AnalysisResult) -> bool:
        """Print the findings; returns False when there is nothing to uninstall."""
        rel = workspace.relative_path
        if result.is_empty:
            click.secho(f"No unused dependencies found in {rel}!", fg="green")
            return False

        if result.dependencies:
            click.secho(f"Unused Dependencies Found in {rel}:\n", fg="yellow")
            for dep in result.dependencies:
                click.secho(f"- {dep}", fg="red")

        if result.dev_dependencies:
            click.secho(f"Unused DevDependencies Found in {rel}:\n", fg="yellow")
            for dep in result.dev_dependencies:
                click.secho(f"- {dep}", fg="blue")

        if result.missing:
            click.secho(f"Used but not declared in {rel} (not changed):", fg="bright_black")
            for dep, files in sorted(result.missing.items()):
                click.secho(f"- {dep} ({len(files)} file(s))", fg="bright_black")
        return True

    def confirm(self, workspace: Workspace) -> Decision:
        rel = workspace.relative_path
        if not self.confirmer.interactive:
            click.secho("\nRunning in CI mode - skipping uninstall prompt\n", fg="bright_black")
            return Decision.SKIP

        if self.confirmer.confirm(
            f"Do you want to uninstall these unused packages in {rel}?", default=False
        ):
            return Decision.PROCEED
        click.secho("\nNo packages were uninstalled.\n", fg="bright_black")
        return Decision.SKIP

    def announce_command(self, cmd: list[str]) -> None:
        click.secho(f"\nRunning: {' '.join(cmd)}\n", fg="blue")

    def report_outcome(self, outcome: ExecutionOutcome) -> None:
        if outcome.skipped:
            return
        label = outcome.request.label
        if outcome.ok:
            click.secho(f"Unused {label} uninstalled successfully!\n", fg="green")
            if outcome.stdout:
                click.echo(outcome.stdout)
        else:
            click.secho(f"Error uninstalling {label}: {outcome.error}", fg="red", err=True)

    def report_error(self, workspace: Workspace, error: BaseException) -> None:
        click.secho(
            f"Error analyzing {workspace.relative_path}: {error}", fg="red", err=True
        )
