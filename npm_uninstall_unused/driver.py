"""SweepDriver — locate, analyze, report, confirm, uninstall; one workspace at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

from npm_uninstall_unused.analyzer.base import AnalyzerOptions, UsageAnalyzer
from npm_uninstall_unused.core.config import RunConfiguration
from npm_uninstall_unused.exceptions import AnalysisError
from npm_uninstall_unused.locator import WorkspaceLocator
from npm_uninstall_unused.models import AnalysisResult, Decision, ExecutionOutcome, Workspace
from npm_uninstall_unused.reporter import Reporter
from npm_uninstall_unused.uninstaller import UninstallExecutor

log = structlog.get_logger("npm_uninstall_unused.driver")


class DriverState(Enum):
    IDLE = "idle"
    LOCATING = "locating"
    ANALYZING = "analyzing"
    REPORTING = "reporting"
    CONFIRMING = "confirming"
    UNINSTALLING = "uninstalling"
    DONE = "done"


class WorkspaceStatus(Enum):
    CLEAN = "clean"  # nothing unused
    SKIPPED = "skipped"  # declined, or CI mode
    UNINSTALLED = "uninstalled"
    FAILED = "failed"  # at least one removal command failed
    ANALYSIS_FAILED = "analysis_failed"


@dataclass
class WorkspaceReport:
    workspace: Workspace
    status: WorkspaceStatus
    result: AnalysisResult | None = None
    outcomes: list[ExecutionOutcome] = field(default_factory=list)
    error: str | None = None


@dataclass
class SweepSummary:
    """What happened to every located workspace."""

    reports: list[WorkspaceReport] = field(default_factory=list)

    @property
    def workspaces(self) -> list[Workspace]:
        return [r.workspace for r in self.reports]

    def by_status(self, status: WorkspaceStatus) -> list[WorkspaceReport]:
        return [r for r in self.reports if r.status is status]


class SweepDriver:
    """
    Best-effort sweep: a failure in one workspace is logged and printed, then
    the next workspace is processed. Only an inaccessible root (raised by the
    locator before the sweep starts) propagates. No retries.
    """

    def __init__(
        self,
        config: RunConfiguration,
        analyzer: UsageAnalyzer,
        executor: UninstallExecutor,
        reporter: Reporter,
        locator: WorkspaceLocator | None = None,
    ) -> None:
        self.config = config
        self.analyzer = analyzer
        self.executor = executor
        self.reporter = reporter
        self.locator = locator or WorkspaceLocator(config.ignore_dirs)
        self.options = AnalyzerOptions.from_config(config)
        self.state = DriverState.IDLE

    def run(self, root: str | Path) -> SweepSummary:
        self.state = DriverState.LOCATING
        workspaces = self.locator.locate(root)
        self.reporter.announce_found(len(workspaces))
        log.info(
            "sweep.start",
            root=str(root),
            workspaces=len(workspaces),
            analyzer=self.analyzer.name,
            ci=self.config.ci,
        )

        summary = SweepSummary()
        for workspace in workspaces:
            summary.reports.append(self._process(workspace))

        self.state = DriverState.DONE
        log.info("sweep.done", workspaces=len(summary.reports))
        return summary

    def _process(self, workspace: Workspace) -> WorkspaceReport:
        structlog.contextvars.bind_contextvars(workspace=workspace.relative_path)
        try:
            return self._process_one(workspace)
        except Exception as e:
            log.exception("sweep.workspace_failed")
            self.reporter.report_error(workspace, e)
            return WorkspaceReport(
                workspace=workspace, status=WorkspaceStatus.FAILED, error=str(e)
            )
        finally:
            structlog.contextvars.unbind_contextvars("workspace")

    def _process_one(self, workspace: Workspace) -> WorkspaceReport:
        self.state = DriverState.ANALYZING
        self.reporter.announce_scan(workspace)
        try:
            result = self.analyzer.analyze(workspace, self.options)
        except AnalysisError as e:
            log.info("sweep.analysis_failed", analyzer=self.analyzer.name, error=str(e))
            self.reporter.report_error(workspace, e)
            return WorkspaceReport(
                workspace=workspace, status=WorkspaceStatus.ANALYSIS_FAILED, error=str(e)
            )

        self.state = DriverState.REPORTING
        if not self.reporter.report(workspace, result):
            return WorkspaceReport(workspace=workspace, status=WorkspaceStatus.CLEAN, result=result)

        self.state = DriverState.CONFIRMING
        decision = self.reporter.confirm(workspace)
        if decision is not Decision.PROCEED:
            return WorkspaceReport(
                workspace=workspace, status=WorkspaceStatus.SKIPPED, result=result
            )

        self.state = DriverState.UNINSTALLING
        # Sequential: both commands rewrite the same package.json and lockfile.
        outcomes = [
            self.executor.uninstall(workspace, result.dependencies, dev=False),
            self.executor.uninstall(workspace, result.dev_dependencies, dev=True),
        ]
        for outcome in outcomes:
            self.reporter.report_outcome(outcome)

        failed = [o for o in outcomes if not o.ok]
        return WorkspaceReport(
            workspace=workspace,
            status=WorkspaceStatus.FAILED if failed else WorkspaceStatus.UNINSTALLED,
            result=result,
            outcomes=outcomes,
            error="; ".join(str(o.error) for o in failed) or None,
        )
