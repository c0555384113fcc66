"""npm-uninstall-unused: find and remove unused npm dependencies across workspaces."""

__version__ = "1.0.0"

from npm_uninstall_unused.analyzer import AnalyzerOptions, DepcheckAnalyzer, UsageAnalyzer
from npm_uninstall_unused.core.config import RunConfiguration
from npm_uninstall_unused.driver import SweepDriver, SweepSummary, WorkspaceStatus
from npm_uninstall_unused.locator import WorkspaceLocator
from npm_uninstall_unused.models import AnalysisResult, Decision, ExecutionOutcome, Workspace
from npm_uninstall_unused.reporter import Reporter
from npm_uninstall_unused.uninstaller import UninstallExecutor

__all__ = [
    "AnalysisResult",
    "AnalyzerOptions",
    "Decision",
    "DepcheckAnalyzer",
    "ExecutionOutcome",
    "Reporter",
    "RunConfiguration",
    "SweepDriver",
    "SweepSummary",
    "UninstallExecutor",
    "UsageAnalyzer",
    "Workspace",
    "WorkspaceLocator",
    "WorkspaceStatus",
]
