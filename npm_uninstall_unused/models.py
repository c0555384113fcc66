"""Data models shared by the locator, analyzer, executor and driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from npm_uninstall_unused.exceptions import UninstallError

MANIFEST_NAME = "package.json"
DEPENDENCY_CACHE_DIR = "node_modules"


@dataclass(frozen=True)
class Workspace:
    """A directory with its own package.json."""

    path: Path  # absolute
    relative_path: str  # relative to the invocation root, "." for the root

    @property
    def manifest_path(self) -> Path:
        return self.path / MANIFEST_NAME


@dataclass(frozen=True)
class AnalysisResult:
    """Unused packages reported for one workspace."""

    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()
    missing: dict[str, list[str]] = field(default_factory=dict, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.dependencies and not self.dev_dependencies


@dataclass(frozen=True)
class UninstallRequest:
    workspace: Workspace
    packages: tuple[str, ...]
    dev: bool = False

    @property
    def label(self) -> str:
        return "devDependencies" if self.dev else "dependencies"


@dataclass
class ExecutionOutcome:
    """Result of one removal command (or of a skipped, empty one)."""

    request: UninstallRequest
    command: list[str] = field(default_factory=list)
    stdout: str = ""
    error: UninstallError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def skipped(self) -> bool:
        return not self.command


class Decision(Enum):
    """Operator decision for one workspace."""

    PROCEED = "proceed"
    SKIP = "skip"
