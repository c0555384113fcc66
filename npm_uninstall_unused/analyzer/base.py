"""Core types and abstract base class for usage analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable

from npm_uninstall_unused.core.config import RunConfiguration
from npm_uninstall_unused.models import AnalysisResult, Workspace


@dataclass(frozen=True)
class AnalyzerOptions:
    """
    Options forwarded to the analyzer.

    ignore_dirs are excluded from the analyzer's own source scan.
    ignore_matches are package-name patterns never reported as unused.
    """

    ignore_dirs: frozenset[str] = frozenset()
    ignore_matches: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: RunConfiguration) -> AnalyzerOptions:
        return cls(ignore_dirs=config.ignore_dirs, ignore_matches=config.ignore_matches)


def matches_ignore(name: str, patterns: Iterable[str]) -> bool:
    """Case-sensitive, anchored shell-style match (``babel-*``, ``@types/*``)."""
    return any(fnmatchcase(name, pattern) for pattern in patterns)


class UsageAnalyzer(ABC):
    """
    Reports which declared packages of a workspace are unused in source.
    Produces exactly one AnalysisResult or raises AnalysisError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Analyzer identifier, e.g. 'depcheck'."""
        ...

    @abstractmethod
    def analyze(self, workspace: Workspace, options: AnalyzerOptions) -> AnalysisResult:
        """
        Analyze one workspace.

        Args:
            workspace: Workspace whose package.json is checked.
            options: Exclusions and ignore patterns.

        Returns:
            AnalysisResult with unused dependencies and devDependencies.
        """
        ...

    @staticmethod
    def apply_ignores(result: AnalysisResult, patterns: Iterable[str]) -> AnalysisResult:
        """Drop names matching *patterns* from both unused lists."""
        patterns = tuple(patterns)
        if not patterns:
            return result
        return AnalysisResult(
            dependencies=tuple(d for d in result.dependencies if not matches_ignore(d, patterns)),
            dev_dependencies=tuple(
                d for d in result.dev_dependencies if not matches_ignore(d, patterns)
            ),
            missing=result.missing,
        )
