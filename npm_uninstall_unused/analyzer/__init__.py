"""Dependency-usage analysis — contract and the depcheck adapter."""

from npm_uninstall_unused.analyzer.base import AnalyzerOptions, UsageAnalyzer, matches_ignore
from npm_uninstall_unused.analyzer.depcheck import DepcheckAnalyzer

__all__ = ["AnalyzerOptions", "DepcheckAnalyzer", "UsageAnalyzer", "matches_ignore"]
