"""Test doubles for npm_uninstall_unused — no npm, npx or depcheck needed.

Usage::

    from npm_uninstall_unused.testing import FakeAnalyzer, ScriptedConfirmer

    analyzer = FakeAnalyzer({"packages/a": AnalysisResult(dependencies=("left-pad",))})
    confirmer = ScriptedConfirmer([True, False])
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable, Mapping

from npm_uninstall_unused.analyzer.base import AnalyzerOptions, UsageAnalyzer
from npm_uninstall_unused.exceptions import AnalysisError
from npm_uninstall_unused.manifest import read_manifest
from npm_uninstall_unused.models import AnalysisResult, Workspace


class FakeAnalyzer(UsageAnalyzer):
    """Return canned results keyed by workspace relative path.

    A value that is an exception is raised instead. Workspaces not in
    *results* are derived from package.json: every declared package listed
    in *unused* is reported (handy for on-disk fixture trees).
    """

    def __init__(
        self,
        results: Mapping[str, AnalysisResult | Exception] | None = None,
        *,
        unused: Iterable[str] = (),
    ) -> None:
        self._results = dict(results or {})
        self._unused = set(unused)
        self.calls: list[tuple[Workspace, AnalyzerOptions]] = []

    @property
    def name(self) -> str:
        return "fake"

    def analyze(self, workspace: Workspace, options: AnalyzerOptions) -> AnalysisResult:
        self.calls.append((workspace, options))
        canned = self._results.get(workspace.relative_path)
        if isinstance(canned, Exception):
            raise canned
        if canned is not None:
            return self.apply_ignores(canned, options.ignore_matches)

        manifest = read_manifest(workspace.path)
        result = AnalysisResult(
            dependencies=tuple(d for d in manifest.dependencies if d in self._unused),
            dev_dependencies=tuple(d for d in manifest.dev_dependencies if d in self._unused),
        )
        return self.apply_ignores(result, options.ignore_matches)


class FailingAnalyzer(FakeAnalyzer):
    """Raise AnalysisError for every workspace."""

    def analyze(self, workspace: Workspace, options: AnalyzerOptions) -> AnalysisResult:
        self.calls.append((workspace, options))
        raise AnalysisError(f"analysis failed for {workspace.relative_path}")


class ScriptedConfirmer:
    """Interactive confirmer answering from a script; records the questions asked."""

    interactive = True

    def __init__(self, answers: Iterable[bool] = ()) -> None:
        self._answers = list(answers)
        self.questions: list[str] = []

    def confirm(self, message: str, default: bool = False) -> bool:
        self.questions.append(message)
        if not self._answers:
            return default
        return self._answers.pop(0)


class RecordingRunner:
    """Stand-in for ``subprocess.run`` that records every command.

    *returncode*, *stdout* and *stderr* shape the fake result; *raises* makes
    every call raise that exception instead.
    """

    def __init__(
        self,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        raises: BaseException | None = None,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.raises = raises
        self.calls: list[dict] = []

    @property
    def commands(self) -> list[list[str]]:
        return [c["args"] for c in self.calls]

    def __call__(self, args, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append({"args": list(args), **kwargs})
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(
            args=args, returncode=self.returncode, stdout=self.stdout, stderr=self.stderr
        )
