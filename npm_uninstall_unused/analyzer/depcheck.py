"""depcheck adapter — runs the depcheck CLI and parses its JSON report."""

from __future__ import annotations

import json
import subprocess
from typing import Sequence

import structlog

from npm_uninstall_unused.analyzer.base import AnalyzerOptions, UsageAnalyzer
from npm_uninstall_unused.core.config import DEFAULT_DEPCHECK_COMMAND
from npm_uninstall_unused.exceptions import AnalysisError
from npm_uninstall_unused.manifest import read_manifest
from npm_uninstall_unused.models import AnalysisResult, Workspace

log = structlog.get_logger("npm_uninstall_unused.analyzer")


class DepcheckAnalyzer(UsageAnalyzer):
    """
    Run ``depcheck <path> --json`` and read the unused lists from stdout.

    depcheck exits non-zero whenever it finds something unused, so the exit
    code is only consulted when stdout holds no JSON report.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_DEPCHECK_COMMAND,
        timeout: float | None = None,
    ) -> None:
        self.command = list(command)
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "depcheck"

    def build_command(self, workspace: Workspace, options: AnalyzerOptions) -> list[str]:
        cmd = [*self.command, str(workspace.path), "--json"]
        if options.ignore_matches:
            cmd.append("--ignores=" + ",".join(options.ignore_matches))
        if options.ignore_dirs:
            cmd.append("--ignore-patterns=" + ",".join(sorted(options.ignore_dirs)))
        return cmd

    def analyze(self, workspace: Workspace, options: AnalyzerOptions) -> AnalysisResult:
        manifest = read_manifest(workspace.path)
        if not manifest.declares_anything:
            log.debug(
                "analyzer.nothing_declared",
                workspace=workspace.relative_path,
                package=manifest.name,
            )
            return AnalysisResult()

        cmd = self.build_command(workspace, options)
        log.debug(
            "analyzer.run",
            analyzer=self.name,
            workspace=workspace.relative_path,
            package=manifest.name,
            cmd=cmd,
        )
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=str(workspace.path),
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise AnalysisError(
                f"depcheck timed out after {e.timeout}s in {workspace.relative_path}"
            ) from e
        except OSError as e:
            raise AnalysisError(f"Failed to start depcheck ({cmd[0]}): {e}") from e

        report = self._parse_report(proc.stdout)
        if report is None:
            detail = proc.stderr.strip() or proc.stdout.strip() or "no output"
            raise AnalysisError(
                f"depcheck failed in {workspace.relative_path} "
                f"(exit {proc.returncode}): {detail}"
            )

        result = AnalysisResult(
            dependencies=tuple(report.get("dependencies") or ()),
            dev_dependencies=tuple(report.get("devDependencies") or ()),
            missing=dict(report.get("missing") or {}),
        )
        return self.apply_ignores(result, options.ignore_matches)

    @staticmethod
    def _parse_report(stdout: str) -> dict | None:
        text = stdout.strip()
        if not text:
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        for key in ("dependencies", "devDependencies"):
            if not isinstance(data.get(key, []), list):
                return None
        if not isinstance(data.get("missing", {}), dict):
            return None
        return data
