"""Uninstall executor — runs the package manager's removal command in a workspace."""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

import structlog

from npm_uninstall_unused.core.config import DEFAULT_PACKAGE_MANAGER, DEFAULT_UNINSTALL_TIMEOUT
from npm_uninstall_unused.exceptions import ConfigError, UninstallError
from npm_uninstall_unused.models import ExecutionOutcome, UninstallRequest, Workspace
from npm_uninstall_unused.package_managers import (
    AUTO,
    PACKAGE_MANAGERS,
    available_package_managers,
    resolve_package_manager,
)

log = structlog.get_logger("npm_uninstall_unused.uninstaller")

Runner = Callable[..., subprocess.CompletedProcess]


class UninstallExecutor:
    """Remove packages from one workspace, one dependency class per call.

    Never raises for package-manager failures: the error is carried in the
    returned :class:`ExecutionOutcome` so the sweep can continue.
    """

    def __init__(
        self,
        package_manager: str = DEFAULT_PACKAGE_MANAGER,
        timeout: float | None = DEFAULT_UNINSTALL_TIMEOUT,
        runner: Runner = subprocess.run,
        on_command: Callable[[list[str]], None] | None = None,
    ) -> None:
        if package_manager != AUTO and package_manager not in PACKAGE_MANAGERS:
            raise ConfigError(
                f"Unknown package manager '{package_manager}' "
                f"(expected one of: {', '.join(available_package_managers())})"
            )
        self.package_manager = package_manager
        self.timeout = timeout
        self._runner = runner
        self._on_command = on_command

    def uninstall(
        self, workspace: Workspace, packages: Sequence[str], dev: bool = False
    ) -> ExecutionOutcome:
        request = UninstallRequest(workspace=workspace, packages=tuple(packages), dev=dev)
        if not request.packages:
            return ExecutionOutcome(request=request)

        pm = resolve_package_manager(self.package_manager, workspace.path)
        cmd = pm.build_command(request.packages, dev=dev)
        if self._on_command is not None:
            self._on_command(cmd)
        log.info("uninstall.run", workspace=workspace.relative_path, cmd=cmd)

        try:
            proc = self._runner(
                cmd,
                capture_output=True,
                text=True,
                cwd=str(workspace.path),
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            return self._failed(
                request, cmd, f"{cmd[0]} timed out after {e.timeout}s", stderr=_text(e.stderr)
            )
        except OSError as e:
            return self._failed(request, cmd, f"Failed to start {cmd[0]}: {e}")

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            return self._failed(
                request,
                cmd,
                f"Command failed (exit {proc.returncode}): {stderr or 'no output'}",
                stdout=proc.stdout or "",
                stderr=stderr,
            )

        log.info("uninstall.ok", workspace=workspace.relative_path, label=request.label)
        return ExecutionOutcome(request=request, command=cmd, stdout=proc.stdout or "")

    @staticmethod
    def _failed(
        request: UninstallRequest,
        cmd: list[str],
        message: str,
        stdout: str = "",
        stderr: str = "",
    ) -> ExecutionOutcome:
        log.warning(
            "uninstall.failed",
            workspace=request.workspace.relative_path,
            label=request.label,
            error=message,
        )
        return ExecutionOutcome(
            request=request,
            command=cmd,
            stdout=stdout,
            error=UninstallError(message, command=cmd, stderr=stderr),
        )


def _text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value
