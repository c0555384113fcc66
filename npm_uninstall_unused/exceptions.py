"""Custom exceptions for npm-uninstall-unused."""


class SweepError(Exception):
    """Base exception for all sweep errors."""


class ConfigError(SweepError):
    """Raised when the run configuration is invalid."""


class WorkspaceAccessError(SweepError, OSError):
    """Raised when the scan root cannot be read."""


class AnalysisError(SweepError):
    """Raised when dependency-usage analysis fails for a workspace."""


class ManifestError(AnalysisError):
    """Raised when a package.json cannot be interpreted."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid manifest {path}: {reason}")


class UninstallError(SweepError):
    """Raised when the package manager fails to remove packages."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        self.command = command or []
        self.stderr = stderr
        super().__init__(message)
