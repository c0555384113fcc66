"""Run configuration — read once from the environment, frozen for the run.

Environment variables:
    CI                                   "true" disables prompts and uninstalls
    NPM_UNINSTALL_UNUSED_PACKAGE_MANAGER npm | yarn | pnpm | auto (default: npm)
    NPM_UNINSTALL_UNUSED_TIMEOUT         package-manager timeout in seconds (default: 60)
    NPM_UNINSTALL_UNUSED_DEPCHECK        analyzer command prefix (default: npx --yes depcheck)
    NPM_UNINSTALL_UNUSED_IGNORE_DIRS     comma-separated directory names
    NPM_UNINSTALL_UNUSED_IGNORE_MATCHES  comma-separated package-name patterns
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field

from npm_uninstall_unused.exceptions import ConfigError

DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({"sandbox", "dist", "build", "node_modules"})
DEFAULT_IGNORE_MATCHES: tuple[str, ...] = ("eslint", "babel-*", "typescript")
DEFAULT_PACKAGE_MANAGER = "npm"
DEFAULT_UNINSTALL_TIMEOUT = 60.0
DEFAULT_DEPCHECK_COMMAND: tuple[str, ...] = ("npx", "--yes", "depcheck")

_ENV_PREFIX = "NPM_UNINSTALL_UNUSED_"


def _env_list(key: str) -> list[str] | None:
    raw = os.environ.get(_ENV_PREFIX + key)
    if raw is None:
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(_ENV_PREFIX + key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{_ENV_PREFIX}{key} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{_ENV_PREFIX}{key} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class RunConfiguration:
    """Process-wide settings, read-only for the duration of a sweep."""

    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS
    ignore_matches: tuple[str, ...] = DEFAULT_IGNORE_MATCHES
    ci: bool = False
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    uninstall_timeout: float = DEFAULT_UNINSTALL_TIMEOUT
    depcheck_command: tuple[str, ...] = field(default=DEFAULT_DEPCHECK_COMMAND)

    @classmethod
    def from_env(cls) -> RunConfiguration:
        ignore_dirs = _env_list("IGNORE_DIRS")
        ignore_matches = _env_list("IGNORE_MATCHES")
        depcheck = os.environ.get(_ENV_PREFIX + "DEPCHECK")
        depcheck_command = tuple(shlex.split(depcheck)) if depcheck else DEFAULT_DEPCHECK_COMMAND
        if not depcheck_command:
            raise ConfigError(f"{_ENV_PREFIX}DEPCHECK must not be empty")
        return cls(
            ignore_dirs=frozenset(ignore_dirs) if ignore_dirs is not None else DEFAULT_IGNORE_DIRS,
            ignore_matches=(
                tuple(ignore_matches) if ignore_matches is not None else DEFAULT_IGNORE_MATCHES
            ),
            ci=os.environ.get("CI") == "true",
            package_manager=os.environ.get(
                _ENV_PREFIX + "PACKAGE_MANAGER", DEFAULT_PACKAGE_MANAGER
            ).lower(),
            uninstall_timeout=_env_float("TIMEOUT", DEFAULT_UNINSTALL_TIMEOUT),
            depcheck_command=depcheck_command,
        )
