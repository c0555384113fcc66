"""Package-manager registry — how each tool spells "remove these packages"."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from npm_uninstall_unused.exceptions import ConfigError

AUTO = "auto"


@dataclass(frozen=True)
class PackageManager:
    """Removal command shape: ``<remove_command> [dev_flag] [extra_flags] <name>...``."""

    name: str
    remove_command: tuple[str, ...]
    dev_flag: str | None = None
    extra_flags: tuple[str, ...] = ()
    lockfiles: tuple[str, ...] = field(default=())

    def build_command(self, packages: list[str] | tuple[str, ...], dev: bool = False) -> list[str]:
        cmd = list(self.remove_command)
        if dev and self.dev_flag:
            cmd.append(self.dev_flag)
        cmd.extend(self.extra_flags)
        cmd.extend(packages)
        return cmd


PACKAGE_MANAGERS: dict[str, PackageManager] = {}


def register_package_manager(pm: PackageManager) -> None:
    PACKAGE_MANAGERS[pm.name] = pm


register_package_manager(
    PackageManager(
        name="npm",
        remove_command=("npm", "uninstall"),
        dev_flag="--save-dev",
        extra_flags=("--no-audit",),
        lockfiles=("package-lock.json", "npm-shrinkwrap.json"),
    )
)
register_package_manager(
    PackageManager(
        name="yarn",
        remove_command=("yarn", "remove"),
        lockfiles=("yarn.lock",),
    )
)
register_package_manager(
    PackageManager(
        name="pnpm",
        remove_command=("pnpm", "remove"),
        dev_flag="--save-dev",
        lockfiles=("pnpm-lock.yaml",),
    )
)

# Lockfile detection order for "auto"
_DETECTION_ORDER = ("pnpm", "yarn", "npm")


def available_package_managers() -> list[str]:
    return sorted(PACKAGE_MANAGERS) + [AUTO]


def detect_package_manager(workspace_path: Path) -> PackageManager:
    """Pick a package manager by the lockfile present in *workspace_path*; npm otherwise."""
    for name in _DETECTION_ORDER:
        pm = PACKAGE_MANAGERS[name]
        if any((workspace_path / lockfile).is_file() for lockfile in pm.lockfiles):
            return pm
    return PACKAGE_MANAGERS["npm"]


def resolve_package_manager(name: str, workspace_path: Path) -> PackageManager:
    if name == AUTO:
        return detect_package_manager(workspace_path)
    pm = PACKAGE_MANAGERS.get(name)
    if pm is None:
        raise ConfigError(
            f"Unknown package manager '{name}' "
            f"(expected one of: {', '.join(available_package_managers())})"
        )
    return pm
