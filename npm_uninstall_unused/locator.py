"""Locate workspaces (directories holding a package.json) under a root."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from npm_uninstall_unused.exceptions import WorkspaceAccessError
from npm_uninstall_unused.models import DEPENDENCY_CACHE_DIR, MANIFEST_NAME, Workspace

log = structlog.get_logger("npm_uninstall_unused.locator")


class WorkspaceLocator:
    """Depth-first, pre-order search for workspaces.

    ``node_modules`` is always excluded; *ignore_dirs* adds further directory
    names (e.g. ``dist``, ``build``) that are neither reported nor descended
    into. The root itself is never excluded by name.
    """

    def __init__(self, ignore_dirs: frozenset[str] | set[str] = frozenset()) -> None:
        self.ignore_dirs = frozenset(ignore_dirs) | {DEPENDENCY_CACHE_DIR}

    def locate(self, root: str | Path) -> list[Workspace]:
        root_path = Path(root).resolve()
        if not root_path.is_dir():
            raise WorkspaceAccessError(f"Root directory not found: {root}")
        try:
            root_children = self._subdirectories(root_path)
        except OSError as e:
            raise WorkspaceAccessError(f"Cannot read root directory {root_path}: {e}") from e

        results: list[Workspace] = []
        if self._has_manifest(root_path):
            results.append(Workspace(path=root_path, relative_path="."))

        # Children are pushed in reverse so they pop in name order.
        stack: list[Path] = list(reversed(root_children))
        while stack:
            current = stack.pop()
            if self._has_manifest(current):
                results.append(
                    Workspace(path=current, relative_path=str(current.relative_to(root_path)))
                )
            try:
                children = self._subdirectories(current)
            except OSError as e:
                log.warning("locator.skip_unreadable", path=str(current), error=str(e))
                continue
            stack.extend(reversed(children))

        log.debug("locator.done", root=str(root_path), workspaces=len(results))
        return results

    def _subdirectories(self, directory: Path) -> list[Path]:
        """Non-excluded, non-symlink subdirectories of *directory*, sorted by name."""
        children: list[Path] = []
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.name in self.ignore_dirs:
                    continue
                try:
                    if entry.is_dir(follow_symlinks=False):
                        children.append(Path(entry.path))
                except OSError:
                    log.warning("locator.skip_unreadable", path=entry.path)
        children.sort(key=lambda p: p.name)
        return children

    @staticmethod
    def _has_manifest(directory: Path) -> bool:
        try:
            return (directory / MANIFEST_NAME).is_file()
        except OSError:
            return False
