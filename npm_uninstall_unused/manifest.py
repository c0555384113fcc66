"""Minimal package.json reader — only what the sweep needs to drive iteration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from npm_uninstall_unused.exceptions import ManifestError
from npm_uninstall_unused.models import MANIFEST_NAME


@dataclass
class Manifest:
    name: str | None
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    @property
    def declares_anything(self) -> bool:
        return bool(self.dependencies or self.dev_dependencies)


def _section(data: dict, key: str, path: Path) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(str(path), f"'{key}' must be an object")
    return {str(k): str(v) for k, v in value.items()}


def read_manifest(workspace_path: Path) -> Manifest:
    """Parse ``package.json`` in *workspace_path*.

    Raises :class:`ManifestError` if the file is unreadable, is not valid
    JSON, or its dependency sections are not objects.
    """
    path = workspace_path / MANIFEST_NAME
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise ManifestError(str(path), f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ManifestError(str(path), "top level must be an object")

    name = data.get("name")
    return Manifest(
        name=name if isinstance(name, str) else None,
        dependencies=_section(data, "dependencies", path),
        dev_dependencies=_section(data, "devDependencies", path),
    )
