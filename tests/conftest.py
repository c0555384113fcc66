"""Shared pytest fixtures for npm-uninstall-unused tests."""

import json
import os
from pathlib import Path

import pytest

_ENV_KEYS = [
    "CI",
    "NPM_UNINSTALL_UNUSED_PACKAGE_MANAGER",
    "NPM_UNINSTALL_UNUSED_TIMEOUT",
    "NPM_UNINSTALL_UNUSED_DEPCHECK",
    "NPM_UNINSTALL_UNUSED_IGNORE_DIRS",
    "NPM_UNINSTALL_UNUSED_IGNORE_MATCHES",
    "NPM_UNINSTALL_UNUSED_LOG_LEVEL",
    "NPM_UNINSTALL_UNUSED_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never inherit CI or tool settings from the machine running them."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def write_manifest(directory: Path, **fields) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(fields, indent=2))
    return path


@pytest.fixture
def manifest():
    return write_manifest


@pytest.fixture
def simple_project(tmp_path: Path) -> Path:
    """One workspace: express/lodash used, left-pad/is-positive unused."""
    write_manifest(
        tmp_path,
        name="test-project",
        dependencies={
            "express": "^4.17.1",
            "lodash": "^4.17.21",
            "left-pad": "^1.3.0",
            "is-positive": "^1.0.0",
        },
    )
    (tmp_path / "index.js").write_text(
        "const express = require('express');\nconst _ = require('lodash');\n"
    )
    return tmp_path


@pytest.fixture
def basic_monorepo(tmp_path: Path) -> Path:
    write_manifest(tmp_path, name="test-monorepo", private=True, workspaces=["packages/*"])
    write_manifest(
        tmp_path / "packages" / "package-a",
        name="package-a",
        dependencies={"express": "^4.17.1", "left-pad": "^1.3.0"},
    )
    write_manifest(
        tmp_path / "packages" / "package-b",
        name="package-b",
        dependencies={"lodash": "^4.17.21", "is-positive": "^1.0.0"},
    )
    # Installed copies must never be treated as workspaces.
    write_manifest(tmp_path / "packages" / "package-a" / "node_modules" / "express", name="express")
    return tmp_path


@pytest.fixture
def chdir(monkeypatch):
    def _chdir(path: Path) -> None:
        monkeypatch.chdir(os.fspath(path))

    return _chdir
